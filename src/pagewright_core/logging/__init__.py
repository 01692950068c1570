from pagewright_core.logging.logger import (
    create_config_logger as create_config_logger,
    create_isolated_logger as create_isolated_logger,
    create_null_logger as create_null_logger,
)
