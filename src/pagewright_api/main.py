import logging

from pagewright_api.app import create_app
from pagewright_core.facade.workbench import Workbench
from pagewright_core.logging import create_config_logger
from pagewright_core.models.config import PagewrightConfig

config = PagewrightConfig()

# The "pagewright" logger owns the console and file handlers
logger = create_config_logger(config)
logger.info("Logger initialized.")

# Route FastAPI, Uvicorn and module loggers through the same handlers without duplication
logging.basicConfig(level=logger.level, handlers=logger.handlers, force=True)
for uvicorn_logger_name in ["uvicorn", "uvicorn.error", "uvicorn.access"]:
    uvicorn_logger = logging.getLogger(uvicorn_logger_name)
    uvicorn_logger.handlers.clear()
    uvicorn_logger.propagate = False
    uvicorn_logger.setLevel(logger.level)
    for handler in logger.handlers:
        uvicorn_logger.addHandler(handler)

app = create_app(config, workbench=Workbench.from_config(config, logger=logger))
