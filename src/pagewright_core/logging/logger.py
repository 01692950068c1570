import logging
import sys
from pathlib import Path
from typing import Optional

DEFAULT_FORMAT = '[%(asctime)s] %(name)s - %(levelname)s - %(message)s'


def _reset_handlers(logger: logging.Logger) -> None:
    # Handlers from a previous configuration may hold an open log file
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def create_isolated_logger(name: str, level: int = logging.INFO,
                           log_format: str = None,
                           propagate: bool = False,
                           add_console_handler: bool = True,
                           add_file_handler: bool = False,
                           file_path: Optional[str] = None) -> logging.Logger:
    """
    Configure a named logger with its own handlers.

    Calling this again for the same name replaces the handlers of the
    previous call, so an application can reconfigure its logger when the
    configuration changes.

    Args:
        name: Logger name (e.g. "pagewright")
        level: Logging level (default: logging.INFO)
        log_format: Format of each record (default: DEFAULT_FORMAT)
        propagate: Whether records also reach the parent loggers (default: False)
        add_console_handler: Write records to standard output (default: True)
        add_file_handler: Append records to ``file_path`` (default: False)
        file_path: The log file, required with ``add_file_handler``

    Returns:
        The configured logger
    """
    if add_file_handler and not file_path:
        raise ValueError('A file path is required to log to a file')

    logger = logging.getLogger(name)
    logger.propagate = propagate
    logger.setLevel(level)
    _reset_handlers(logger)

    formatter = logging.Formatter(log_format or DEFAULT_FORMAT)

    handlers = []
    if add_console_handler:
        handlers.append(logging.StreamHandler(sys.stdout))
    if add_file_handler:
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(file_path, encoding='utf-8'))
    if not handlers:
        handlers.append(logging.NullHandler())

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def create_null_logger(name: str, level: int = logging.ERROR) -> logging.Logger:
    """Create a logger discarding every record, used when a component gets no logger."""
    return create_isolated_logger(name=name, level=level, add_console_handler=False, add_file_handler=False)


def create_config_logger(config, name: str = 'pagewright', console: bool = True) -> logging.Logger:
    """
    Create the application logger from ``logging_level`` and ``logging_file`` of a configuration.

    Records go to the console unless ``console`` is False, and to the
    configured log file when one is set.
    """
    return create_isolated_logger(
        name,
        level=config.logging_level if config.logging_level is not None else logging.INFO,
        add_console_handler=console,
        add_file_handler=bool(config.logging_file),
        file_path=config.logging_file,
    )
