import logging
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "ibc"
FILE_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

def setup_logging(log_file: Optional[Path] = None, debug: bool = False) -> logging.Logger:
    """Configures the 'ibc' logger with a rich console handler and an optional log file.

    Handlers installed by a previous call are replaced, so calling it twice
    does not duplicate output.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        if getattr(handler, "_ibc_handler", False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=Console(stderr=True),
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
    )
    console_handler._ibc_handler = True
    logger.addHandler(console_handler)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler._ibc_handler = True
        logger.addHandler(file_handler)

    # Output goes through the handlers above only, even if the root logger is configured
    logger.propagate = False
    return logger
