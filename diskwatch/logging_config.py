import logging
import logging.handlers

from rich.console import Console
from rich.logging import RichHandler

from .config import Settings

# Per-tick chatter from the HTTP poll endpoints and the bus client
QUIET_LOGGERS = ("uvicorn.access", "jeepney", "asyncio")


def setup_logging(settings: Settings) -> None:
    log_dir = settings.log_directory
    log_dir.mkdir(parents=True, exist_ok=True)

    # Console output for interactive runs
    console = Console(width=120)
    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_level=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )
    rich_handler.setLevel(settings.log_level)

    # Refresh cycles run in a worker thread, so keep the thread name in the file
    file_format = (
        "%(asctime)s - %(levelname)s - [%(threadName)s] "
        "%(name)s:%(lineno)d - %(message)s"
    )

    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=settings.log_file_path,
        when="midnight",
        backupCount=settings.log_retention_days,
        encoding="utf-8",
    )
    file_handler.setLevel(settings.log_level)
    file_handler.setFormatter(logging.Formatter(file_format))

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(rich_handler)
    root_logger.addHandler(file_handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.info(
        f"[bold green]Logging initialized[/] - "
        f"File: [cyan]{settings.log_file_path}[/], "
        f"Level: [yellow]{settings.log_level}[/], "
        f"polling every [blue]{settings.poll_interval_seconds}[/]s"
    )
