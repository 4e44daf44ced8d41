import logging
import logging.handlers
from pathlib import Path

def setup_logging(
    log_level: str = "INFO",
    log_dir: str = "logs",
    app_name: str = "catalog-crawler"
) -> None:
    """
    Configure console and rotating file logging for a crawl run.

    Args:
        log_level (str): Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir (str): Directory to store log files
        app_name (str): Used as the log file name
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)-28s | %(levelname)-8s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    console_formatter = logging.Formatter('%(name)-28s %(levelname)-8s | %(message)s')

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Settings may be imported more than once per process
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(console_formatter)
    console_handler.setLevel(numeric_level)
    root_logger.addHandler(console_handler)

    # 10MB per file, 5 backups
    log_file = log_path / f"{app_name}.log"
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10_000_000,
        backupCount=5,
        encoding='utf-8'
    )
    file_handler.setFormatter(detailed_formatter)
    file_handler.setLevel(numeric_level)
    root_logger.addHandler(file_handler)

    # Supabase talks through httpx, and scrapy/twisted are chatty at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)
    logging.getLogger("scrapy").setLevel(logging.WARNING)
    logging.getLogger("twisted").setLevel(logging.WARNING)
    logging.getLogger("sentry_sdk").setLevel(logging.ERROR)

    root_logger.info(f"Logging configured with level: {log_level}")
    root_logger.info(f"Log file location: {log_file}")
