"""
Centralized logging configuration for the Job Application Tracker.
"""
import logging
import sys
from typing import Optional

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(level: str = "INFO", log_file: Optional[str] = None, echo_sql: bool = False) -> None:
    """
    Configure application-wide logging settings.

    SQL statements are logged through the same handlers as the application
    (instead of SQLAlchemy's own ``echo`` handler) when ``echo_sql`` is set.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        echo_sql: Log every SQL statement the tracker issues (DATABASE_ECHO)
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # create_app may run more than once per process (tests, reloads)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    # Handlers do not filter by level, so an SQL echo below the root level still gets out
    for handler in handlers:
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Per-request access lines duplicate the gate's own rejection warnings
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if echo_sql else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
