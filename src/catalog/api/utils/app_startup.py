import logging
import sys
from pathlib import Path

from loguru import logger

from src.catalog.runtime.config.config_data import ConfigData, LoggingConfig
from src.catalog.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# stdlib logger name -> minimum level forwarded into loguru
STDLIB_LEVELS = {
    "sqlalchemy.engine": logging.WARNING,
    "sqlalchemy.pool": logging.WARNING,
    "httpx": logging.WARNING,
    "httpcore": logging.WARNING,
    "uvicorn": logging.INFO,
    "uvicorn.error": logging.INFO,
    "uvicorn.access": logging.CRITICAL,
}


class InterceptHandler(logging.Handler):
    """Forward stdlib ``logging`` records (uvicorn, SQLAlchemy, httpx) to loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # log_requests already writes one line per request
        if record.name == "uvicorn.access":
            return

        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_sinks(cfg: LoggingConfig, verbose_tracebacks: bool) -> None:
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )

    if not cfg.file:
        return

    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )


def _route_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Loggers created before this point must bubble up to the root handler
    for name in list(logging.root.manager.loggerDict):
        existing = logging.getLogger(name)
        existing.handlers = []
        existing.propagate = True

    for name, level in STDLIB_LEVELS.items():
        logging.getLogger(name).setLevel(level)


def configure_logging(config: ConfigData | None = None) -> None:
    """Install the loguru sinks described by ``config.logging``.

    Console output is always human-readable; the optional file sink is JSON
    when ``logging.format`` is ``json``. Every record carries a
    ``request_id`` extra, ``-`` outside of a request.
    """
    main_config = config or get_config()
    cfg = main_config.logging
    environment = main_config.app.environment

    logger.remove()
    logger.configure(extra={"request_id": "-"})

    _add_sinks(cfg, verbose_tracebacks=environment != "production")
    _route_stdlib_logging()

    logger.bind(
        app_level=cfg.level,
        app_format=cfg.format,
        app_file=cfg.file,
        environment=environment,
    ).info("Logging configured")
