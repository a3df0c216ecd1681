"""Structured logging setup using structlog"""

import logging
import sys
from typing import Any, Optional

import structlog

from files_manager.config import settings


def configure_third_party_loggers(log_level: int):
    """Configure third-party library loggers to reduce verbosity"""

    # Third-party loggers never go below WARNING
    quiet_level = max(log_level, logging.WARNING)

    # Uvicorn
    logging.getLogger("uvicorn.access").setLevel(quiet_level)
    logging.getLogger("uvicorn.error").setLevel(quiet_level)

    # SQLAlchemy
    logging.getLogger("sqlalchemy").setLevel(quiet_level)
    logging.getLogger("sqlalchemy.engine").setLevel(quiet_level)
    logging.getLogger("sqlalchemy.pool").setLevel(quiet_level)

    # Redis
    logging.getLogger("redis").setLevel(quiet_level)
    logging.getLogger("redis.client").setLevel(quiet_level)

    # Pillow logs every plugin it loads at DEBUG
    logging.getLogger("PIL").setLevel(quiet_level)

    # HTTP libraries
    logging.getLogger("httpx").setLevel(quiet_level)
    logging.getLogger("httpcore").setLevel(quiet_level)

    logging.getLogger("asyncio").setLevel(quiet_level)
    logging.getLogger("multipart").setLevel(quiet_level)


def configure_logging():
    """Configure structured logging with environment-aware settings"""

    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Configure root logger
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    configure_third_party_loggers(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> Any:
    """Get a logger instance"""
    return structlog.get_logger(name)


def mask_token(token: Optional[str], visible: int = 6) -> str:
    """
    Mask an auth token for logging.

    Args:
        token: Token to mask (can be None)
        visible: Number of leading characters kept

    Returns:
        Masked token safe for logging (e.g., "3f2a9c...")
    """
    if not token:
        return "[NO_TOKEN]"
    if len(token) <= visible:
        return "[TOKEN_REDACTED]"
    return f"{token[:visible]}..."


def log_storage_config(logger: Any, config: Any) -> None:
    """
    Log storage configuration safely without exposing credentials.

    Args:
        logger: Logger instance
        config: Settings object
    """
    logger.info(
        "storage_config_loaded",
        environment=config.environment,
        database=config.database_url.split("/")[-1],
        redis_host=config.redis_host,
        redis_port=config.redis_port,
        redis_password="[REDACTED]" if config.redis_password else "[NOT_SET]",
        folder_path=config.folder_path,
        job_queue_backend=config.job_queue_backend,
        session_ttl_seconds=config.session_ttl_seconds,
    )


# Configure logging on import
configure_logging()
