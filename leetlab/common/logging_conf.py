"""
Centralized logging configuration with Sentry.io integration.

This module provides logging setup for the data layer and the
migration tooling.
"""

import logging
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from .config import Settings


def setup_logging(
    sentry_dsn: Optional[str] = None,
    sentry_environment: str = "development",
    sentry_traces_sample_rate: float = 0.1,
    log_level: str = "INFO",
    service_name: str = "leetlab"
) -> None:
    """
    Configure application logging and Sentry integration.

    Args:
        sentry_dsn: Sentry DSN URL (if None, Sentry is disabled)
        sentry_environment: Environment name for Sentry
        sentry_traces_sample_rate: Sampling rate for traces (0.0-1.0)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        service_name: Name of the service for logging context
    """
    # Configure Python logging
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=(
            "%(asctime)s - %(name)s - %(levelname)s - "
            "%(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # Initialize Sentry if DSN is provided
    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            environment=sentry_environment,
            traces_sample_rate=sentry_traces_sample_rate,
            integrations=[SqlalchemyIntegration()],
            attach_stacktrace=True,
            send_default_pii=False,
        )
        logging.info(
            f"Sentry initialized for {service_name} in "
            f"{sentry_environment} environment"
        )
    else:
        logging.info(
            f"Sentry disabled for {service_name} "
            f"(no DSN provided)"
        )


def setup_logging_from_settings(
    settings: Settings,
    service_name: str = "leetlab"
) -> None:
    """
    Configure logging from a Settings instance.

    Args:
        settings: Application settings
        service_name: Name of the service for logging context
    """
    setup_logging(
        sentry_dsn=settings.sentry_dsn,
        sentry_environment=settings.sentry_environment,
        sentry_traces_sample_rate=settings.sentry_traces_sample_rate,
        log_level=settings.effective_log_level,
        service_name=service_name
    )
