"""Sentry initialization and error capture helpers."""

import logging
import os
from typing import Dict, Any, Optional
from functools import wraps

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

logger = logging.getLogger(__name__)

def init_sentry(
    dsn: Optional[str] = None,
    environment: str = "development",
    traces_sample_rate: float = 1.0,
    profiles_sample_rate: float = 1.0,
) -> None:
    """Initialize the Sentry SDK for a crawl process.

    Args:
        dsn: Sentry DSN. Falls back to the SENTRY_DSN env var
        environment: Environment name (development, production, etc.)
        traces_sample_rate: Sample rate for performance monitoring
        profiles_sample_rate: Sample rate for profiling
    """
    if os.getenv('DISABLE_SENTRY', '').lower() in ('true', '1', 'yes'):
        logger.info("Sentry is disabled via DISABLE_SENTRY environment variable")
        return

    dsn = dsn or os.getenv('SENTRY_DSN')
    if not dsn:
        logger.warning("Sentry DSN not provided, skipping Sentry initialization")
        return

    # Breadcrumbs from INFO, events from ERROR
    logging_integration = LoggingIntegration(
        level=logging.INFO,
        event_level=logging.ERROR
    )

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        integrations=[logging_integration],
        traces_sample_rate=traces_sample_rate,
        profiles_sample_rate=profiles_sample_rate,
        send_default_pii=False,
        max_breadcrumbs=50,
        attach_stacktrace=True,
        release=os.getenv('RELEASE_VERSION', 'development'),
    )

    logger.info(f"Sentry initialized for environment: {environment}")

def capture_error(error: Exception, extra_data: Optional[Dict[str, Any]] = None) -> None:
    """Capture an error with additional context.

    Args:
        error: The exception to capture
        extra_data: Additional context data to attach to the error
    """
    if extra_data:
        with sentry_sdk.new_scope() as scope:
            for key, value in extra_data.items():
                scope.set_extra(key, value)
            sentry_sdk.capture_exception(error)
    else:
        sentry_sdk.capture_exception(error)

def add_breadcrumb(
    message: str,
    category: Optional[str] = None,
    level: str = "info",
    data: Optional[Dict[str, Any]] = None
) -> None:
    """Record a breadcrumb for the current crawl."""
    sentry_sdk.add_breadcrumb(
        message=message,
        category=category,
        level=level,
        data=data
    )

def monitor_errors(func):
    """Capture exceptions raised by ``func`` in Sentry and re-raise them.

    Only suitable for plain functions; a generator body runs after the
    wrapper has returned.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            extra_data = {
                'function': func.__name__,
                'args': repr(args),
                'kwargs': repr(kwargs)
            }
            capture_error(e, extra_data)
            raise
    return wrapper
