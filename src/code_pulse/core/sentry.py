"""Sentry error tracking integration for code-pulse."""
import os
from typing import Any

import sentry_sdk

from code_pulse.core.logging import get_logger


def init_sentry(service_name: str = "code-pulse") -> None:
    """Initialize Sentry with service tagging.

    Does nothing unless SENTRY_DSN is set.

    Args:
        service_name: Unique service identifier (default: 'code-pulse')
    """
    def _tag_event(event: Any, hint: Any) -> Any:
        event.setdefault("tags", {})
        event["tags"]["service"] = service_name
        event["tags"]["component"] = "mcp-server"
        return event

    dsn = os.getenv("SENTRY_DSN")
    if not dsn:
        return

    environment = os.getenv("SENTRY_ENVIRONMENT", "development")
    is_dev = environment == "development"

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        traces_sample_rate=1.0 if is_dev else 0.1,
        # Source text submitted for analysis may be proprietary
        send_default_pii=False,
        attach_stacktrace=True,
        max_breadcrumbs=50,
        debug=is_dev,
        before_send=_tag_event,
    )

    sentry_sdk.set_tag("service", service_name)
    sentry_sdk.set_tag("component", "mcp-server")

    logger = get_logger("sentry")
    logger.info("sentry_initialized", service=service_name, environment=environment)
