# File: /docview/observability/sentry.py | Version: 1.1 | Title: Optional Sentry initialization
import logging
import os

log = logging.getLogger(__name__)


def init_sentry_if_configured() -> bool:
    dsn = os.getenv("SENTRY_DSN", "").strip()
    if not dsn:
        log.info("Sentry disabled (no SENTRY_DSN).")
        return False

    try:
        import sentry_sdk
    except ImportError:
        log.warning("SENTRY_DSN is set but sentry-sdk is not installed; pip install 'docview[sentry]'")
        return False

    traces = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))
    sentry_sdk.init(
        dsn=dsn,
        traces_sample_rate=traces,
        environment=os.getenv("SENTRY_ENVIRONMENT", "development"),
        send_default_pii=False,
    )
    log.info("Sentry initialized.")
    return True
