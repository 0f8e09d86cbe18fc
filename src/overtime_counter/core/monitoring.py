import sentry_sdk

from overtime_counter.core.config import settings


def configure_error_monitoring() -> bool:
    if not settings.sentry_dsn:
        return False
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.env,
        release=f"overtime-counter@{settings.app_version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
    )
    return True
