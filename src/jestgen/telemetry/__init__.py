"""Telemetry integrations for jestgen."""

from jestgen.telemetry.sentry_integration import (
    TelemetryConfig,
    init_sentry,
    is_sentry_enabled,
    record_metric_count,
    start_span,
    telemetry_config_from_env,
)

__all__ = [
    "TelemetryConfig",
    "init_sentry",
    "is_sentry_enabled",
    "record_metric_count",
    "start_span",
    "telemetry_config_from_env",
]
