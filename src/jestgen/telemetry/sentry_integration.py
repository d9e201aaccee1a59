"""Opt-in Sentry error reporting and tracing for jestgen.

Nothing is sent unless ``JESTGEN_SENTRY_ENABLED`` is truthy and
``JESTGEN_SENTRY_DSN`` is set.  Source text never leaves the machine:
frame locals are dropped and home directories are masked in paths.
"""

from __future__ import annotations

import logging
import os
import re
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from jestgen import __version__

if TYPE_CHECKING:
    from collections.abc import Mapping
    from types import TracebackType

logger = logging.getLogger(__name__)

_TRUTHY = frozenset({"1", "true", "yes", "on"})

_init_lock = threading.Lock()
_initialized: dict[str, bool] = {"value": False}

_PATH_HOME_RE = re.compile(r"/(?:home|Users)/[^/]+")


@dataclass
class TelemetryConfig:
    """Sentry settings read from the environment."""

    enabled: bool = False
    dsn: str = ""
    environment: str = "local"
    traces_sample_rate: float = 0.0


def telemetry_config_from_env(environ: Mapping[str, str] | None = None) -> TelemetryConfig:
    """Build a ``TelemetryConfig`` from ``JESTGEN_SENTRY_*`` variables."""
    env = os.environ if environ is None else environ
    try:
        rate = float(env.get("JESTGEN_SENTRY_TRACES_SAMPLE_RATE", "0") or 0)
    except ValueError:
        logger.warning("Ignoring non-numeric JESTGEN_SENTRY_TRACES_SAMPLE_RATE")
        rate = 0.0
    return TelemetryConfig(
        enabled=env.get("JESTGEN_SENTRY_ENABLED", "").strip().lower() in _TRUTHY,
        dsn=env.get("JESTGEN_SENTRY_DSN", "").strip(),
        environment=env.get("JESTGEN_SENTRY_ENVIRONMENT", "").strip() or "local",
        traces_sample_rate=min(max(rate, 0.0), 1.0),
    )


def init_sentry(config: TelemetryConfig) -> bool:
    """Initialize the Sentry SDK once, if enabled.  Returns whether it is active."""
    with _init_lock:
        if _initialized["value"]:
            return True
        if not config.enabled:
            logger.debug("Sentry disabled")
            return False
        if not config.dsn:
            logger.warning("Sentry enabled but JESTGEN_SENTRY_DSN is empty")
            return False

        sentry_sdk.init(
            dsn=config.dsn,
            release=f"jestgen@{__version__}",
            environment=config.environment,
            traces_sample_rate=config.traces_sample_rate,
            send_default_pii=False,
            server_name="",
            before_send=_before_send,
            before_send_transaction=_before_send,
            in_app_include=["jestgen"],
            integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        )
        _initialized["value"] = True
        logger.info(
            "Sentry initialized (env=%s, tracing=%.2f)",
            config.environment,
            config.traces_sample_rate,
        )
        return True


def is_sentry_enabled() -> bool:
    """Return whether Sentry has been successfully initialized."""
    return _initialized["value"]


def _scrub_path(path: str) -> str:
    return _PATH_HOME_RE.sub("/~", path)


def _scrub_event(event: dict[str, Any]) -> dict[str, Any]:
    """Drop frame locals and mask home directories in an event."""
    exception = event.get("exception")
    if isinstance(exception, dict):
        for value in exception.get("values", []):
            stacktrace = value.get("stacktrace")
            if not isinstance(stacktrace, dict):
                continue
            for frame in stacktrace.get("frames", []):
                frame.pop("vars", None)
                for key in ("filename", "abs_path"):
                    if isinstance(frame.get(key), str):
                        frame[key] = _scrub_path(frame[key])

    breadcrumbs = event.get("breadcrumbs")
    if isinstance(breadcrumbs, dict):
        for crumb in breadcrumbs.get("values", []):
            if isinstance(crumb.get("message"), str):
                crumb["message"] = _scrub_path(crumb["message"])

    event.pop("server_name", None)
    return event


def _before_send(event: dict[str, Any], _hint: dict[str, Any]) -> dict[str, Any] | None:
    return _scrub_event(event)


def record_metric_count(name: str, value: int = 1, **attrs: str | int | float) -> None:
    """Record a counter as a breadcrumb on the current scope. No-op if disabled."""
    if not _initialized["value"]:
        return
    sentry_sdk.add_breadcrumb(
        category="metric",
        message=name,
        data={"value": value, **attrs},
        level="info",
    )


class _NoOpSpan:
    """Context manager that does nothing when Sentry is disabled."""

    def __enter__(self) -> _NoOpSpan:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        pass

    def set_data(self, key: str, value: Any) -> None:
        """No-op data setter."""


def start_span(op: str, name: str) -> Any:
    """Start a Sentry span, or a no-op context manager when disabled."""
    if not _initialized["value"]:
        return _NoOpSpan()
    return sentry_sdk.start_span(op=op, name=name)
