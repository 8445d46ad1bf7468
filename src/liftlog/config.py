import logging
import os
from dataclasses import dataclass

_LOG_FORMATS = ("json", "text")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _parse_bool(name: str, raw: str) -> bool:
    normalized = raw.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise RuntimeError(f"{name} must be a boolean, got {raw!r}")


@dataclass(frozen=True)
class Config:
    log_format: str = "json"
    log_level: int = logging.INFO
    plan_file: str | None = None
    skip_unknown_events: bool = True

    @classmethod
    def from_env(cls) -> "Config":
        log_format = os.environ.get("LIFTLOG_LOG_FORMAT", "json").strip().lower()
        if log_format not in _LOG_FORMATS:
            raise RuntimeError(f"LIFTLOG_LOG_FORMAT must be one of: {', '.join(_LOG_FORMATS)}")

        level_name = os.environ.get("LIFTLOG_LOG_LEVEL", "INFO").strip().upper()
        log_level = logging.getLevelName(level_name)
        if not isinstance(log_level, int):
            raise RuntimeError(f"LIFTLOG_LOG_LEVEL is not a valid level: {level_name!r}")

        return cls(
            log_format=log_format,
            log_level=log_level,
            plan_file=os.environ.get("LIFTLOG_PLAN_FILE") or None,
            skip_unknown_events=_parse_bool(
                "LIFTLOG_SKIP_UNKNOWN_EVENTS",
                os.environ.get("LIFTLOG_SKIP_UNKNOWN_EVENTS", "true"),
            ),
        )
