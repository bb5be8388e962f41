from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

REORDER_POLICIES = {"ignore", "raise"}


@dataclass(frozen=True)
class Settings:
    """
    Workspace settings loaded from environment variables.

    Env vars:
    - PM_SEED_DEMO_DATA: 'true' to load sample records into new workspaces (default: false)
    - PM_STRICT_VALIDATION: 'true' to reject out-of-range RICE params at create/update (default: false)
    - PM_REORDER_OUT_OF_RANGE: 'ignore' (default) or 'raise' for out-of-range reorder indices
    - PM_ZERO_FILL_DOCUMENT_STATUS: 'false' to report only observed document statuses (default: true)
    - PM_COVERAGE_EXISTING_DEMANDS_ONLY: 'true' to ignore document links to deleted demands in coverage (default: false)
    - PM_LOG_LEVEL: logging level name, 'INFO' by default
    """

    seed_demo_data: bool = False
    strict_validation: bool = False
    reorder_out_of_range: str = "ignore"
    zero_fill_document_status: bool = True
    coverage_existing_demands_only: bool = False
    log_level: str = "INFO"


def _get_env(name: str, default: str) -> str:
    value = os.getenv(name, default)
    if value is None or value == "":
        return default
    return value


def _parse_bool(value: str, default: bool = False) -> bool:
    v = value.strip().lower()
    if v in {"1", "true", "yes", "on"}:
        return True
    if v in {"0", "false", "no", "off"}:
        return False
    return default


# PUBLIC_INTERFACE
def get_settings() -> Settings:
    """Return workspace settings loaded from environment variables."""
    policy = _get_env("PM_REORDER_OUT_OF_RANGE", "ignore").strip().lower()
    if policy not in REORDER_POLICIES:
        # Fallback to ignore if unsupported
        policy = "ignore"

    level = _get_env("PM_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        level = "INFO"

    return Settings(
        seed_demo_data=_parse_bool(_get_env("PM_SEED_DEMO_DATA", "false"), False),
        strict_validation=_parse_bool(_get_env("PM_STRICT_VALIDATION", "false"), False),
        reorder_out_of_range=policy,
        zero_fill_document_status=_parse_bool(_get_env("PM_ZERO_FILL_DOCUMENT_STATUS", "true"), True),
        coverage_existing_demands_only=_parse_bool(
            _get_env("PM_COVERAGE_EXISTING_DEMANDS_ONLY", "false"), False
        ),
        log_level=level,
    )


# PUBLIC_INTERFACE
def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply the configured log level to the root logger."""
    s = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, s.log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
