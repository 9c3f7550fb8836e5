"""Ledger configuration. Pure configuration data, frozen once built."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, final

from doubleentry.core.errors import FieldViolation, ValidationError
from doubleentry.core.logging_config import configure_logging
from doubleentry.core.result import Err, Ok
from doubleentry.core.types import UtcDatetime

ENV_WAIVER_DESCRIPTION: str = "DOUBLEENTRY_WAIVER_DESCRIPTION"
ENV_LOG_LEVEL: str = "DOUBLEENTRY_LOG_LEVEL"

DEFAULT_WAIVER_DESCRIPTION: str = "Charge waived"


def _is_level(name: str) -> bool:
    return isinstance(logging.getLevelName(name), int)


@final
@dataclass(frozen=True, slots=True)
class LedgerConfig:
    """Tunables for ledger operations."""

    waiver_description: str = DEFAULT_WAIVER_DESCRIPTION  # adjust() without amount
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if not self.waiver_description.strip():
            raise TypeError("LedgerConfig.waiver_description must be non-empty")
        if not _is_level(self.log_level):
            raise TypeError(f"LedgerConfig.log_level is not a logging level: {self.log_level}")

    @staticmethod
    def from_env(
        environ: Mapping[str, str] | None = None,
    ) -> Ok[LedgerConfig] | Err[ValidationError]:
        """Build a config from DOUBLEENTRY_* variables, defaults for the rest.

        Every malformed variable is reported, not just the first.
        """
        env = os.environ if environ is None else environ
        problems: list[FieldViolation] = []

        waiver = env.get(ENV_WAIVER_DESCRIPTION, DEFAULT_WAIVER_DESCRIPTION)
        if not waiver.strip():
            problems.append(FieldViolation(ENV_WAIVER_DESCRIPTION, "must be non-empty", waiver))

        level = env.get(ENV_LOG_LEVEL, "INFO").upper()
        if not _is_level(level):
            problems.append(FieldViolation(ENV_LOG_LEVEL, "must be a logging level", level))

        if problems:
            return Err(ValidationError(
                message="Invalid ledger configuration",
                code="INVALID_CONFIG",
                timestamp=UtcDatetime.now(),
                source="infra.config.LedgerConfig.from_env",
                fields=tuple(problems),
            ))
        return Ok(LedgerConfig(waiver_description=waiver, log_level=level))

    def install_logging(self, *, stream: Any = None) -> None:
        """Configure the doubleentry loggers at this config's level."""
        configure_logging(level=self.log_level, stream=stream)


DEFAULT_CONFIG = LedgerConfig()
