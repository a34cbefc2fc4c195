# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Detector configuration.

Constructor-time and static for the life of a ClassificationService.
Sources, lowest to highest precedence: defaults, YAML file, environment
(``AUTHENTILINK_*``).
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from contextlib import suppress
from dataclasses import dataclass
from pathlib import Path

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "AUTHENTILINK_"


@dataclass(frozen=True, slots=True)
class DetectorConfig:
    """Immutable configuration for the classification service."""

    cache_capacity: int = 1000
    cache_ttl: float = 3600.0  # seconds
    max_requests_per_minute: int = 30
    min_text_length: int = 50  # trimmed characters
    ai_threshold: float = 0.65

    def __post_init__(self) -> None:
        if self.cache_capacity <= 0:
            raise ValueError(f"cache_capacity must be > 0, got {self.cache_capacity}")
        if self.cache_ttl < 0:
            raise ValueError(f"cache_ttl must be >= 0, got {self.cache_ttl}")
        if self.max_requests_per_minute <= 0:
            raise ValueError(f"max_requests_per_minute must be > 0, got {self.max_requests_per_minute}")
        if self.min_text_length < 1:
            raise ValueError(f"min_text_length must be >= 1, got {self.min_text_length}")
        if not 0.0 <= self.ai_threshold <= 1.0:
            raise ValueError(f"ai_threshold must be within [0, 1], got {self.ai_threshold}")

    # -- Alternate constructors --

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, *, base: DetectorConfig | None = None) -> DetectorConfig:
        """Overlay ``AUTHENTILINK_<FIELD>`` variables on *base* (defaults if None).

        Unparsable values are ignored with a warning.
        """
        env = os.environ if environ is None else environ
        base = base or cls()
        overrides: dict[str, int | float] = {}
        for f in dataclasses.fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper(), "").strip()
            if not raw:
                continue
            caster = int if f.type == "int" else float
            with suppress(ValueError):
                overrides[f.name] = caster(raw)
                continue
            logger.warning("Ignoring invalid %s%s=%r", ENV_PREFIX, f.name.upper(), raw)
        return dataclasses.replace(base, **overrides) if overrides else base

    @classmethod
    def from_yaml(cls, path: str | Path) -> DetectorConfig:
        """Load a YAML mapping whose keys are DetectorConfig field names."""
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")

        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config key(s) in {path}: {', '.join(map(str, unknown))}")
        try:
            return cls(**data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid config {path}: {e}") from e

    @classmethod
    def load(cls, path: str | Path | None = None, environ: Mapping[str, str] | None = None) -> DetectorConfig:
        """Defaults, then *path* (if given), then environment overrides."""
        base = cls.from_yaml(path) if path else cls()
        return cls.from_env(environ, base=base)
