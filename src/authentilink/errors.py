# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""AuthentiLink exception hierarchy.

All AuthentiLink-specific errors inherit from AuthentiLinkError.  The
classification service converts input and internal errors into result
objects; only configuration errors reach callers as exceptions.
"""

from __future__ import annotations


class AuthentiLinkError(Exception):
    """Base exception for all AuthentiLink errors."""


class InvalidInputError(AuthentiLinkError):
    """Input is not a non-empty string."""


class TextTooShortError(AuthentiLinkError):
    """Trimmed input is below the minimum analysable length."""

    def __init__(self, message: str, *, length: int = 0, minimum: int = 0) -> None:
        super().__init__(message)
        self.length = length
        self.minimum = minimum


class ClassificationError(AuthentiLinkError):
    """Unexpected failure during feature extraction or scoring."""


class ConfigError(AuthentiLinkError, ValueError):
    """Configuration file is unreadable or holds unknown/invalid keys."""
