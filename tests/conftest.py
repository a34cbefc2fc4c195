# Copyright (C) 2025-2026 Retio AI
# SPDX-License-Identifier: AGPL-3.0-only

"""Shared test configuration and fixtures."""

try:
    import authentilink  # noqa: F401
except ImportError:
    raise ImportError("authentilink is not installed. Run: pip install -e '.[dev]'") from None

import time

import pytest


class FakeClock:
    """Manually advanced stand-in for ``time.monotonic``."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock(monkeypatch):
    """Patch ``time.monotonic`` with a controllable clock."""
    fake = FakeClock()
    monkeypatch.setattr(time, "monotonic", fake)
    return fake


AI_TEXT = (
    "Furthermore, it is worth noting that organizations must leverage robust and scalable "
    "frameworks to optimize their processes. Moreover, a comprehensive understanding of "
    "transformative paradigms will facilitate sustainable growth across every department.\n"
    "Key Benefits: Improved alignment across teams and stakeholders.\n"
    "- Clear ownership of deliverables.\n"
    "- Faster decision making.\n"
    "- Measurable outcomes.\n"
    "1. Streamline onboarding processes for new hires.\n"
    "2. Utilize innovative tooling to facilitate collaboration.\n"
    "3. Optimize cross-functional synergy at every level.\n"
    "In conclusion, I hope this helps and please note that I'd be happy to elaborate further."
)

HUMAN_TEXT = (
    "ok so i finally tried that ramen place downtown lol. honestly? kinda meh. "
    "the broth was salty but the noodles were good i guess. my friend loved it tho. "
    "might go back idk"
)


@pytest.fixture
def ai_text() -> str:
    return AI_TEXT


@pytest.fixture
def human_text() -> str:
    return HUMAN_TEXT
