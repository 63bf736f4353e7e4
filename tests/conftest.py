"""Fixtures communes — générateur d'ids, layout de départ, horloge manuelle."""
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import pytest

from layout_builder.core import IdGenerator, starter_layout


class FakeClock:
    """Horloge manuelle pour les statuts à expiration."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def ids():
    return IdGenerator(1000)


@pytest.fixture
def sections():
    return starter_layout()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def speakers_template():
    return {
        "id": "speakers",
        "name": "Speakers",
        "category": "Events",
        "defaultProps": {"title": "Speakers", "limit": 8},
    }
