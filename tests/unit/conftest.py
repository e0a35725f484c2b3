"""Shared fixtures for unit tests."""

import logging

import pytest

from gracekill.core.escalator import Escalator

from tests.unit.probe_fixtures import FakeClock, FakeProbe


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_escalator(clock):
    """Build an Escalator over a FakeProbe driven by the fake clock."""
    def _make(probe: FakeProbe, **kwargs) -> Escalator:
        return Escalator(probe, clock=clock, sleep=clock.sleep, **kwargs)
    return _make


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    for var in (
        "GRACEKILL_ESCALATION__GRACE_SECONDS",
        "GRACEKILL_ESCALATION__MAX_WORKERS",
        "GRACEKILL_LOGGING__LEVEL",
        "GRACEKILL_LOGGING__USE_COLORS",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_gracekill_logger():
    yield
    logger = logging.getLogger("gracekill")
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
