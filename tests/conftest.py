from datetime import datetime, timedelta

import pytest

from pm_workspace.settings import Settings
from pm_workspace.workspace import build_workspace


class FakeClock:
    """Deterministic clock; call advance() to move time forward."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 9, 10, 9, 30))


@pytest.fixture
def settings():
    # Explicit defaults so PM_* variables in the environment cannot leak in
    return Settings()


@pytest.fixture
def workspace(settings, clock):
    return build_workspace(settings=settings, clock=clock)
