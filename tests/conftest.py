"""Shared test fixtures for loago tests.

Provides:
- MockContext for isolating tests from global settings and the real data dir
- FakeClock for controlling "now"
- App fixtures wired to both
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest

from loago.cli.app import LoagoApp
from loago.config import LoagoSettings, set_settings
from loago.logging import configure_logging

DECEMBER = datetime(2023, 12, 20, tzinfo=timezone.utc)


class FakeClock:
    """A clock that only moves when told to.

    Counts how often it was read.
    """

    def __init__(self, start: datetime = DECEMBER) -> None:
        self.current = start
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return self.current

    def advance(self, **kwargs: float) -> datetime:
        self.current += timedelta(**kwargs)
        return self.current


class MockContext:
    """Context manager for isolating tests from global state.

    Handles:
    - Clearing LOAGO_* and XDG_DATA_HOME environment variables
    - Providing a temporary data directory
    - Resetting the global settings singleton afterwards

    Usage:
        with MockContext() as ctx:
            settings = ctx.settings
            record_path = ctx.settings.record_path
    """

    def __init__(self, **settings_kwargs) -> None:
        self._settings_kwargs = settings_kwargs
        self._temp_dir: tempfile.TemporaryDirectory | None = None
        self._settings: LoagoSettings | None = None
        self._original_env: dict[str, str | None] = {}

    def __enter__(self) -> "MockContext":
        self._temp_dir = tempfile.TemporaryDirectory()

        for var in list(os.environ):
            if var.startswith("LOAGO_") or var == "XDG_DATA_HOME":
                self._original_env[var] = os.environ.pop(var)

        self._settings = LoagoSettings(
            data_dir=Path(self._temp_dir.name) / "data",
            **self._settings_kwargs,
        )
        set_settings(self._settings)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        for var, value in self._original_env.items():
            if value is not None:
                os.environ[var] = value

        set_settings(None)

        if self._temp_dir:
            self._temp_dir.cleanup()

    @property
    def settings(self) -> LoagoSettings:
        if self._settings is None:
            raise RuntimeError("MockContext not entered")
        return self._settings

    @property
    def data_dir(self) -> Path:
        return self.settings.data_dir


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Route logs to stderr at warning level, as the CLI does by default."""
    configure_logging()


@pytest.fixture
def mock_context() -> Generator[MockContext, None, None]:
    """Fixture providing an isolated settings context."""
    with MockContext() as ctx:
        yield ctx


@pytest.fixture
def days_context() -> Generator[MockContext, None, None]:
    """Isolated context that always displays whole days."""
    with MockContext(elapsed_format="days") as ctx:
        yield ctx


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def app(mock_context: MockContext, clock: FakeClock) -> LoagoApp:
    """App using the isolated settings and the fake clock."""
    return LoagoApp(settings=mock_context.settings, clock=clock)


@pytest.fixture
def make_app(mock_context: MockContext, clock: FakeClock):
    """Factory for fresh apps sharing one data dir, like separate invocations."""

    def factory() -> LoagoApp:
        return LoagoApp(settings=mock_context.settings, clock=clock)

    return factory
