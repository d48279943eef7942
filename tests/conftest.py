"""Shared test fixtures and protocol-conforming fakes."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from menu_clock.l1_entities.clock_config import ClockConfig, Config, DecodedConfig
from menu_clock.l1_entities.display import ClockDisplay
from menu_clock.l1_entities.errors import ConfigLoadError
from menu_clock.l2_use_cases.clock_board_use_case import resolve_zone

# --- Protocol-conforming Fakes ---


class FakeConfigStore:
    """In-memory config store for L2/L4 tests."""

    def __init__(self, decoded: DecodedConfig | None = None, path: Path | None = None) -> None:
        self._decoded = decoded
        self._path = path or Path('/fake/config.yaml')
        self._error: ConfigLoadError | None = None
        self.load_calls = 0
        self.saved: list[Config] = []

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._decoded is not None

    def ensure_default(self) -> bool:
        return False

    def load(self) -> DecodedConfig:
        self.load_calls += 1
        if self._error is not None:
            raise self._error
        if self._decoded is None:
            raise ConfigLoadError('nothing stored')
        return self._decoded

    def save(self, config: Config) -> Path:
        self.saved.append(config)
        self._decoded = DecodedConfig(config=config)
        return self._path

    def set_config(self, config: Config, diagnostics: tuple[str, ...] = ()) -> None:
        self._decoded = DecodedConfig(config=config, diagnostics=diagnostics)
        self._error = None

    def set_error(self, message: str) -> None:
        self._error = ConfigLoadError(message)


def make_clock(
    label: str = 'Seattle',
    short_label: str = 'SEA',
    time_zone: str = 'America/Los_Angeles',
    fmt: str = 'HH:mm',
    display: ClockDisplay = ClockDisplay.BOTH,
) -> ClockConfig:
    return ClockConfig(label=label, short_label=short_label, time_zone=time_zone, format=fmt, display=display)


# --- Standard Fixtures ---


@pytest.fixture(autouse=True)
def _clear_zone_cache():
    resolve_zone.cache_clear()
    yield
    resolve_zone.cache_clear()


@pytest.fixture
def fixed_now() -> datetime:
    """2024-01-15 18:30:45 UTC, a Monday; Seattle is UTC-8, Dublin UTC+0, Tokyo UTC+9."""
    return datetime(2024, 1, 15, 18, 30, 45, tzinfo=timezone.utc)


@pytest.fixture
def routed_config() -> Config:
    return Config(
        clocks=[
            make_clock('Both', 'BTH', 'UTC', display=ClockDisplay.BOTH),
            make_clock('MenuBar', 'MBR', 'Europe/Dublin', display=ClockDisplay.MENUBAR),
            make_clock('Menu', 'MNU', 'Asia/Tokyo', display=ClockDisplay.MENU),
        ],
        update_interval=10,
        run_at_startup=False,
    )


@pytest.fixture
def fake_store(routed_config: Config) -> FakeConfigStore:
    store = FakeConfigStore()
    store.set_config(routed_config)
    return store


@pytest.fixture
def sample_config_yaml(tmp_path: Path) -> Path:
    content = """\
clocks:
  - label: Seattle
    shortLabel: SEA
    timeZone: America/Los_Angeles
    format: HH:mm
  - label: Tokyo
    shortLabel: TYO
    timeZone: Asia/Tokyo
    format: "h:mm a"
    display: menu
updateInterval: 5
runAtStartup: true
"""
    p = tmp_path / 'config.yaml'
    p.write_text(content, encoding='utf-8')
    return p
