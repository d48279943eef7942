"""Use case: hold the active configuration and compute what each clock shows."""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from menu_clock.l1_entities.clock_config import ClockConfig, Config, DecodedConfig
from menu_clock.l1_entities.errors import ConfigLoadError
from menu_clock.l2_use_cases.ports.config_store import ConfigStore
from menu_clock.l2_use_cases.utils.time_pattern import format_time

log = logging.getLogger('menu_clock.board')

STRIP_SEPARATOR = ' | '


@functools.lru_cache(maxsize=128)
def resolve_zone(name: str) -> ZoneInfo | None:
    """Look up an IANA zone. Unknown names are logged once and yield None."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        log.warning("Invalid time zone '%s'", name)
        return None


@dataclass(frozen=True)
class ClockReading:
    """One clock's formatted time at a given instant."""

    clock: ClockConfig
    text: str

    @property
    def strip_entry(self) -> str:
        return f'{self.clock.short_label}: {self.text}'

    @property
    def menu_entry(self) -> str:
        return f'{self.clock.label}: {self.text}'


@dataclass(frozen=True)
class BoardSnapshot:
    """Readings routed to the compact strip and to the dropdown list."""

    menu_bar: tuple[ClockReading, ...] = ()
    menu: tuple[ClockReading, ...] = ()

    @property
    def strip_text(self) -> str:
        return STRIP_SEPARATOR.join(r.strip_entry for r in self.menu_bar)

    @property
    def menu_lines(self) -> list[str]:
        return [r.menu_entry for r in self.menu]


def read_clock(clock: ClockConfig, moment: datetime) -> ClockReading | None:
    """Format *moment* for *clock*, or None when its zone does not resolve."""
    zone = resolve_zone(clock.time_zone)
    if zone is None:
        return None
    return ClockReading(clock=clock, text=format_time(moment.astimezone(zone), clock.format))


class ClockBoardUseCase:
    """Owns the active Config. A reload swaps in a freshly decoded value or keeps the old one."""

    def __init__(self, store: ConfigStore) -> None:
        self._store = store
        self._config: Config | None = None

    @property
    def store(self) -> ConfigStore:
        return self._store

    @property
    def loaded(self) -> bool:
        return self._config is not None

    @property
    def config(self) -> Config:
        if self._config is None:
            raise ConfigLoadError('No configuration loaded')
        return self._config

    def reload(self) -> DecodedConfig:
        """Decode the store again and replace the active Config.

        On ConfigLoadError the previously active Config stays in place and the
        error propagates to the caller.
        """
        try:
            decoded = self._store.load()
        except ConfigLoadError:
            log.error('Reload failed; keeping %s configuration', 'previous' if self.loaded else 'no')
            raise
        self._config = decoded.config
        log.info(
            'Configuration loaded: %d clocks, interval=%ds, run_at_startup=%s, %d diagnostics',
            len(decoded.config.clocks),
            decoded.config.update_interval,
            decoded.config.run_at_startup,
            len(decoded.diagnostics),
        )
        return decoded

    def snapshot(self, now: datetime | None = None) -> BoardSnapshot:
        """Read every routed clock at *now* (defaults to the current instant)."""
        config = self.config
        moment = now or datetime.now(timezone.utc)
        return BoardSnapshot(
            menu_bar=_read_all(config.menu_bar_clocks(), moment),
            menu=_read_all(config.menu_clocks(), moment),
        )


def _read_all(clocks: list[ClockConfig], moment: datetime) -> tuple[ClockReading, ...]:
    readings = (read_clock(clock, moment) for clock in clocks)
    return tuple(r for r in readings if r is not None)
