"""Clock configuration models: schema, permissive decode, and display routing.

Decoding never fails for a mapping. Every missing or malformed field is
replaced by its default and a human-readable diagnostic is appended to the
caller's list. Unknown keys are tolerated and reported once per mapping.
"""

from __future__ import annotations

import reprlib
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    StrictStr,
    StringConstraints,
    TypeAdapter,
    ValidationError,
)

from menu_clock.l1_entities.display import ClockDisplay

Diagnostics = list[str]

DEFAULT_LABEL = 'Unknown'
DEFAULT_TIME_ZONE = 'UTC'
DEFAULT_FORMAT = 'HH:mm'
DEFAULT_UPDATE_INTERVAL = 10
DEFAULT_RUN_AT_STARTUP = False
SHORT_LABEL_LENGTH = 3

_MISSING: Any = object()

_TEXT: TypeAdapter[str] = TypeAdapter(Annotated[StrictStr, StringConstraints(min_length=1)])
_DISPLAY: TypeAdapter[ClockDisplay] = TypeAdapter(ClockDisplay)
# strict: `updateInterval: true` or `"10"` is not an interval
_INTERVAL: TypeAdapter[int] = TypeAdapter(StrictInt)
_FLAG: TypeAdapter[bool] = TypeAdapter(StrictBool)


def _parse(adapter: TypeAdapter[Any], raw: Any) -> Any:
    """Validate *raw* with *adapter*; None when absent or invalid."""
    if raw is _MISSING:
        return None
    try:
        return adapter.validate_python(raw)
    except ValidationError:
        return None


def _note_fallback(diagnostics: Diagnostics, owner: str, key: str, raw: Any, fallback: str) -> None:
    if raw is _MISSING:
        diagnostics.append(f"{owner} missing '{key}', using {fallback}")
    else:
        diagnostics.append(f"{owner} has invalid '{key}' ({reprlib.repr(raw)}), using {fallback}")


def _resolve(
    data: Mapping[str, Any],
    key: str,
    adapter: TypeAdapter[Any],
    default: Any,
    fallback: str,
    owner: str,
    diagnostics: Diagnostics,
) -> Any:
    """Validate ``data[key]``; on absence or failure record a diagnostic and return *default*."""
    raw = data.get(key, _MISSING)
    value = _parse(adapter, raw)
    if value is not None:
        return value
    _note_fallback(diagnostics, owner, key, raw, fallback)
    return default


def _report_unknown_keys(
    data: Mapping[str, Any],
    known: tuple[str, ...],
    owner: str,
    diagnostics: Diagnostics,
) -> None:
    extra = [str(key) for key in data if key not in known]
    if extra:
        diagnostics.append(f'{owner} has extra keys: {", ".join(extra)}')


def _require_mapping(data: Any, owner: str) -> None:
    if not isinstance(data, Mapping):
        raise TypeError(f'{owner} must be a mapping, got {type(data).__name__}')


class ClockConfig(BaseModel):
    """One configured clock: what to call it, which zone, how to format, where to show it."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    KEYS: ClassVar[tuple[str, ...]] = ('label', 'shortLabel', 'timeZone', 'format', 'display')

    label: str
    short_label: str = Field(alias='shortLabel')
    time_zone: str = Field(alias='timeZone', description='IANA zone id, checked only when formatting')
    format: str = Field(description='Unicode date pattern, e.g. HH:mm or h:mm a')
    display: ClockDisplay = ClockDisplay.BOTH

    @classmethod
    def decode(cls, data: Mapping[str, Any], diagnostics: Diagnostics | None = None) -> ClockConfig:
        """Build a ClockConfig from an untyped mapping, repairing each field independently."""
        _require_mapping(data, 'clock config')
        diag = diagnostics if diagnostics is not None else []
        owner = 'clock config'

        label = _resolve(data, 'label', _TEXT, DEFAULT_LABEL, f"default '{DEFAULT_LABEL}'", owner, diag)
        prefix = label[:SHORT_LABEL_LENGTH]
        short_label = _resolve(
            data,
            'shortLabel',
            _TEXT,
            prefix,
            f"first {SHORT_LABEL_LENGTH} characters of label '{prefix}'",
            owner,
            diag,
        )
        time_zone = _resolve(
            data, 'timeZone', _TEXT, DEFAULT_TIME_ZONE, f"default '{DEFAULT_TIME_ZONE}'", owner, diag
        )
        fmt = _resolve(data, 'format', _TEXT, DEFAULT_FORMAT, f"default '{DEFAULT_FORMAT}'", owner, diag)

        # display is optional: only a present-but-unrecognized value is worth a warning
        raw_display = data.get('display', _MISSING)
        display = _parse(_DISPLAY, raw_display)
        if display is None:
            display = ClockDisplay.BOTH
            if raw_display is not _MISSING:
                _note_fallback(diag, owner, 'display', raw_display, f"'{ClockDisplay.BOTH.value}'")

        _report_unknown_keys(data, cls.KEYS, owner, diag)
        return cls(label=label, short_label=short_label, time_zone=time_zone, format=fmt, display=display)

    def encode(self) -> dict[str, Any]:
        """Plain mapping under the canonical document keys."""
        return self.model_dump(mode='json', by_alias=True)


def _decode_clock_list(raw: Any, diagnostics: Diagnostics) -> tuple[ClockConfig, ...] | None:
    if not isinstance(raw, (list, tuple)):
        return None
    # an entry that is not a mapping makes the whole sequence undecodable
    if not all(isinstance(item, Mapping) for item in raw):
        return None
    return tuple(ClockConfig.decode(item, diagnostics) for item in raw)


class Config(BaseModel):
    """The whole configuration document: ordered clocks plus global settings."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    KEYS: ClassVar[tuple[str, ...]] = ('clocks', 'updateInterval', 'runAtStartup')

    clocks: tuple[ClockConfig, ...]
    update_interval: int = Field(alias='updateInterval', description='Refresh period in seconds')
    run_at_startup: bool = Field(alias='runAtStartup')

    @staticmethod
    def default_clock() -> ClockConfig:
        return ClockConfig(label='UTC', short_label='UTC', time_zone='UTC', format=DEFAULT_FORMAT)

    @classmethod
    def decode(cls, data: Mapping[str, Any], diagnostics: Diagnostics | None = None) -> Config:
        """Build a Config from an untyped mapping. Never fails for mapping input."""
        _require_mapping(data, 'config')
        diag = diagnostics if diagnostics is not None else []
        owner = 'config'

        raw_clocks = data.get('clocks', _MISSING)
        clocks = _decode_clock_list(raw_clocks, diag)
        if clocks is None:
            clocks = (cls.default_clock(),)
            _note_fallback(diag, owner, 'clocks', raw_clocks, 'a single UTC clock')
        elif not clocks:
            diag.append("'clocks' array is empty")

        update_interval = _resolve(
            data,
            'updateInterval',
            _INTERVAL,
            DEFAULT_UPDATE_INTERVAL,
            f'default ({DEFAULT_UPDATE_INTERVAL})',
            owner,
            diag,
        )
        run_at_startup = _resolve(
            data,
            'runAtStartup',
            _FLAG,
            DEFAULT_RUN_AT_STARTUP,
            f'default ({str(DEFAULT_RUN_AT_STARTUP).lower()})',
            owner,
            diag,
        )

        _report_unknown_keys(data, cls.KEYS, owner, diag)
        return cls(clocks=clocks, update_interval=update_interval, run_at_startup=run_at_startup)

    def encode(self) -> dict[str, Any]:
        """Plain mapping under the canonical document keys, clocks as a list."""
        return {
            'clocks': [clock.encode() for clock in self.clocks],
            'updateInterval': self.update_interval,
            'runAtStartup': self.run_at_startup,
        }

    def menu_bar_clocks(self) -> list[ClockConfig]:
        """Clocks shown in the compact strip, in configured order."""
        return [clock for clock in self.clocks if clock.display.in_menu_bar]

    def menu_clocks(self) -> list[ClockConfig]:
        """Clocks listed in the dropdown, in configured order."""
        return [clock for clock in self.clocks if clock.display.in_menu]


@dataclass(frozen=True)
class DecodedConfig:
    """A decoded Config together with the diagnostics its decode produced."""

    config: Config
    diagnostics: tuple[str, ...] = ()

    @property
    def clean(self) -> bool:
        return not self.diagnostics
