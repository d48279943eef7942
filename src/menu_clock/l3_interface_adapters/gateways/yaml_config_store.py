"""Gateway: YAML configuration store, implements ConfigStore port."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from menu_clock.l1_entities.clock_config import ClockConfig, Config, DecodedConfig
from menu_clock.l1_entities.errors import ConfigLoadError

log = logging.getLogger('menu_clock.config')


def starter_config() -> Config:
    """Config written on first launch."""
    return Config(
        clocks=[
            ClockConfig(label='Seattle', short_label='SEA', time_zone='America/Los_Angeles', format='HH:mm'),
            ClockConfig(label='Dublin', short_label='DUB', time_zone='Europe/Dublin', format='HH:mm'),
        ],
        update_interval=10,
        run_at_startup=False,
    )


def decode_config_text(text: str) -> DecodedConfig:
    """Parse YAML *text* and decode it permissively.

    Raises ConfigLoadError when the text is not YAML or its top level is not a
    mapping. Everything past that point is repaired, not rejected.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigLoadError(f'Config is not valid YAML: {e}') from e
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ConfigLoadError(f'Config must be a mapping at the top level, got {type(data).__name__}')
    diagnostics: list[str] = []
    config = Config.decode(data, diagnostics)
    return DecodedConfig(config=config, diagnostics=tuple(diagnostics))


def encode_config_text(config: Config) -> str:
    return yaml.safe_dump(config.encode(), sort_keys=False, allow_unicode=True, default_flow_style=False)


class YamlConfigStore:
    """Reads and writes the configuration document as a YAML file."""

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def ensure_default(self) -> bool:
        if self.exists():
            return False
        self.save(starter_config())
        log.info('Created default config at %s', self._path)
        return True

    def load(self) -> DecodedConfig:
        try:
            self.ensure_default()
            text = self._path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigLoadError(f'Cannot read config file {self._path}: {e}') from e
        try:
            decoded = decode_config_text(text)
        except ConfigLoadError as e:
            raise ConfigLoadError(f'{self._path}: {e}') from e
        for message in decoded.diagnostics:
            log.warning('%s', message)
        log.debug('Loaded config from %s', self._path)
        return decoded

    def save(self, config: Config) -> Path:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(encode_config_text(config), encoding='utf-8')
        log.debug('Wrote config to %s', self._path)
        return self._path
