"""Tests for the YAML config codec and file store gateway."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
import yaml

from menu_clock.l1_entities.clock_config import Config
from menu_clock.l1_entities.display import ClockDisplay
from menu_clock.l1_entities.errors import ConfigLoadError
from menu_clock.l3_interface_adapters.gateways.yaml_config_store import (
    YamlConfigStore,
    decode_config_text,
    encode_config_text,
    starter_config,
)


class TestDecodeConfigText:
    def test_decodes_document(self):
        decoded = decode_config_text(
            """\
clocks:
  - label: Seattle
    shortLabel: SEA
    timeZone: America/Los_Angeles
    format: "h:mm a"
    display: menubar
updateInterval: 30
runAtStartup: true
"""
        )
        assert decoded.clean
        config = decoded.config
        assert config.clocks[0].format == 'h:mm a'
        assert config.clocks[0].display is ClockDisplay.MENUBAR
        assert config.update_interval == 30
        assert config.run_at_startup is True

    def test_empty_document_gives_defaults(self):
        decoded = decode_config_text('')
        assert decoded.config == Config(clocks=[Config.default_clock()], update_interval=10, run_at_startup=False)
        assert len(decoded.diagnostics) == 3

    def test_explicit_empty_clocks(self):
        decoded = decode_config_text('clocks: []\nupdateInterval: 10\nrunAtStartup: false\n')
        assert decoded.config.clocks == ()
        assert decoded.diagnostics == ("'clocks' array is empty",)

    def test_null_clocks_falls_back(self):
        decoded = decode_config_text('clocks:\nupdateInterval: 10\nrunAtStartup: false\n')
        assert decoded.config.clocks == (Config.default_clock(),)

    def test_extra_keys_reported(self):
        decoded = decode_config_text('clocks: []\nupdateInterval: 10\nrunAtStartup: false\ntheme: dark\n')
        assert decoded.diagnostics[-1] == 'config has extra keys: theme'

    def test_invalid_yaml_raises(self):
        with pytest.raises(ConfigLoadError, match='not valid YAML'):
            decode_config_text('clocks: [unclosed\n')

    @pytest.mark.parametrize('text', ['- a\n- b\n', 'just a string\n', '42\n'])
    def test_non_mapping_document_raises(self, text: str):
        with pytest.raises(ConfigLoadError, match='mapping'):
            decode_config_text(text)


class TestEncodeConfigText:
    def test_keys_keep_schema_order(self):
        text = encode_config_text(starter_config())
        assert text.index('clocks:') < text.index('updateInterval:') < text.index('runAtStartup:')
        assert text.index('label:') < text.index('shortLabel:') < text.index('timeZone:')

    def test_is_plain_yaml(self):
        data = yaml.safe_load(encode_config_text(starter_config()))
        assert data['clocks'][0] == {
            'label': 'Seattle',
            'shortLabel': 'SEA',
            'timeZone': 'America/Los_Angeles',
            'format': 'HH:mm',
            'display': 'both',
        }

    def test_round_trip(self):
        original = Config.decode(
            {
                'clocks': [
                    {'label': 'São Paulo', 'shortLabel': 'GRU', 'timeZone': 'America/Sao_Paulo', 'format': 'HH:mm'},
                    {'label': 'No', 'shortLabel': 'NO', 'timeZone': 'Europe/Oslo', 'format': "h 'o''clock' a"},
                ],
                'updateInterval': 60,
                'runAtStartup': True,
            }
        )
        decoded = decode_config_text(encode_config_text(original))
        assert decoded.config == original
        assert decoded.clean


class TestStarterConfig:
    def test_two_clocks(self):
        config = starter_config()
        assert [c.short_label for c in config.clocks] == ['SEA', 'DUB']
        assert config.update_interval == 10
        assert config.run_at_startup is False


class TestYamlConfigStore:
    def test_load_existing(self, sample_config_yaml: Path):
        store = YamlConfigStore(sample_config_yaml)
        decoded = store.load()
        assert decoded.clean
        assert [c.label for c in decoded.config.clocks] == ['Seattle', 'Tokyo']
        assert decoded.config.menu_clocks()[1].display is ClockDisplay.MENU
        assert decoded.config.update_interval == 5

    def test_load_creates_default_when_missing(self, tmp_path: Path):
        path = tmp_path / 'nested' / 'config.yaml'
        store = YamlConfigStore(path)
        decoded = store.load()
        assert path.is_file()
        assert decoded.config == starter_config()
        assert decoded.clean

    def test_ensure_default_does_not_overwrite(self, sample_config_yaml: Path):
        before = sample_config_yaml.read_text(encoding='utf-8')
        store = YamlConfigStore(sample_config_yaml)
        assert store.ensure_default() is False
        assert sample_config_yaml.read_text(encoding='utf-8') == before

    def test_ensure_default_writes_when_missing(self, tmp_path: Path):
        store = YamlConfigStore(tmp_path / 'config.yaml')
        assert store.exists() is False
        assert store.ensure_default() is True
        assert store.exists() is True

    def test_save_then_load(self, tmp_path: Path):
        store = YamlConfigStore(tmp_path / 'config.yaml')
        config = Config(clocks=[], update_interval=2, run_at_startup=True)
        assert store.save(config) == store.path
        assert store.load().config == config

    def test_diagnostics_are_logged(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        path = tmp_path / 'config.yaml'
        path.write_text('clocks:\n  - label: Rome\n    display: sideways\nupdateInterval: 10\n', encoding='utf-8')
        store = YamlConfigStore(path)
        with caplog.at_level(logging.WARNING, logger='menu_clock.config'):
            decoded = store.load()
        assert len(decoded.diagnostics) == 5
        for message in decoded.diagnostics:
            assert message in caplog.text

    def test_invalid_yaml_names_file(self, tmp_path: Path):
        path = tmp_path / 'config.yaml'
        path.write_text('clocks: [\n', encoding='utf-8')
        with pytest.raises(ConfigLoadError, match='config.yaml'):
            YamlConfigStore(path).load()

    def test_unreadable_file_raises(self, tmp_path: Path):
        path = tmp_path / 'config.yaml'
        path.write_bytes(b'\xff\xfe\x00bad')
        with pytest.raises(ConfigLoadError, match='Cannot read'):
            YamlConfigStore(path).load()

    def test_directory_in_place_of_file_raises(self, tmp_path: Path):
        path = tmp_path / 'config.yaml'
        path.mkdir()
        with pytest.raises(ConfigLoadError):
            YamlConfigStore(path).load()
