"""Dependency container: composition root for wiring all layers together."""

from __future__ import annotations

from pathlib import Path

from menu_clock.l2_use_cases.clock_board_use_case import ClockBoardUseCase
from menu_clock.l2_use_cases.ports.config_store import ConfigStore
from menu_clock.l3_interface_adapters.gateways.paths import default_config_path
from menu_clock.l3_interface_adapters.gateways.yaml_config_store import YamlConfigStore


class DependencyContainer:
    """Creates and wires all concrete instances. Easy to override for testing."""

    def __init__(self, config_path: Path | None = None, store: ConfigStore | None = None) -> None:
        self.store: ConfigStore = store or YamlConfigStore(config_path or default_config_path())
        self.board = ClockBoardUseCase(self.store)
