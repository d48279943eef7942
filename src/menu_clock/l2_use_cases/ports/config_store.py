"""Port: configuration store."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from menu_clock.l1_entities.clock_config import Config, DecodedConfig


class ConfigStore(Protocol):
    """Abstract persistent home of the configuration document."""

    @property
    def path(self) -> Path:
        """Location of the document."""
        ...

    def exists(self) -> bool:
        """Whether the document is present."""
        ...

    def ensure_default(self) -> bool:
        """Write the starter document if none exists. Returns True when written."""
        ...

    def load(self) -> DecodedConfig:
        """Read and decode the document. Raises ConfigLoadError when unreadable."""
        ...

    def save(self, config: Config) -> Path:
        """Serialize *config* over the document."""
        ...
