"""L1 entity: where a clock is shown."""

from __future__ import annotations

import enum


class ClockDisplay(enum.Enum):
    MENUBAR = 'menubar'
    MENU = 'menu'
    BOTH = 'both'

    @property
    def in_menu_bar(self) -> bool:
        return self in (ClockDisplay.MENUBAR, ClockDisplay.BOTH)

    @property
    def in_menu(self) -> bool:
        return self in (ClockDisplay.MENU, ClockDisplay.BOTH)
