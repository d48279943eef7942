"""menu-clock: world clocks for the menu bar, configured from a YAML file."""

__version__ = '0.1.0'
