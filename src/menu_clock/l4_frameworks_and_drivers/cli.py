"""CLI entry point for menu-clock."""

from __future__ import annotations

import sys
import time
from pathlib import Path

import click

from menu_clock import __version__
from menu_clock.l1_entities.clock_config import DecodedConfig
from menu_clock.l1_entities.errors import ConfigLoadError
from menu_clock.l2_use_cases.clock_board_use_case import BoardSnapshot, ClockBoardUseCase, resolve_zone
from menu_clock.l3_interface_adapters.gateways.paths import LOG_DIR
from menu_clock.l3_interface_adapters.gateways.yaml_config_store import starter_config
from menu_clock.l4_frameworks_and_drivers.container import DependencyContainer
from menu_clock.l4_frameworks_and_drivers.logging_setup import setup_file_logging

STRIP_PREFIX = '⌚️'

# refresh period bounds for --watch; any integer is a valid updateInterval
MIN_REFRESH_SECONDS = 1
MAX_REFRESH_SECONDS = 24 * 60 * 60


def _load(board: ClockBoardUseCase) -> DecodedConfig:
    try:
        return board.reload()
    except ConfigLoadError as e:
        click.echo(f'Error: {e}', err=True)
        sys.exit(1)


def _echo_diagnostics(decoded: DecodedConfig) -> None:
    for message in decoded.diagnostics:
        click.echo(f'Warning: {message}', err=True)


def _echo_board(snapshot: BoardSnapshot) -> None:
    strip = snapshot.strip_text
    click.echo(f'{STRIP_PREFIX} {strip}' if strip else STRIP_PREFIX)
    for line in snapshot.menu_lines:
        click.echo(f'  {line}')


def refresh_seconds(update_interval: int) -> int:
    """Clamp *update_interval* to what the watch loop can sleep for."""
    return min(max(update_interval, MIN_REFRESH_SECONDS), MAX_REFRESH_SECONDS)


def _mtime(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


@click.group()
@click.option(
    '-c',
    '--config',
    'config_path',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Path to YAML config file (default: per-user config directory).',
)
@click.option('-v', '--verbose', is_flag=True, help='Mirror log output to stderr.')
@click.version_option(version=__version__)
@click.pass_context
def cli(ctx: click.Context, config_path: Path | None, verbose: bool):
    """menu-clock -- world clocks for the menu bar, configured in YAML."""
    setup_file_logging(LOG_DIR, verbose=verbose)
    ctx.obj = DependencyContainer(config_path)


@cli.command()
@click.option('-w', '--watch', is_flag=True, help='Keep refreshing every updateInterval seconds.')
@click.option(
    '-n',
    '--count',
    default=None,
    type=click.IntRange(min=1),
    help='With --watch, stop after this many refreshes.',
)
@click.pass_obj
def show(container: DependencyContainer, watch: bool, count: int | None):
    """Print the menu-bar strip and the dropdown list."""
    board = container.board
    _echo_diagnostics(_load(board))
    _echo_board(board.snapshot())
    if not watch:
        return

    seen = _mtime(container.store.path)
    shown = 1
    try:
        while count is None or shown < count:
            time.sleep(refresh_seconds(board.config.update_interval))
            current = _mtime(container.store.path)
            if current != seen:
                seen = current
                try:
                    _echo_diagnostics(board.reload())
                except ConfigLoadError as e:
                    click.echo(f'Error: {e} (keeping previous configuration)', err=True)
            click.echo()
            _echo_board(board.snapshot())
            shown += 1
    except KeyboardInterrupt:
        return


@cli.command()
@click.pass_obj
def check(container: DependencyContainer):
    """Validate the config file and list every repair applied while loading it."""
    decoded = _load(container.board)
    config = decoded.config
    click.echo(
        f'{container.store.path}: {len(config.clocks)} clocks '
        f'({len(config.menu_bar_clocks())} in menu bar, {len(config.menu_clocks())} in menu), '
        f'update every {config.update_interval}s, run at startup: {"yes" if config.run_at_startup else "no"}'
    )
    problems = [f'Warning: {message}' for message in decoded.diagnostics]
    for clock in config.clocks:
        if resolve_zone(clock.time_zone) is None:
            problems.append(f"Warning: clock '{clock.label}' has unknown time zone '{clock.time_zone}'")
    for line in problems:
        click.echo(line)
    if problems:
        sys.exit(1)
    click.echo('OK')


@cli.command()
@click.option('-f', '--force', is_flag=True, help='Overwrite an existing config file.')
@click.pass_obj
def init(container: DependencyContainer, force: bool):
    """Write the default config file."""
    store = container.store
    if store.exists() and not force:
        click.echo(f'Error: config already exists at {store.path} (use --force to overwrite)', err=True)
        sys.exit(1)
    try:
        path = store.save(starter_config())
    except OSError as e:
        click.echo(f'Error: cannot write {store.path}: {e}', err=True)
        sys.exit(1)
    click.echo(f'Wrote default config to {path}')


@cli.command()
@click.pass_obj
def path(container: DependencyContainer):
    """Print the config file location."""
    click.echo(str(container.store.path))


@cli.command()
@click.pass_obj
def edit(container: DependencyContainer):
    """Open the config file in $EDITOR, then re-check it."""
    store = container.store
    try:
        store.ensure_default()
    except OSError as e:
        click.echo(f'Error: cannot create {store.path}: {e}', err=True)
        sys.exit(1)
    click.edit(filename=str(store.path))
    decoded = _load(container.board)
    _echo_diagnostics(decoded)
    click.echo(f'Loaded {len(decoded.config.clocks)} clocks from {store.path}')
