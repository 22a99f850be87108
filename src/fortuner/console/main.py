"""Command‑line interface for fortuner.

``tell`` prints a random fortune, or every fortune matching ``--pattern``
grouped by source file.  ``files`` lists the fortune files that would be
read and ``show-config`` prints a configuration file.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, List, NoReturn, Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from .. import __version__
from ..config_loader import MAX_SEED, Config, build_config, load_config, merge_options
from ..discovery.engine import discover_files
from ..errors import FortunerError
from ..logging.logger import configure_logging
from ..parsing.engine import TERMINATOR, read_file, read_fortunes
from ..selection.engine import FALLBACK_MESSAGE, label_matches, make_random_source, pick_fortune


console = Console()
err_console = Console(stderr=True)


def fail(err: FortunerError) -> NoReturn:
    err_console.print(str(err), style='red', markup=False, highlight=False, soft_wrap=True)
    sys.exit(1)


def resolve_config(config_path: Optional[str], **cli_values: Any) -> Config:
    """Merge the optional config file with command-line values and validate."""
    file_values = load_config(Path(config_path)) if config_path else {}
    merged = merge_options(file_values, **cli_values)
    if not merged['sources']:
        raise click.UsageError('No fortune sources given; pass SOURCES or set "sources" in --config.')
    return build_config(**merged)


config_option = click.option(
    '--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
    default=None, help='YAML file with default options.',
)


class DefaultCommandGroup(click.Group):
    """Group that runs ``tell`` when the first argument names no command.

    ``fortuner jokes -m Yogi`` is read as ``fortuner tell jokes -m Yogi``.
    """

    default_command = 'tell'

    def parse_args(self, ctx: click.Context, args: List[str]) -> List[str]:
        flags = {opt for param in self.get_params(ctx) for opt in param.opts + param.secondary_opts}
        for index, arg in enumerate(args):
            if arg in flags:
                continue
            if arg not in self.commands:
                args = args[:index] + [self.default_command] + args[index:]
            break
        return super().parse_args(ctx, args)


@click.group(cls=DefaultCommandGroup)
@click.version_option(__version__, prog_name='fortuner')
@click.option('-v', '--verbose', is_flag=True, help='Log discovery and parsing details to stderr.')
def cli(verbose: bool) -> None:
    """fortuner: print random or matching fortunes."""
    configure_logging(verbose)


@cli.command()
@click.argument('sources', nargs=-1, type=click.Path())
@click.option('-m', '--pattern', default=None, help='Print every fortune matching this regular expression.')
@click.option(
    '-i', '--insensitive/--case-sensitive', default=None,
    help='Case-insensitive pattern matching (default: case-sensitive, or the config file value).',
)
@click.option('-s', '--seed', type=click.IntRange(0, MAX_SEED), default=None, help='Random seed.')
@config_option
def tell(
    sources: Tuple[str, ...],
    pattern: Optional[str],
    insensitive: Optional[bool],
    seed: Optional[int],
    config_path: Optional[str],
) -> None:
    """Print a random fortune, or all fortunes matching PATTERN."""
    try:
        cfg = resolve_config(config_path, sources=sources, pattern=pattern, insensitive=insensitive, seed=seed)
        fortunes = read_fortunes(discover_files(cfg.sources))
    except FortunerError as err:
        fail(err)

    if cfg.pattern is not None:
        for item in label_matches(fortunes, cfg.pattern):
            if item.header is not None:
                click.echo(f'({item.header})', err=True)
            click.echo(item.fortune.text)
            click.echo(TERMINATOR)
    else:
        choice = pick_fortune(fortunes, make_random_source(cfg.seed))
        click.echo(choice.text if choice is not None else FALLBACK_MESSAGE)


@cli.command()
@click.argument('sources', nargs=-1, type=click.Path())
@config_option
def files(sources: Tuple[str, ...], config_path: Optional[str]) -> None:
    """List the fortune files found under SOURCES."""
    table = Table(title='Fortune files')
    table.add_column('Source', no_wrap=True)
    table.add_column('Fortunes', justify='right', no_wrap=True)
    table.add_column('Path', overflow='fold')

    total = 0
    try:
        cfg = resolve_config(config_path, sources=sources)
        for path in discover_files(cfg.sources):
            count = len(read_file(path))
            total += count
            table.add_row(path.name, str(count), str(path))
    except FortunerError as err:
        fail(err)

    table.add_section()
    table.add_row('Total', str(total), '')
    console.print(table)


@cli.command()
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False), required=True, help='Path to configuration file.')
def show_config(config_path: str) -> None:
    """Print the configuration file as JSON."""
    try:
        cfg = load_config(Path(config_path))
    except FortunerError as err:
        fail(err)
    console.print_json(json.dumps(cfg, indent=2))


if __name__ == '__main__':  # pragma: no cover
    cli()
