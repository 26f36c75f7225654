"""
envbench - CLI Entry Point

Usage:
    envbench
    envbench --multiplier=2 --output_width=70
    envbench --mysql_user=root --mysql_password=secret --json=report.json
"""

import logging
import sys

import click
from rich.console import Console

from . import __version__
from .benchmark.base import CaseStatus
from .benchmark.reporter import Reporter
from .config import ConfigurationError, resolve_configuration
from .session import run_benchmarks

logger = logging.getLogger(__name__)

console = Console(stderr=True)

SETTING_OPTIONS = (
    "multiplier",
    "output_width",
    "mysql_host",
    "mysql_user",
    "mysql_password",
    "mysql_port",
    "mysql_database",
    "mysql_table",
    "mysql_socket",
)


def setup_logging(verbose: bool = False, debug: bool = False):
    """Configure logging level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True
    )


@click.command(context_settings=dict(ignore_unknown_options=True, allow_extra_args=True))
@click.version_option(version=__version__)
@click.option('--multiplier', default=None, help='Difficulty multiplier (default: 1.0)')
@click.option('--output_width', default=None, help='Report line width (default: 55)')
@click.option('--mysql_host', default=None, help='MySQL host (default: 127.0.0.1)')
@click.option('--mysql_user', default=None, help='MySQL user')
@click.option('--mysql_password', default=None, help='MySQL password')
@click.option('--mysql_port', default=None, help='MySQL port (default: 3306)')
@click.option('--mysql_database', default=None, help='MySQL database, created if missing')
@click.option('--mysql_table', default=None, help='Scratch table name (default: random)')
@click.option('--mysql_socket', default=None, help='MySQL unix socket path')
@click.option('--json', 'json_path', default=None, help='Also write the results as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output (INFO level)')
@click.option('--debug', is_flag=True, help='Enable debug output (DEBUG level)')
@click.pass_context
def cli(ctx, json_path, verbose, debug, **options):
    """
    Python Environment Benchmark Tool

    Times arithmetic, string, collection, regex, hashing, serialization,
    filesystem, random and MySQL workloads on this interpreter and prints
    an aligned scorecard. All flags use the --key=value form; unknown
    flags are ignored.
    """
    setup_logging(verbose, debug)

    if ctx.args:
        logger.debug(f"Ignoring unknown arguments: {' '.join(ctx.args)}")

    settings = {key: options[key] for key in SETTING_OPTIONS if options.get(key) is not None}

    try:
        config = resolve_configuration(settings)
    except ConfigurationError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    result = run_benchmarks(config, stream=sys.stdout)

    if json_path:
        json_file = Reporter.from_config(config).generate_json(result, json_path)
        console.print(f"📊 JSON results: [green]{json_file}[/green]")

    failed = result.count(CaseStatus.FAILED)
    if failed:
        logger.info(f"{failed} benchmark(s) reported an error")


def main():
    """Console script entry point. requires-python gates the interpreter version."""
    cli()


if __name__ == "__main__":
    main()
