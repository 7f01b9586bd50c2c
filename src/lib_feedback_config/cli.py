"""CLI adapter for ``lib_feedback_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the settings resolver via a command line interface so integrators can
inspect what the daemon will see (resolved events, definitions, interned
resources, and diagnostics) without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_read` – resolves the configuration and prints it as JSON.
* :func:`cli_event` – prints one resolved event.
* :func:`cli_identify` – parses a single group header.
* :func:`cli_generate_example` – writes the sample configuration file.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It invokes the composition root
(:func:`lib_feedback_config.core.load_settings`) and never reaches into adapter
implementation details directly. ``lib_cli_exit_tools`` centralises the exit
code strategy so all commands behave consistently across shells and CI.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .application.identifiers import parse_group_identifier
from .core import load_settings
from .domain.registry import Registry
from .examples import generate_examples as _generate_examples

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

_config_option = click.option(
    "--config",
    "configs",
    multiple=True,
    type=click.Path(path_type=Path, dir_okay=False),
    help="Configuration file to try instead of the default search list (repeatable, first loadable wins)",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` when metadata is missing."""

    try:
        return metadata.version("lib_feedback_config")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Resolve feedback daemon event configuration",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_feedback_config",
    message="lib_feedback_config version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command configuring traceback handling for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_feedback_config")
    except metadata.PackageNotFoundError:
        click.echo("lib_feedback_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_feedback_config')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("read", context_settings=CLICK_CONTEXT_SETTINGS)
@_config_option
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
@click.option(
    "--diagnostics/--no-diagnostics",
    default=False,
    help="Include the conditions absorbed during resolution",
)
def cli_read(configs: Sequence[Path], indent: Optional[int], diagnostics: bool) -> None:
    """Resolve the configuration and print the registry as JSON."""

    registry = _load(configs)
    click.echo(registry.to_json(indent=indent, include_diagnostics=diagnostics))


@cli.command("event", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("name")
@_config_option
@click.option("--indent", type=int, default=2, show_default=True, help="JSON indent size")
def cli_event(name: str, configs: Sequence[Path], indent: int) -> None:
    """Print the resolved event *name* as JSON."""

    registry = _load(configs)
    event = registry.events.get(name)
    if event is None:
        raise click.ClickException(f"Unknown event: {name}")
    click.echo(json.dumps(event.as_dict(), indent=indent))


@cli.command("identify", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("raw")
def cli_identify(raw: str) -> None:
    """Parse the group header *raw* and print kind, name, and parent.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["identify", "event sms@base"])
    >>> result.output.strip()
    '{"kind":"event","name":"sms","parent":"base"}'
    """

    identifier = parse_group_identifier(raw)
    if identifier is None:
        raise click.ClickException(f"Not a valid group header: {raw!r}")
    payload = {"kind": identifier.kind.value, "name": identifier.name, "parent": identifier.parent}
    click.echo(json.dumps(payload, separators=(",", ":")))


@cli.command("generate-example", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive the sample configuration",
)
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing example files if set",
    show_default=True,
)
def cli_generate_example(destination: Path, force: bool) -> None:
    """Write a sample ``ngf.ini`` under *destination*."""

    created = _generate_examples(destination, force=force)
    click.echo(json.dumps([str(path) for path in created], indent=2))


def _load(configs: Sequence[Path]) -> Registry:
    """Run :func:`load_settings` with explicit candidates when any were given."""

    candidates = [str(path) for path in configs] if configs else None
    return load_settings(candidates)


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name="lib_feedback_config",
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
