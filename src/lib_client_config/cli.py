"""CLI adapter for ``lib_client_config`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose configuration finalization via a command line interface so operators
can inspect which endpoint, region, and signing region a client would use, and
which layer supplied each value, without writing Python code.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires global traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_resolve` – builds a :class:`~lib_client_config.core.ClientBuilder`
  from options, finalizes it, and prints the result as JSON.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. It only calls the composition root and
never reaches into resolvers or the merge pipeline directly.
"""

from __future__ import annotations

import json
import sys
from importlib import metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.metadata.default import load_service_metadata
from .core import ClientBuilder
from .domain.options import AdvancedOption, OverrideConfiguration
from .domain.region import ServiceIdentity

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
_DISTRIBUTION: Final[str] = "lib_client_config"


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Layered client configuration resolver",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name=_DISTRIBUTION,
    message="lib_client_config version %(version)s",
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
        meta = metadata.metadata(_DISTRIBUTION)
    except metadata.PackageNotFoundError:
        click.echo("lib_client_config (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', _DISTRIBUTION)}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.11')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("resolve", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--endpoint-prefix", required=True, help="Service endpoint prefix (first DNS label)")
@click.option("--signing-name", default=None, help="Service signing name (defaults to the endpoint prefix)")
@click.option("--region", default=None, help="Explicit region; otherwise detected from the environment")
@click.option("--endpoint", default=None, help="Explicit endpoint override, used verbatim")
@click.option("--profile", default=None, help="Named AWS profile for region detection and credentials")
@click.option(
    "--no-region-detection",
    "no_region_detection",
    is_flag=True,
    default=False,
    help="Forbid detecting the region from the environment/profile",
)
@click.option(
    "--metadata",
    "metadata_file",
    type=click.Path(path_type=Path, exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="TOML/JSON/YAML service metadata table layered over the built-in one",
)
@click.option("--async", "use_async", is_flag=True, default=False, help="Finalize the async variant")
@click.option(
    "--provenance/--no-provenance",
    default=False,
    help="Include the layer that supplied each value",
)
@click.option(
    "--indent",
    type=int,
    default=None,
    help="Pretty-print JSON output with the provided indent size",
)
def cli_resolve(
    endpoint_prefix: str,
    signing_name: Optional[str],
    region: Optional[str],
    endpoint: Optional[str],
    profile: Optional[str],
    no_region_detection: bool,
    metadata_file: Optional[Path],
    use_async: bool,
    provenance: bool,
    indent: Optional[int],
) -> None:
    """Finalize a client configuration and print it as JSON."""

    builder = ClientBuilder(
        ServiceIdentity(endpoint_prefix, signing_name or endpoint_prefix),
        service_metadata=load_service_metadata(str(metadata_file)) if metadata_file else None,
        profile=profile,
    )
    builder.set_region(region).set_endpoint_override(endpoint)
    if no_region_detection:
        overrides = OverrideConfiguration.builder().advanced_option(
            AdvancedOption.ENABLE_DEFAULT_REGION_DETECTION, False
        )
        builder.set_override_configuration(overrides.build())

    finalized = builder.async_client_configuration() if use_async else builder.sync_client_configuration()
    payload: dict[str, Any] = {"config": finalized.as_dict()}
    if provenance:
        payload["provenance"] = {key: dict(value) for key, value in finalized.origins.items()}
    click.echo(json.dumps(payload, indent=indent, separators=(",", ":")))


def main(argv: Optional[Sequence[str]] = None, *, restore_traceback: bool = True) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=_DISTRIBUTION,
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
