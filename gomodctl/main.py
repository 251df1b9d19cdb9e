"""
gomodctl — CLI entrypoint.

Usage:
    python -m gomodctl.main --help
    python -m gomodctl.main status
    python -m gomodctl.main mod upgrade github.com/lib/pq
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from gomodctl.core.observability.logging_config import setup_logging

from gomodctl import __version__


@click.group()
@click.version_option(version=__version__, prog_name="gomodctl")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to .gomodctl.yml (default: auto-detect).",
)
@click.option(
    "--dir",
    "-C",
    "work_dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Run as if started in this directory.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    work_dir: str | None,
) -> None:
    """gomodctl — manage go.mod and go.sum through the go toolchain."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("GOMODCTL_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("GOMODCTL_LOG_FILE"),
        log_file_level=os.environ.get("GOMODCTL_LOG_FILE_LEVEL"),
    )

    # ── Module context (once, threaded to every command) ────────
    from gomodctl.core.config.loader import ConfigError, find_manifest, load_settings
    from gomodctl.core.context import ModuleContext

    start = Path(work_dir) if work_dir else Path.cwd()
    try:
        settings = load_settings(Path(config_path) if config_path else None, start_dir=start)
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    ctx.obj["start_dir"] = start
    manifest = find_manifest(start)
    root = manifest.parent if manifest else start
    ctx.obj["context"] = ModuleContext.from_settings(settings, root)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show toolchain and module status."""
    from gomodctl.core.services.mod_client import GoModClient
    from gomodctl.core.use_cases.status import get_status

    context = ctx.obj["context"]
    result = get_status(context, GoModClient(context, ctx.obj.get("adapter")))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if not result.toolchain_available:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    click.secho(f"\n🐹 {result.toolchain_version}", fg="cyan", bold=True)
    click.echo(f"   Directory:   {result.working_dir}")
    click.echo(f"   GO111MODULE: {result.go111module}")

    manifest_icon = "✅" if result.has_manifest else "❌"
    lock_icon = "🔒" if result.has_lock else "⚠️"
    click.echo(f"   {manifest_icon} {context.manifest_name}")
    click.echo(f"   {lock_icon} {context.lock_name}")
    click.echo()

    if result.modules_enabled:
        click.secho(f"   Module: {result.current_module}", fg="green", bold=True)
    else:
        click.secho("   Modules: not enabled here", fg="yellow")
    if result.error:
        click.echo(f"   ℹ️  {result.error}")

    click.echo()


# ── Register sub-command groups from gomodctl/ui/cli/ ─────────────

from gomodctl.ui.cli.mod import mod

cli.add_command(mod)


if __name__ == "__main__":
    cli()
