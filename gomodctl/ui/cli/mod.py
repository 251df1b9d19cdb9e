"""
CLI commands for Go module workflows.

Thin wrappers over ``gomodctl.core.services.mod_workflows``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from gomodctl.core.models.outcome import WorkflowOutcome


def _session(ctx: click.Context, assume_yes: bool = False):
    """Build context, client and workflows; run the one-time module-mode setup."""
    from gomodctl.core.services.mod_client import GoModClient
    from gomodctl.core.services.mod_mode import initialize_module_mode
    from gomodctl.core.services.mod_workflows import ModWorkflows
    from gomodctl.ui.cli.prompts import ClickHost

    context = ctx.obj["context"]
    client = GoModClient(context, ctx.obj.get("adapter"))
    if not ctx.obj.get("mode_initialized"):
        initialize_module_mode(context, client)
        ctx.obj["mode_initialized"] = True
    return ModWorkflows(context, client, ctx.obj.get("host") or ClickHost(assume_yes=assume_yes))


def _fail(message: str, as_json: bool = False) -> None:
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def _line(ctx: click.Context, module: str | None, at: str | None) -> str | None:
    """The "current line" handed to the resolver: an explicit module or a FILE:LINE.

    Relative FILE paths are taken against the --dir directory.
    """
    if module:
        return module
    if at:
        from gomodctl.core.services.mod_resolver import read_line_at

        try:
            return read_line_at(at, ctx.obj.get("start_dir") or Path.cwd())
        except (ValueError, OSError) as e:
            raise click.BadParameter(str(e), param_hint="--at") from e
    return None


def _report(outcome: WorkflowOutcome, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps(outcome.to_dict(), indent=2))
        return

    if outcome.status == "ok":
        if outcome.message:
            click.secho(f"✅ {outcome.message}", fg="green", bold=True)
    elif outcome.status == "noop":
        click.secho(f"✅ {outcome.message}", fg="green")
    else:
        click.secho(f"⊘ {outcome.message}", fg="yellow")

    if outcome.output.strip():
        for line in outcome.output.rstrip().splitlines():
            click.echo(f"   {line}")


def _run(ctx: click.Context, as_json: bool, action, assume_yes: bool = False) -> None:
    """Run a workflow, turning module errors into a clean exit 1."""
    from gomodctl.core.services.mod_client import GoModError

    try:
        outcome = action(_session(ctx, assume_yes))
    except GoModError as e:
        _fail(str(e), as_json)
        return
    _report(outcome, as_json)


_json_option = click.option(
    "--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.",
)
_at_option = click.option(
    "--at", "at", default=None, metavar="FILE:LINE",
    help="Take the module from this line of a file (e.g. go.mod:12).",
)


@click.group()
def mod() -> None:
    """Modules — list, upgrade, get, tidy, replace, why, fmt."""


# ── Observe ─────────────────────────────────────────────────────


@mod.command("list")
@_json_option
@click.pass_context
def list_modules(ctx: click.Context, as_json: bool) -> None:
    """List modules in the build list."""
    from gomodctl.core.services.mod_client import GoModError

    try:
        modules = _session(ctx).list_modules()
    except GoModError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps([m.model_dump() for m in modules], indent=2))
        return

    click.secho(f"📦 Modules ({len(modules)}):", fg="cyan", bold=True)
    for m in modules:
        replace = f"  => {m.replace}" if m.replace else ""
        click.echo(f"   {m.path:<50} {m.version}{replace}")
    click.echo()


@mod.command()
@_json_option
@click.pass_context
def outdated(ctx: click.Context, as_json: bool) -> None:
    """List modules with a newer version available."""
    from gomodctl.core.services.mod_client import GoModError

    try:
        modules = _session(ctx).outdated()
    except GoModError as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps([m.model_dump() for m in modules], indent=2))
        return

    if not modules:
        click.secho("✅ All modules up to date", fg="green")
        return

    click.secho(f"📦 Outdated ({len(modules)}):", fg="yellow", bold=True)
    for m in modules:
        click.echo(f"   {m.path:<50} {m.current:<12} → {m.latest}")
    click.echo()


@mod.command()
@click.argument("line")
@_json_option
def refs(line: str, as_json: bool) -> None:
    """Show the module path and version found in LINE."""
    from gomodctl.core.services.mod_refs import extract_pair

    module, version = extract_pair(line)

    if as_json:
        click.echo(json.dumps({"module": module, "version": version}, indent=2))
        return

    click.echo(f"module:  {module or '-'}")
    click.echo(f"version: {version or '-'}")


# ── Act ─────────────────────────────────────────────────────────


@mod.command()
@click.argument("module", required=False)
@_at_option
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Don't ask for confirmation.")
@_json_option
@click.pass_context
def upgrade(ctx: click.Context, module: str | None, at: str | None, assume_yes: bool, as_json: bool) -> None:
    """Upgrade one module to its newest version."""
    line = _line(ctx, module, at)
    _run(ctx, as_json, lambda wf: wf.upgrade_one(line), assume_yes=assume_yes)


@mod.command("upgrade-all")
@click.option("--patch", "patch_only", is_flag=True, help="Only take patch releases.")
@click.pass_context
def upgrade_all(ctx: click.Context, patch_only: bool) -> None:
    """Upgrade every dependency, streaming go's output."""
    from gomodctl.core.services.mod_client import GoModError, ToolInvocationFailed

    scope = "patch releases" if patch_only else "all dependencies"
    click.secho(f"📦 Upgrading {scope}...", fg="cyan")

    try:
        outcome = _session(ctx).upgrade_all(patch_only=patch_only)
    except ToolInvocationFailed as e:
        # Output was already streamed
        _fail(f"go get exited with code {e.result.return_code}")
        return
    except GoModError as e:
        _fail(str(e))
        return

    click.secho(f"✅ {outcome.message}", fg="green", bold=True)


@mod.command()
@click.argument("module", required=False)
@click.argument("version", required=False)
@_at_option
@_json_option
@click.pass_context
def get(ctx: click.Context, module: str | None, version: str | None, at: str | None, as_json: bool) -> None:
    """Switch MODULE to VERSION (or pick one from its published versions)."""
    line = _line(ctx, module, at)
    _run(ctx, as_json, lambda wf: wf.get_version(line, version))


@mod.command()
@_json_option
@click.pass_context
def tidy(ctx: click.Context, as_json: bool) -> None:
    """Run go mod tidy."""
    _run(ctx, as_json, lambda wf: wf.tidy())


@mod.command()
@click.argument("module", required=False)
@click.option("--path", "local_path", default=None, help="Local directory to use instead.")
@_at_option
@_json_option
@click.pass_context
def replace(
    ctx: click.Context,
    module: str | None,
    local_path: str | None,
    at: str | None,
    as_json: bool,
) -> None:
    """Replace MODULE with a local checkout."""
    line = _line(ctx, module, at)
    _run(ctx, as_json, lambda wf: wf.replace_with_local(line, local_path))


@mod.command()
@click.argument("module", required=False)
@_at_option
@_json_option
@click.pass_context
def why(ctx: click.Context, module: str | None, at: str | None, as_json: bool) -> None:
    """Explain why MODULE is needed."""
    line = _line(ctx, module, at)
    _run(ctx, as_json, lambda wf: wf.why(line))


@mod.command("fmt")
@click.argument("saved_file", required=False, default="go.mod")
@_json_option
@click.pass_context
def fmt(ctx: click.Context, saved_file: str, as_json: bool) -> None:
    """Format go.mod after SAVED_FILE was saved (default: go.mod)."""
    _run(ctx, as_json, lambda wf: wf.format_on_save(saved_file))


@mod.command()
@click.option("--interval", type=float, default=None, help="Seconds between checks.")
@click.pass_context
def watch(ctx: click.Context, interval: float | None) -> None:
    """Format go.mod every time it is saved (Ctrl+C to stop)."""
    from gomodctl.core.services.mod_client import GoModError
    from gomodctl.core.services.mod_watcher import ManifestWatcher

    try:
        workflows = _session(ctx)
    except GoModError as e:
        _fail(str(e))
        return

    context = workflows.context
    if not context.manifest_path.is_file():
        _fail(f"No {context.manifest_name} in {context.working_dir}")
        return

    def on_save(path: Path) -> None:
        try:
            outcome = workflows.format_on_save(path)
        except GoModError as e:
            click.secho(f"❌ {e}", fg="red")
            return
        _report(outcome, as_json=False)

    watcher = ManifestWatcher(
        context.manifest_path,
        on_save,
        interval=interval or context.watch_interval,
    )
    click.secho(f"👀 Watching {context.manifest_path}", fg="cyan")
    try:
        watcher.run()
    except KeyboardInterrupt:
        click.echo()
        click.secho("Stopped.", fg="cyan")
