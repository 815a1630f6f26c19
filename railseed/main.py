"""
railseed — CLI entrypoint.

Usage:
    railseed --help
    railseed run path/to/new_app
    railseed run --dry-run
    railseed config check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from railseed import __version__
from railseed.core.observability.logging_config import (
    LOG_FILE_ENV,
    LOG_FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)

_STATUS_COLORS = {"ok": "green", "partial": "yellow", "failed": "red"}

_project_dir_arg = click.argument(
    "project_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
)


@click.group()
@click.version_option(version=__version__, prog_name="railseed")
@click.option("--verbose", "-v", is_flag=True, help="Log every step as it runs.")
@click.option("--quiet", "-q", is_flag=True, help="Only log errors.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to railseed.yml (default: PROJECT_DIR/railseed.yml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """railseed — scaffold a fresh Rails app into a full-stack starter."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet, environ=os.environ),
        log_file=os.environ.get(LOG_FILE_ENV),
        log_file_level=os.environ.get(LOG_FILE_LEVEL_ENV),
    )


# ── run ─────────────────────────────────────────────────────────


@cli.command()
@_project_dir_arg
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--dry-run", is_flag=True, help="List the steps without executing them.")
@click.option("--mock", is_flag=True, help="Use mock adapter (no real execution).")
@click.option("--owner", default=None, help="Owner (org or user) for the remote repository.")
@click.option("--public", is_flag=True, help="Create the remote repository as public.")
@click.option("--strict", is_flag=True, help="Exit non-zero if any step failed.")
@click.pass_context
def run(
    ctx: click.Context,
    project_dir: Path,
    as_json: bool,
    dry_run: bool,
    mock: bool,
    owner: str | None,
    public: bool,
    strict: bool,
) -> None:
    """Scaffold PROJECT_DIR (default: current directory).

    Examples:

        rails new my_app -d postgresql --css tailwind && railseed run my_app

        railseed run --dry-run

        railseed run my_app --mock

        railseed run my_app --owner acme --public
    """
    from railseed.core.use_cases.scaffold import run_scaffold

    overrides = {"owner": owner, "private": False if public else None}
    result = run_scaffold(
        project_dir,
        config_path=ctx.obj.get("config_path"),
        overrides=overrides,
        dry_run=dry_run,
        mock=mock,
    )

    report = result.report
    exit_code = 0
    if result.error:
        exit_code = 1
    elif report and (report.critical_failures or (strict and report.failed)):
        exit_code = 1

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(exit_code)

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    assert report is not None and result.identity is not None

    mode_label = "[dry-run] " if dry_run else "[mock] " if mock else ""
    click.secho(f"\n🌱 {mode_label}{result.identity.title}", fg="cyan", bold=True)
    click.echo(f"   {result.config.project_dir if result.config else project_dir}")
    click.echo()

    # Per-stage results
    for stage, stage_report in report.stages.items():
        color = _STATUS_COLORS.get(stage_report.status, "white")
        click.secho(f"   {stage:<12}", fg=color, nl=False)
        click.echo(
            f" {stage_report.succeeded} ok, {stage_report.failed} failed"
            + (f", {stage_report.skipped} skipped" if stage_report.skipped else "")
        )
        for outcome in stage_report.outcomes:
            if outcome.failed:
                click.secho(f"     ✗ {outcome.label}", fg="red")
                for line in (outcome.error or "").split("\n")[:5]:
                    click.echo(f"       │ {line}")
            elif outcome.status == "skipped" and ctx.obj.get("verbose"):
                click.secho(f"     ⊘ {outcome.label}", fg="yellow")
            elif outcome.ok and ctx.obj.get("verbose"):
                click.secho(f"     ✓ {outcome.label}", fg="green")

    if report.hints:
        click.echo()
        for hint in report.hints:
            click.secho(f"   💡 {hint}", fg="blue")

    # Summary
    click.echo()
    if report.failed:
        click.secho(
            f"   {report.failed} of {report.total} steps failed",
            fg=_STATUS_COLORS.get(report.status, "white"),
            bold=True,
        )
        if report.critical_failures:
            click.secho(
                f"   {len(report.critical_failures)} critical step(s) failed",
                fg="red",
                bold=True,
            )
    else:
        verb = "planned" if dry_run else "succeeded"
        click.secho(f"   All {report.total} steps {verb}", fg="green", bold=True)

    click.echo()
    sys.exit(exit_code)


# ── identity ────────────────────────────────────────────────────


@cli.command()
@_project_dir_arg
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def identity(project_dir: Path, as_json: bool) -> None:
    """Show the names derived from PROJECT_DIR."""
    from railseed.core.models.identity import DerivedIdentity

    derived = DerivedIdentity.from_path(project_dir)

    if as_json:
        click.echo(json.dumps(derived.model_dump(), indent=2))
        return

    click.echo(f"   Identifier: {derived.identifier}")
    click.echo(f"   Title:      {derived.title}")
    click.echo(f"   Repository: {derived.repo_name}")


# ── check ───────────────────────────────────────────────────────


@cli.command()
@_project_dir_arg
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def check(project_dir: Path, as_json: bool) -> None:
    """Check that the tools the recipe runs are available."""
    from railseed.core.use_cases.preflight import check_tools

    result = check_tools(project_dir)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.ready else 1)

    click.secho("\n🔧 Tools", fg="cyan", bold=True)
    for tool in result.tools:
        if tool.available:
            click.secho(f"   ✓ {tool.name:<10}", fg="green", nl=False)
        elif tool.required:
            click.secho(f"   ✗ {tool.name:<10}", fg="red", nl=False)
        else:
            click.secho(f"   ⊘ {tool.name:<10}", fg="yellow", nl=False)
        click.echo(f" {tool.purpose}")

    click.echo()
    if not result.ready:
        click.secho(f"   Missing: {', '.join(result.missing_required)}", fg="red", bold=True)
        click.echo()
        sys.exit(1)


# ── config ──────────────────────────────────────────────────────


@cli.group()
def config() -> None:
    """Configuration commands."""


@config.command("check")
@_project_dir_arg
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def config_check(ctx: click.Context, project_dir: Path, as_json: bool) -> None:
    """Validate railseed.yml and environment settings."""
    from railseed.core.use_cases.config_check import check_config

    result = check_config(project_dir, config_path=ctx.obj.get("config_path"))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None
        click.secho("✅ Configuration is valid", fg="green", bold=True)
        if result.config_path:
            click.echo(f"   File:    {result.config_path}")
        click.echo(f"   Owner:   {result.config.owner or '(authenticated user)'}")
        click.echo(f"   Timeout: {result.config.command_timeout}s")
    else:
        click.secho("❌ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        click.echo()
        sys.exit(1)

    click.echo()


if __name__ == "__main__":
    cli()
