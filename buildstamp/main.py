#!/usr/bin/env python3
"""
Main CLI entry point for buildstamp
"""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from buildstamp import __version__
from buildstamp.build import Build
from buildstamp.ci import detect_ci
from buildstamp.config.settings import get_env_info
from buildstamp.exceptions import ConfigurationError
from buildstamp.project import ProjectMetadata, load_project_metadata, load_settings
from buildstamp.utils.error_handling import handle_cli_error
from buildstamp.utils.logging import configure_logging
from buildstamp.utils.output import console, print_json
from buildstamp.versioning import VERSIONING_EXTENSION

app = typer.Typer(no_args_is_help=True)


def _create_build(ctx: typer.Context, base: Optional[str] = None, name: Optional[str] = None) -> Build:
    """Load project metadata (unless --base is given) and configure a build."""
    project_dir: Path = ctx.obj["project_dir"]
    if base is not None:
        metadata = ProjectMetadata(name=name or project_dir.resolve().name, version=base)
    else:
        metadata = load_project_metadata(project_dir)
        if name:
            metadata = ProjectMetadata(
                name=name,
                version=metadata.version,
                subprojects=metadata.subprojects,
                settings=metadata.settings,
            )

    build = metadata.create_build()
    build.configure()
    return build


@app.callback()
def main(
    ctx: typer.Context,
    project_dir: Path = typer.Option(
        Path("."), "--project-dir", "-C", help="Directory containing pyproject.toml"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show diagnostic output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress build lifecycle messages"),
):
    """
    buildstamp - CI detection and build version stamping

    [bold]Examples:[/bold]

    Print the version for this build:
        [cyan]buildstamp version[/cyan]

    Check whether the build runs on CI:
        [cyan]buildstamp ci[/cyan]

    Export values for a shell script:
        [cyan]eval "$(buildstamp env)"[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    try:
        configure_logging(verbose=verbose, quiet=quiet)
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1) from e
    ctx.obj = {"project_dir": project_dir}


@app.command()
@handle_cli_error("resolving version")
def version(
    ctx: typer.Context,
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Base version to use instead of pyproject.toml"
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Project name override"),
):
    """Print the resolved version for this build."""
    build = _create_build(ctx, base=base, name=name)
    typer.echo(build.version)


@app.command()
@handle_cli_error("detecting CI")
def ci(ctx: typer.Context):
    """Print whether the build is running on CI."""
    settings = load_settings(ctx.obj["project_dir"])
    typer.echo("true" if detect_ci(variable=settings.ci_env_var) else "false")


@app.command()
@handle_cli_error("reading build info")
def info(
    ctx: typer.Context,
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Base version to use instead of pyproject.toml"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Show CI status and version details for every project."""
    build = _create_build(ctx, base=base)

    rows = []
    for project in build.projects:
        context = project.extensions[VERSIONING_EXTENSION]
        rows.append({
            "project": project.name,
            "root": project.is_root,
            "base_version": context.base_version,
            "building_on_ci": project.building_on_ci,
            "build_number": context.build_number,
            "commit_id": context.commit_id,
            "abbreviated_commit_id": context.abbreviated_commit_id,
            "version": project.version,
        })

    if json_output:
        print_json({
            "building_on_ci": build.building_on_ci,
            "projects": rows,
            "environment": get_env_info(build.environ, build.settings),
        })
        return

    table = Table(title=f"buildstamp {__version__}")
    table.add_column("Project", style="cyan")
    table.add_column("Base")
    table.add_column("CI")
    table.add_column("Build No.")
    table.add_column("Commit")
    table.add_column("Version", style="green")

    for row in rows:
        table.add_row(
            row["project"],
            row["base_version"],
            "yes" if row["building_on_ci"] else "no",
            row["build_number"] or "[dim]-[/dim]",
            row["abbreviated_commit_id"] or "[dim]-[/dim]",
            row["version"],
        )

    console.print(table)


@app.command()
@handle_cli_error("exporting build values")
def env(
    ctx: typer.Context,
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Base version to use instead of pyproject.toml"
    ),
):
    """Print shell assignments for BUILDSTAMP_VERSION and BUILDING_ON_CI."""
    build = _create_build(ctx, base=base)
    typer.echo(f"BUILDSTAMP_VERSION={build.version}")
    typer.echo(f"BUILDING_ON_CI={'true' if build.building_on_ci else 'false'}")


def run():
    """Entry point for the CLI"""
    app()


if __name__ == "__main__":
    run()
