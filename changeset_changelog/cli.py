"""CLI entry point for changeset-changelog."""

from __future__ import annotations

import asyncio
from pathlib import Path

import click
from pydantic import ValidationError

from changeset_changelog.changelog_functions import load_changelog_functions
from changeset_changelog.config import DEFAULT_CHANGELOG, ChangelogConfig, load_config
from changeset_changelog.models import ReleasePlan
from changeset_changelog.pipeline import apply_changelogs, generate_changelog_entries

_config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default="pyproject.toml",
    show_default=True,
    help="pyproject.toml holding [tool.changeset-changelog].",
)


def _load_plan(plan_path: Path) -> ReleasePlan:
    try:
        return ReleasePlan.model_validate_json(plan_path.read_text())
    except ValidationError as e:
        raise click.ClickException(f"Invalid release plan {plan_path}:\n{e}") from e


def _load_config(config_path: Path) -> ChangelogConfig:
    try:
        return load_config(config_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid configuration in {config_path}:\n{e}") from e


@click.group()
@click.version_option(package_name="changeset-changelog")
def cli() -> None:
    """Changelog entries for multi-package releases."""


@cli.command()
@click.argument("plan", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--package", "package_name", default=None, help="Only show this package.")
@_config_option
def show(plan: Path, package_name: str | None, config_path: Path) -> None:
    """Print the changelog entries for a release plan."""
    release_plan = _load_plan(plan)
    config = _load_config(config_path)
    functions = load_changelog_functions(config.changelog or DEFAULT_CHANGELOG)

    if package_name is not None and not any(
        r.name == package_name for r in release_plan.releases
    ):
        raise click.ClickException(f"Package {package_name!r} is not in the plan.")

    entries = asyncio.run(
        generate_changelog_entries(
            release_plan, functions, config.changelog_options, config.policy
        )
    )
    for name, entry in entries.items():
        if package_name is not None and name != package_name:
            continue
        click.echo(f"# {name}\n\n{entry.markdown}")


@cli.command()
@click.argument("plan", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    help="Workspace root that package directories are relative to.",
)
@_config_option
def apply(plan: Path, root: Path, config_path: Path) -> None:
    """Prepend changelog entries to each package's CHANGELOG.md."""
    release_plan = _load_plan(plan)
    config = _load_config(config_path)
    if config.changelog is False:
        click.echo("Changelogs are disabled (changelog = false), nothing written.")
        return

    functions = load_changelog_functions(config.changelog)
    written = apply_changelogs(
        release_plan, root, functions, config.changelog_options, config.policy
    )
    click.echo(f"✓ Updated {len(written)} changelog(s)")
