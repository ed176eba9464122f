"""Command-line interface for Teaser.

This module defines the CLI commands using Click framework.

Commands:
- build: Build the RSS feed into the output directory.
- new: Create a new article interactively.
"""

from __future__ import annotations

import logging
from datetime import date
from pathlib import Path

import click
import questionary
import yaml

from . import __version__
from .config import load_config
from .content import ArticleLoader, extract_frontmatter
from .errors import BuildError
from .utils import slugify


@click.group()
@click.version_option(version=__version__, prog_name="teaser")
@click.option("-v", "--verbose", is_flag=True, help="Log build progress")
def cli(verbose: bool):
    """Teaser RSS feed builder."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


@cli.command()
@click.option("--base-url", help="Site URL to use for feed links (overrides teaser.yaml)")
@click.option(
    "--output",
    type=click.Path(file_okay=False, path_type=Path),
    help="Directory to write the feed to (overrides teaser.yaml)",
)
def build(base_url: str | None, output: Path | None):
    """Build the RSS feed into the output directory."""
    project_root = Path.cwd()
    from .build import build_feed

    try:
        result = build_feed(project_root, base_url=base_url, output_dir_override=output)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        rel_path = _relative(exc.source_path, project_root)
        click.echo(click.style(f"  File: {rel_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    for skipped in result.skipped:
        source = _relative(skipped.source, project_root) if skipped.source else "<unknown>"
        click.echo(
            click.style(f"Skipped {source}: missing {', '.join(skipped.missing)}", fg="yellow"),
            err=True,
        )
    click.echo(f"Wrote {len(result.entries)} entries to {result.output_path}")


@cli.command()
def new():
    """Create a new article interactively."""
    project_root = Path.cwd()
    try:
        config = load_config(project_root)
    except BuildError as exc:
        raise click.ClickException(exc.message) from exc
    posts_dir = project_root / config.content_path / config.feed.posts_dir

    title = questionary.text(
        "Title:",
        validate=lambda x: len(x.strip()) > 0 or "Title cannot be empty",
        style=_questionary_style(),
    ).ask()
    if title is None:
        raise click.Abort()
    title = title.strip()

    tags = questionary.text(
        "Tags (comma separated):",
        style=_questionary_style(),
    ).ask()
    if tags is None:
        raise click.Abort()

    excerpt = questionary.text(
        "Excerpt:",
        style=_questionary_style(),
    ).ask()
    if excerpt is None:
        raise click.Abort()

    slug = slugify(title)
    target_path = posts_dir / slug / "index.md"
    if target_path.exists():
        raise click.ClickException(
            f"Article already exists: {target_path.relative_to(project_root)}"
        )

    url_path = f"/blog/{slug}"
    existing = ArticleLoader(posts_dir).iter_files() if posts_dir.exists() else []
    for path in existing:
        frontmatter, _ = extract_frontmatter(path.read_text(encoding="utf-8", errors="replace"))
        if frontmatter.get("path") == url_path:
            raise click.ClickException(
                f"An article with path '{url_path}' already exists: "
                f"{path.relative_to(project_root)}"
            )

    today = date.today()
    frontmatter = {
        "title": title,
        "path": url_path,
        "tags": [tag.strip() for tag in tags.split(",") if tag.strip()],
        "created": today,
        "updated": today,
        "excerpt": excerpt.strip(),
    }
    target_path.parent.mkdir(parents=True, exist_ok=True)
    content = (
        "---\n"
        + yaml.safe_dump(frontmatter, sort_keys=False, allow_unicode=True)
        + "---\n\n"
    )
    target_path.write_text(content, encoding="utf-8")
    click.echo(f"Created {target_path.relative_to(project_root)}")


def _relative(path: Path, root: Path) -> Path:
    """Return path relative to root when possible."""
    try:
        return path.relative_to(root)
    except ValueError:
        return path


def _questionary_style():
    """Return consistent questionary style."""
    return questionary.Style(
        [
            ("qmark", "fg:cyan bold"),
            ("question", "bold"),
            ("answer", "fg:cyan"),
            ("pointer", "fg:cyan bold"),
            ("highlighted", "fg:cyan bold"),
            ("selected", "fg:cyan"),
        ]
    )


def main():
    """Entry point for the CLI application."""
    cli()
