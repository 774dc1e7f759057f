"""Validate the course/resource catalogs and inspect how topics are routed."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from rcopilot.core.catalogs import (
    COURSE_CATALOG_NAMES,
    RESOURCE_CATALOG_NAMES,
    ConfigStore,
    CourseCatalog,
    ResourceCatalog,
    audit_catalogs,
    build_search_dirs,
    first_existing,
    read_catalog,
)
from rcopilot.pipeline.bootstrap import resolve_repo_root
from rcopilot.pipeline.runtime import TopicAnalyzer

app = typer.Typer(help="Lint research catalogs and explain topic classification.")
console = Console()


def _search_dirs(repo_root: Path | None, config_dir: Path | None) -> List[Path]:
    extra = [config_dir] if config_dir is not None else None
    return build_search_dirs(repo_root=resolve_repo_root(repo_root), extra_dirs=extra)


@app.command()
def validate(
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Directory searched before the defaults."),
    repo_root: Optional[Path] = typer.Option(None, "--repo-root", help="Repository root (default: cwd)."),
    fail_on_warning: bool = typer.Option(
        False, "--fail-on-warning", help="Exit non-zero when warnings are present."
    ),
) -> None:
    dirs = _search_dirs(repo_root, config_dir)
    errors: List[str] = []
    courses: CourseCatalog | None = None
    resources: ResourceCatalog | None = None

    course_path = first_existing(dirs, COURSE_CATALOG_NAMES)
    if course_path is not None:
        try:
            courses = read_catalog(course_path, CourseCatalog)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            errors.append(f"{course_path}: {exc}")
    resource_path = first_existing(dirs, RESOURCE_CATALOG_NAMES)
    if resource_path is not None:
        try:
            resources = read_catalog(resource_path, ResourceCatalog)
        except (OSError, yaml.YAMLError, ValueError) as exc:
            errors.append(f"{resource_path}: {exc}")

    audit_errors, warnings = audit_catalogs(courses, resources)
    errors.extend(audit_errors)

    table = Table(title="Catalog Validation", show_header=True)
    table.add_column("Severity", justify="center")
    table.add_column("Message")
    for issue in errors:
        table.add_row("error", escape(issue), style="bold red")
    for issue in warnings:
        table.add_row("warning", escape(issue), style="yellow")
    console.print(table)

    if errors or (fail_on_warning and warnings):
        raise typer.Exit(code=1)

    course_count = len(courses.courses) if courses is not None else 0
    console.print(f"[green]Catalogs look good![/green] ({course_count} courses)")


@app.command()
def classify(
    topic: List[str] = typer.Argument(..., help="Topic words to classify."),
    config_dir: Optional[Path] = typer.Option(None, "--config-dir", help="Directory searched before the defaults."),
    repo_root: Optional[Path] = typer.Option(None, "--repo-root", help="Repository root (default: cwd)."),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of tables."),
) -> None:
    text = " ".join(topic)
    root = resolve_repo_root(repo_root)
    store = ConfigStore.load(repo_root=root, search_dirs=[config_dir] if config_dir else None)
    analysis = TopicAnalyzer(store).analyze(text)
    match = analysis.course_match

    if as_json:
        payload = {
            "topic": text,
            "category": analysis.category,
            "keyword_category": analysis.keyword_category,
            "course": match.code if match else None,
            "phase": match.phase if match else None,
            "matched_keywords": match.matched_keywords if match else [],
            "resources": [record.model_dump() for record in analysis.resources],
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print(f"[bold]Topic:[/bold] {escape(text)}")
    console.print(f"[bold]Category:[/bold] {analysis.category} (keywords said {analysis.keyword_category})")
    if match:
        detail = f" via {', '.join(match.matched_keywords)}" if match.matched_keywords else ""
        console.print(f"[bold]Course:[/bold] {escape(match.course.display_name)} ({match.phase}){escape(detail)}")
    else:
        console.print("[bold]Course:[/bold] none")

    table = Table(title="Resources", show_header=True)
    table.add_column("Title")
    table.add_column("URL")
    for record in analysis.resources:
        table.add_row(escape(record.title), record.url)
    console.print(table)


if __name__ == "__main__":
    app()
