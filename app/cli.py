from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from adapters.filesystem.day_records_repository import FileSystemDayRecordsRepository
from adapters.layout.day_timeline import DayTimelineLayoutEngine
from app.config import TimelineSettings, load_settings
from app.timeline_wiring import apply_default_surface, build_layout_engine, configure_logging
from domain.models import DayTimelineDocument, TimelinePlan

app = typer.Typer(no_args_is_help=True)
console = Console()


def _load_document(input_path: Path) -> DayTimelineDocument:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)
    try:
        return FileSystemDayRecordsRepository().load_by_path(input_path)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid day records file:[/] {input_path}\n{exc}")
        raise typer.Exit(code=1) from exc


def _render_table(plan: TimelinePlan) -> Table:
    table = Table(title=f"{plan.day.isoformat()} ({plan.surface})")
    for column in ("id", "key", "top", "height", "left", "width"):
        table.add_column(column, justify="left" if column in {"id", "key"} else "right")
    for entry in plan.entries:
        table.add_row(
            entry.id,
            plan.display_keys.get(entry.id, "default"),
            f"{entry.top:.2f}",
            f"{entry.height:.2f}",
            f"{entry.left:.2f}",
            f"{entry.width:.2f}",
        )
    return table


@app.command("layout")
def layout(
    input_path: Path = typer.Argument(..., help="Day records JSON file."),
    surface: Optional[str] = typer.Option(
        None, help="Override the file's surface: client or coach.",
    ),
    gutter: Optional[float] = typer.Option(
        None, help="Lane gutter in percentage points for the chosen surface.",
    ),
    output: Optional[Path] = typer.Option(
        None, help="Write the plan JSON here instead of printing a table.",
    ),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    configure_logging(settings)
    document = apply_default_surface(_load_document(input_path), settings)
    if surface is not None:
        if surface not in {"client", "coach"}:
            console.print(f"[red]Unknown surface:[/] {surface}")
            raise typer.Exit(code=1)
        document = document.model_copy(update={"surface": surface})

    timeline = settings.timeline
    if gutter is not None:
        field = (
            "coach_lane_gutter_percent"
            if document.surface == "coach"
            else "client_lane_gutter_percent"
        )
        try:
            timeline = TimelineSettings.model_validate({**timeline.model_dump(), field: gutter})
        except ValidationError as exc:
            console.print(f"[red]Invalid gutter:[/] {exc}")
            raise typer.Exit(code=1) from exc
    engine = DayTimelineLayoutEngine(timeline.to_layout_config())
    plan = engine.build_plan(document)

    if output is None:
        console.print(_render_table(plan))
        return
    FileSystemDayRecordsRepository().save_plan(plan, output)
    console.print(f"[green]Wrote[/] {output}")


@app.command("layout-dir")
def layout_dir(
    input_dir: Optional[Path] = typer.Option(None, help="Directory with day records JSON files."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory to write plan JSON files."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    settings = load_settings(config)
    configure_logging(settings)
    source_dir = input_dir or settings.timeline.records_dir
    target_dir = output_dir or settings.timeline.plans_dir
    repository = FileSystemDayRecordsRepository()
    engine = build_layout_engine(settings)

    if not source_dir.is_dir():
        console.print(f"[yellow]No day records found in {source_dir}[/]")
        raise typer.Exit(code=0)
    pairs = repository.load_all_with_paths(source_dir)
    if not pairs:
        console.print(f"[yellow]No day records found in {source_dir}[/]")
        raise typer.Exit(code=0)

    for path, document in pairs:
        plan = engine.build_plan(apply_default_surface(document, settings))
        target_path = target_dir / f"{path.stem}.plan.json"
        repository.save_plan(plan, target_path)
        console.print(f"[green]Wrote[/] {target_path} ({len(plan.entries)} entries)")


@app.command("validate")
def validate(input_path: Path = typer.Argument(..., help="Day records JSON file to validate.")) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        data = json.loads(input_path.read_text(encoding="utf-8"))
        DayTimelineDocument.model_validate(data)
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Valid day records file:[/] {input_path}")


if __name__ == "__main__":
    app()
