"""CLI entry point for Marks Scaler."""

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .config import (
    DEFAULT_DATA_FILE,
    DEFAULT_SCALING_METHOD,
    LOG_DATE_FORMAT,
    LOG_FORMAT,
    OUTPUT_FORMATS,
    SCALING_METHODS,
)
from .models import Roster
from .output import (
    export_to_csv,
    format_exams,
    format_json,
    format_methods,
    format_table,
    get_scaling_method_name,
)
from .roster import (
    RosterError,
    add_exam as add_exam_to_roster,
    find_exam,
    replace_students,
    round_exam,
    scale_exam,
    search_students,
    set_mark,
)
from .scaling import ScalingError
from .utils import (
    RosterStore,
    StorageError,
    export_to_json,
    import_from_json,
    read_students_csv,
)

app = typer.Typer(
    name="marks-scaler",
    help="Record exam marks and convert them into scaled and rounded marks.",
    add_completion=False,
)
console = Console()


def setup_logging(verbose: bool) -> None:
    """Route package logs through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    data: str = typer.Option(
        DEFAULT_DATA_FILE,
        "--data",
        "-d",
        help="JSON file holding the roster session",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Marks Scaler command line."""
    setup_logging(verbose)
    ctx.obj = RosterStore(data)


def _load(ctx: typer.Context) -> Roster:
    store: RosterStore = ctx.obj
    try:
        return store.load(strict=True) or Roster()
    except StorageError as e:
        _fail(f"{e}. Fix or move the file, or run reset to start a new session.")


def _save(ctx: typer.Context, roster: Roster) -> None:
    store: RosterStore = ctx.obj
    store.save(roster)


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{escape(message)}[/red]")
    raise typer.Exit(1)


@app.command("import-students")
def import_students(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="CSV file with StudentID, StudentName rows"),
) -> None:
    """Replace the student list with students from a CSV file."""
    input_path = Path(input_file)
    if not input_path.exists():
        _fail(f"File not found: {input_file}")

    students = read_students_csv(input_path)
    if not students:
        _fail("No valid student data found. Please use format: StudentID, StudentName")

    _save(ctx, replace_students(_load(ctx), students))
    console.print(f"[green]Successfully imported {len(students)} students![/green]")


@app.command("add-exam")
def add_exam(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Exam name"),
    total_marks: float = typer.Option(..., "--total", "-t", help="Total (maximum) raw marks"),
    scaling_value: float = typer.Option(..., "--scale-to", "-s", help="Final scaling value (maximum)"),
    exam_id: Optional[str] = typer.Option(None, "--id", help="Exam id (default: timestamp)"),
) -> None:
    """Define a new exam."""
    try:
        roster, exam = add_exam_to_roster(_load(ctx), name, total_marks, scaling_value, exam_id)
    except RosterError as e:
        _fail(str(e))

    _save(ctx, roster)
    console.print(f"[green]Added exam {exam.name} (id: {exam.id})[/green]")


@app.command("add-mark", context_settings={"ignore_unknown_options": True})
def add_mark(
    ctx: typer.Context,
    student_id: str = typer.Argument(..., help="Student id"),
    exam_id: str = typer.Argument(..., help="Exam id"),
    mark: float = typer.Argument(..., help="Raw mark (negative marks are accepted, e.g. -5)"),
) -> None:
    """Add or update a student's raw mark for an exam."""
    roster = _load(ctx)
    student = roster.student(student_id)
    editing = student is not None and exam_id in student.marks

    try:
        roster = set_mark(roster, student_id, exam_id, mark)
    except (RosterError, ScalingError) as e:
        _fail(str(e))

    _save(ctx, roster)
    if editing:
        console.print("[green]Mark updated successfully![/green]")
    else:
        console.print("[green]Mark added successfully! Apply a scaling method to scale it.[/green]")


@app.command()
def scale(
    ctx: typer.Context,
    exam_id: str = typer.Argument(..., help="Exam id"),
    method: str = typer.Option(
        DEFAULT_SCALING_METHOD,
        "--method",
        "-m",
        help=f"Scaling method. Available: {', '.join(SCALING_METHODS)}",
    ),
) -> None:
    """Apply a scaling method to an exam."""
    if method not in SCALING_METHODS:
        console.print(f"[red]Invalid method: {method}[/red]")
        console.print(f"Available methods: {', '.join(SCALING_METHODS)}")
        raise typer.Exit(1)

    try:
        roster = scale_exam(_load(ctx), exam_id, method)
    except (RosterError, ScalingError) as e:
        _fail(str(e))

    _save(ctx, roster)
    exam = find_exam(roster, exam_id)
    console.print(f"[green]{get_scaling_method_name(method)} applied to {exam.name}![/green]")


@app.command("round")
def round_marks(
    ctx: typer.Context,
    exam_id: str = typer.Argument(..., help="Exam id"),
) -> None:
    """Round an exam's scaled marks to whole numbers."""
    try:
        roster = round_exam(_load(ctx), exam_id)
    except (RosterError, ScalingError) as e:
        _fail(str(e))

    _save(ctx, roster)
    console.print(f"[green]Rounding applied to {find_exam(roster, exam_id).name}![/green]")


@app.command()
def show(
    ctx: typer.Context,
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table or json",
    ),
) -> None:
    """Show every student's raw, scaled and rounded marks."""
    if output_format not in OUTPUT_FORMATS:
        console.print(f"[red]Invalid format: {output_format}[/red]")
        console.print(f"Available formats: {', '.join(OUTPUT_FORMATS)}")
        raise typer.Exit(1)

    roster = _load(ctx)
    if output_format == "json":
        format_json(roster, console)
    else:
        format_table(roster, console)


@app.command()
def exams(ctx: typer.Context) -> None:
    """List exams and their scaling methods."""
    format_exams(_load(ctx).exams, console)


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Part of a student id or name"),
) -> None:
    """Find students by id or name."""
    roster = _load(ctx)
    matches = search_students(roster, query)
    if not matches:
        console.print(f"[yellow]No students match '{query}'[/yellow]")
        return
    format_table(roster, console, students=matches)


@app.command()
def methods() -> None:
    """Explain the scaling methods and rounding."""
    format_methods(console)


@app.command("export-csv")
def export_csv(
    ctx: typer.Context,
    output: str = typer.Argument(..., help="Output CSV file path"),
) -> None:
    """Export raw, scaled and rounded marks to CSV."""
    roster = _load(ctx)
    export_to_csv(roster.students, roster.exams, output)
    console.print(f"[green]Results saved to {output}[/green]")


@app.command("export-json")
def export_json(
    ctx: typer.Context,
    output: str = typer.Argument(..., help="Output JSON file path"),
) -> None:
    """Export students, raw marks and exams to JSON."""
    export_to_json(_load(ctx), output)
    console.print(f"[green]Data exported to {output}[/green]")


@app.command("import-json")
def import_json(
    ctx: typer.Context,
    input_file: str = typer.Argument(..., help="JSON file from export-json"),
) -> None:
    """Replace the session with data from a JSON export."""
    try:
        roster = import_from_json(input_file)
    except StorageError as e:
        _fail(f"Error importing JSON file: {e}")

    _save(ctx, roster)
    console.print("[green]Data imported successfully![/green]")


@app.command()
def session(ctx: typer.Context) -> None:
    """Show details of the stored session."""
    store: RosterStore = ctx.obj
    details = store.summary()
    if details is None:
        console.print("[dim]No previous session found[/dim]")
        return

    console.print(f"[bold]Last session:[/bold] {details['path']}")
    console.print(f"  Students: [cyan]{details['students']}[/cyan]")
    console.print(f"  Exams: [cyan]{details['exams']}[/cyan]")
    if details["exam_names"]:
        console.print(f"  [dim]Exams: {', '.join(details['exam_names'])}[/dim]")


@app.command()
def reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Start a new session, deleting all stored data."""
    store: RosterStore = ctx.obj
    if not yes:
        typer.confirm("Starting a new session will permanently delete all existing data. Continue?", abort=True)

    if store.clear():
        console.print("[green]Started a new session[/green]")
    else:
        console.print("[dim]No stored session to delete[/dim]")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"marks-scaler version {__version__}")


if __name__ == "__main__":
    app()
