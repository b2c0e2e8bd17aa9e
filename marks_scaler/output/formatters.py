"""Output formatters for rosters and scaling results."""

import json
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import NOT_APPLIED, ROUNDING_INFO, SCALING_METHOD_INFO, SCALING_METHOD_NAMES
from ..models import Exam, Roster, Student


METHOD_COLORS = {
    "bellCurve": "yellow",
    "linearNormalization": "blue",
    "minMaxNormalization": "magenta",
    "percentile": "bright_magenta",
}


def get_scaling_method_name(method: str | None) -> str:
    """Human-readable name for a scaling method tag."""
    return SCALING_METHOD_NAMES.get(method, NOT_APPLIED)


def format_table(roster: Roster, console: Console, students: Sequence[Student] | None = None) -> None:
    """Print the raw/scaled/rounded triad for each student and exam."""
    students = roster.students if students is None else students

    header = Text()
    header.append("Marks Management\n", style="bold cyan")
    header.append(f"Students: {len(roster.students)}  |  Exams: {len(roster.exams)}")
    console.print(Panel(header, title="[bold]Roster[/bold]", border_style="cyan"))
    console.print()

    if not students:
        console.print("[yellow]No students to display[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    for exam in roster.exams:
        table.add_column(exam.name, justify="right")

    for student in students:
        cells = [student.id, student.name]
        cells.extend(_marks_cell(student, exam) for exam in roster.exams)
        table.add_row(*cells)

    console.print(table)


def _marks_cell(student: Student, exam: Exam) -> str:
    record = student.marks.get(exam.id)
    if record is None:
        return "[dim]-[/dim]"

    lines = [f"Raw: {_number(record.raw)}"]
    if record.scaled is not None:
        lines.append(f"[green]Scaled: {_number(record.scaled)}[/green]")
        if record.rounded is not None:
            lines.append(f"[bold]Rounded: {record.rounded}[/bold]")
        else:
            lines.append("[dim]Not rounded[/dim]")
    else:
        lines.append("[dim]Not scaled[/dim]")
    return "\n".join(lines)


def _number(value: float) -> str:
    """Show up to two decimals without trailing zeros."""
    return f"{value:.2f}".rstrip("0").rstrip(".")


def format_exams(exams: Sequence[Exam], console: Console) -> None:
    """Print exam definitions and the scaling method each last used."""
    if not exams:
        console.print("[yellow]No exams defined[/yellow]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Total Marks", justify="right")
    table.add_column("Scaling Value", justify="right")
    table.add_column("Method")

    for exam in exams:
        color = METHOD_COLORS.get(exam.scaling_method, "dim")
        method = get_scaling_method_name(exam.scaling_method)
        table.add_row(
            exam.id,
            exam.name,
            _number(exam.total_marks),
            _number(exam.scaling_value),
            f"[{color}]{method}[/{color}]",
        )

    console.print(table)


def format_methods(console: Console) -> None:
    """Print a panel per scaling method with its formula."""
    for method, info in SCALING_METHOD_INFO.items():
        color = METHOD_COLORS.get(method, "white")
        body = Text()
        body.append(info["summary"] + "\n")
        body.append(f"Formula: {info['formula']}", style="dim")
        title = f"[bold {color}]{get_scaling_method_name(method)}[/bold {color}] ({method})"
        console.print(Panel(body, title=title, border_style="dim"))

    body = Text()
    body.append(ROUNDING_INFO["summary"] + "\n")
    body.append(f"Example: {ROUNDING_INFO['formula']}", style="dim")
    console.print(Panel(body, title="[bold green]Rounding[/bold green]", border_style="dim"))


def format_json(roster: Roster, console: Console) -> None:
    """Print the roster as JSON."""
    console.print_json(json.dumps(roster.to_dict()))
