"""Command Line Interface (CLI) for user interaction."""

from typing import Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from handins_grader import config
from handins_grader.core.models import AssignmentRecord, GradeSummary
from handins_grader.utils.error_handler import UserCancelledError

console = Console()


def display_welcome(course_id: int):
    """Displays a welcome message."""
    console.print(Panel(
        f"[bold green]Handins Grade Checker[/bold green]\nCourse ID: {course_id}",
        title="Welcome",
        border_style="blue"
    ))

def display_error(message: str):
    """Displays an error message in a standard format."""
    console.print(Panel(f"[bold red]Error:[/bold red] {escape(message)}", title="Error", border_style="red"))

def display_warning(message: str):
    console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

def display_success(message: str):
    console.print(f"[green]Success:[/green] {message}")

def display_step(step_number: int, description: str):
    """Displays the current step in the process."""
    console.print(f"\n[bold blue]Step {step_number}:[/bold blue] {description}")

def prompt_for_credentials() -> Tuple[str, str]:
    """Asks for the handins username and password.

    The password is read without echo. The values are returned to the caller
    and not kept here.

    Raises:
        UserCancelledError: If either value is left empty or input ends
            before it is given.
    """
    try:
        username = Prompt.ask("username").strip()
        if not username:
            raise UserCancelledError("No username provided.")
        password = Prompt.ask("password", password=True)
    except EOFError as e:
        console.print()
        raise UserCancelledError("Input ended before credentials were entered.") from e
    if not password:
        raise UserCancelledError("No password provided.")
    return username, password

def format_number(value: Optional[float]) -> str:
    """Formats a score, weight or percentage for display; '—' when absent."""
    if value is None:
        return "—"
    return f"{value:.{config.DISPLAY_PRECISION}f}"

def _records_table(records: list[AssignmentRecord]) -> Table:
    table = Table(title="Assignments", show_header=True, header_style="bold magenta")
    table.add_column("Homework", style="cyan")
    table.add_column("Grade", justify="right")
    table.add_column("Out of", justify="right", style="dim")
    table.add_column("Weight", justify="right")
    for record in records:
        table.add_row(
            record.name,
            format_number(record.score),
            format_number(record.max_score),
            format_number(record.weight),
        )
    return table

def display_records(records: list[AssignmentRecord]):
    """Displays all assignment records in server order."""
    if not records:
        console.print("[yellow]No assignments listed for this course.[/yellow]")
        return
    console.print(_records_table(records))

def display_summary(summary: GradeSummary):
    """Displays the records followed by the aggregate grade and its bounds."""
    display_records(summary.records)

    grid = Table.grid(padding=(0, 2))
    grid.add_column(style="bold")
    grid.add_column(justify="right")
    grid.add_row("Your current grade:", format_number(summary.aggregate_percentage))
    grid.add_row("Your minimum grade:", format_number(summary.minimum_percentage))
    grid.add_row("Your maximum grade:", format_number(summary.maximum_percentage))
    grid.add_row("Ungraded points you can earn:", format_number(summary.ungraded_points))
    console.print(grid)

def display_no_grades(records: list[AssignmentRecord]):
    """Reports the undefined-aggregate case, distinct from a 0% grade."""
    display_records(records)
    console.print("[bold yellow]No graded assignments yet; there is no current grade to show.[/bold yellow]")
