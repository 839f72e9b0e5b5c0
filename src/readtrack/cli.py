"""Command-line interface for readtrack.

Built with Typer for commands and Rich for output.
"""

from datetime import date
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import get_config
from .db import get_db
from .logging_setup import setup_logging

# Create the main app
app = typer.Typer(
    name="readtrack",
    help="Track your daily reading check-ins and streaks.",
    no_args_is_help=True,
)

# Rich console for pretty output
console = Console()


@app.callback()
def _startup() -> None:
    """Track your daily reading check-ins and streaks."""
    setup_logging(get_config().log_level_value)


# ============================================================================
# Helper Functions
# ============================================================================


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]Error:[/bold red] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]Success:[/bold green] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]Warning:[/bold yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[dim]{message}[/dim]")


def _parse_date(date_str: Optional[str]) -> Optional[date]:
    if date_str is None:
        return None
    try:
        return date.fromisoformat(date_str)
    except ValueError:
        print_error("Invalid date format. Use YYYY-MM-DD")
        raise typer.Exit(1)


def _progress_bar(percent: float, width: int = 20) -> str:
    filled = int(round(percent / 100 * width))
    return "[orange1]" + "█" * filled + "[/orange1]" + "[dim]" + "░" * (width - filled) + "[/dim]"


FLAME_STYLES = {
    "spark": "yellow",
    "warm": "orange1",
    "hot": "dark_orange",
    "blazing": "red",
}


# ============================================================================
# Streak Commands
# ============================================================================

streak_app = typer.Typer(help="Record check-ins and follow reading streaks.")
app.add_typer(streak_app, name="streak")


@streak_app.command("checkin")
def streak_checkin(
    date_str: Optional[str] = typer.Option(None, "--date", "-d", help="Date (YYYY-MM-DD)"),
    activity_type: str = typer.Option("check_in", "--type", "-t", help="Activity tag"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
) -> None:
    """Check in for today's reading."""
    from .streaks import StreakError, StreakManager

    user_id = user or get_config().user_id
    activity_date = _parse_date(date_str)

    manager = StreakManager(get_db())
    try:
        result = manager.check_in(user_id, activity_date=activity_date, activity_type=activity_type)
    except StreakError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if result.created:
        print_success("Reading activity recorded!")
    else:
        print_warning(f"Already checked in on {result.check_in.activity_date}")

    summary = result.summary
    content = f"Checked in: {result.check_in.activity_date}"
    content += f"\n\nCurrent Streak: {summary.current_streak} day{'s' if summary.current_streak != 1 else ''}"
    content += f"\nLongest Streak: {summary.longest_streak} days"

    console.print(Panel(content, title="[blue]Streak[/blue]"))


@streak_app.command("status")
def streak_status(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
) -> None:
    """Show current streak status."""
    from .streaks import StreakManager

    user_id = user or get_config().user_id
    manager = StreakManager(get_db())
    summary = manager.get_summary(user_id)

    if summary.last_activity_date is None:
        print_info("No reading activity yet. Check in to start your streak!")
        return

    flame = FLAME_STYLES.get(summary.flame_level.value, "yellow")
    days = "Day" if summary.current_streak == 1 else "Days"
    content_parts = [f"[bold {flame}]{summary.current_streak} {days}[/bold {flame}] Current Reading Streak"]

    if summary.checked_in_today:
        content_parts.append("[green]Checked in today[/green]")
    elif summary.current_streak > 0:
        content_parts.append("[yellow]Not checked in yet today. Keep it going![/yellow]")
    else:
        content_parts.append("[dim]Check in today to begin a new streak![/dim]")

    content_parts.append(f"\n[bold]Longest Streak:[/bold] {summary.longest_streak} days")
    content_parts.append(
        f"\nProgress to {summary.next_milestone} days  "
        f"{summary.current_streak}/{summary.next_milestone}"
    )
    content_parts.append(_progress_bar(summary.milestone_progress))

    if summary.badges:
        badges = "  ".join(f"{b.name} {'🔥' * b.flames}" for b in summary.badges)
        content_parts.append(f"\n{badges}")

    last = summary.last_activity_date
    content_parts.append(
        f"\n[dim]Last reading activity: {last:%b} {last.day}, {last.year}[/dim]"
    )

    console.print(Panel("\n".join(content_parts), title="[blue]Streak Status[/blue]"))


@streak_app.command("history")
def streak_history(
    limit: int = typer.Option(14, "--limit", "-n", min=1, help="Check-ins to show"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
) -> None:
    """Show recent check-ins."""
    from .streaks import StreakManager

    user_id = user or get_config().user_id
    manager = StreakManager(get_db())
    check_ins = manager.get_history(user_id, limit=limit)

    if not check_ins:
        print_info("No reading history")
        return

    table = Table(title=f"Check-ins (Last {limit})")
    table.add_column("Date")
    table.add_column("Weekday")
    table.add_column("Type")

    for check_in in check_ins:
        day = check_in.day
        table.add_row(
            check_in.activity_date,
            day.strftime("%A") if day else "",
            check_in.activity_type,
        )

    console.print(table)


@streak_app.command("milestones")
def streak_milestones(
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User ID"),
) -> None:
    """Show milestone achievements."""
    from .streaks import StreakManager

    user_id = user or get_config().user_id
    manager = StreakManager(get_db())
    milestones = manager.get_milestones(user_id)

    table = Table(title="Streak Milestones")
    table.add_column("Status", justify="center")
    table.add_column("Days", justify="right")
    table.add_column("Remaining", justify="right")

    for m in milestones:
        if m.achieved:
            status = "[green]Achieved[/green]"
        elif m.is_next:
            status = "[yellow]Next[/yellow]"
        else:
            status = "[dim]Locked[/dim]"

        table.add_row(
            status,
            str(m.days_required),
            "-" if m.achieved else str(m.days_remaining),
        )

    console.print(table)


# ============================================================================
# Version Command
# ============================================================================


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__

    console.print(f"readtrack version {__version__}")


# ============================================================================
# Main Entry Point
# ============================================================================


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
