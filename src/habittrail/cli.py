"""Command-line interface for HabitTrail."""

from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import click

from .config import BaseConfig
from .constants.categories import (
    CATEGORY_DISPLAY_NAMES,
    HABIT_CATEGORIES,
    category_display_name,
)
from .context import AppContext, create_app_context
from .errors import NotFoundError, PersistenceError, ValidationError
from .logging_config import setup_logging
from .models.habit import Habit
from .services.habit_store import HabitStore
from .services.habits import compute_progress, summarize
from .services.periods import ViewMode, period_label, shift_period, window

DATE_TYPE = click.DateTime(formats=["%Y-%m-%d"])
CATEGORY_CHOICE = click.Choice([c.value for c in HABIT_CATEGORIES] + ["none"], case_sensitive=False)
CELLS_PER_ROW = 7


def _as_date(value: datetime | None) -> date:
    return value.date() if value is not None else date.today()


def _category_arg(value: str | None) -> str | None:
    if value is None:
        return None
    return "" if value.lower() == "none" else value


def _resolve_habit(store: HabitStore, ref: str) -> Habit:
    """Find a habit by id, unique id prefix, or name."""

    if not ref.strip():
        raise click.ClickException("Please give a habit id or name")
    habit = store.get(ref) or store.find_by_name(ref)
    if habit is not None:
        return habit
    matches = [h for h in store.habits if h.id.startswith(ref)]
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        raise click.ClickException(f"'{ref}' matches more than one habit; use a longer id")
    raise click.ClickException(str(NotFoundError(ref)))


def _warn_unsaved(exc: PersistenceError) -> None:
    click.echo(f"Warning: {exc}. Changes are kept for this session but were not saved.", err=True)


def _render_habit(habit: Habit, days, today: date) -> list[str]:
    progress = compute_progress(habit, days)
    title = habit.name
    label = category_display_name(habit.category)
    if label:
        title += f"  [{label}]"
    lines = [f"{title}  ({habit.id[:8]})"]
    if habit.goal:
        lines.append(f"  Daily goal: {habit.goal}")
    lines.append(
        f"  Progress this period: {progress.completed}/{progress.total} days ({progress.percentage}%)"
    )

    cells = []
    for day in days:
        mark = "x" if habit.is_completed(day.date) else " "
        marker = "*" if day.date == today else " "
        cells.append(f"{day.label} {day.date.day:02d}[{mark}]{marker}")
    for start in range(0, len(cells), CELLS_PER_ROW):
        lines.append("  " + " ".join(cells[start : start + CELLS_PER_ROW]))
    return lines


@click.group()
@click.option(
    "--data-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for the database and logs.",
)
@click.option("--database-url", default=None, help="Override the SQLAlchemy database URL.")
@click.pass_context
def main(ctx: click.Context, data_dir: Path | None, database_url: str | None) -> None:
    """Track daily habits from the terminal."""

    config = BaseConfig(data_dir=data_dir)
    if database_url:
        config.DATABASE_URL = database_url
    setup_logging(config)
    ctx.obj = create_app_context(config)


@main.command("add")
@click.argument("name")
@click.option("--goal", default="", help="Daily goal, e.g. '20 pages'.")
@click.option("--category", type=CATEGORY_CHOICE, default=None)
@click.pass_obj
def add_habit(app: AppContext, name: str, goal: str, category: str | None) -> None:
    """Create a new habit."""

    try:
        habit = app.store.create(name, goal, _category_arg(category) or "")
    except ValidationError as exc:
        raise click.ClickException(str(exc)) from exc
    except PersistenceError as exc:
        _warn_unsaved(exc)
        return
    click.echo(f'Habit "{habit.name}" added successfully! ({habit.id[:8]})')


@main.command("edit")
@click.argument("habit_ref")
@click.option("--name", default=None)
@click.option("--goal", default=None)
@click.option("--category", type=CATEGORY_CHOICE, default=None)
@click.pass_obj
def edit_habit(
    app: AppContext, habit_ref: str, name: str | None, goal: str | None, category: str | None
) -> None:
    """Change a habit's name, goal or category."""

    habit = _resolve_habit(app.store, habit_ref)
    category = _category_arg(category)
    try:
        updated = app.store.update(
            habit.id,
            name if name is not None else habit.name,
            goal if goal is not None else habit.goal,
            category if category is not None else habit.category,
        )
    except (ValidationError, NotFoundError) as exc:
        raise click.ClickException(str(exc)) from exc
    except PersistenceError as exc:
        _warn_unsaved(exc)
        return
    click.echo(f'Habit "{updated.name}" updated successfully!')


@main.command("delete")
@click.argument("habit_ref")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def delete_habit(app: AppContext, habit_ref: str, yes: bool) -> None:
    """Delete a habit and its history."""

    habit = _resolve_habit(app.store, habit_ref)
    if not yes and not click.confirm(f'Are you sure you want to delete "{habit.name}"?'):
        click.echo("Cancelled.")
        return
    try:
        app.store.delete(habit.id)
    except PersistenceError as exc:
        _warn_unsaved(exc)
        return
    click.echo("Habit deleted successfully!")


@main.command("toggle")
@click.argument("habit_ref")
@click.option("--date", "on_date", type=DATE_TYPE, default=None, help="Day to toggle (YYYY-MM-DD).")
@click.pass_obj
def toggle_habit(app: AppContext, habit_ref: str, on_date: datetime | None) -> None:
    """Mark or unmark a habit as done for a day."""

    habit = _resolve_habit(app.store, habit_ref)
    day = _as_date(on_date)
    try:
        done = app.store.toggle_completion(habit.id, day)
    except PersistenceError as exc:
        _warn_unsaved(exc)
        done = habit.is_completed(day)
    state = "done" if done else "not done"
    click.echo(f'"{habit.name}" marked {state} for {day.isoformat()}.')


@main.command("show")
@click.option(
    "--view",
    type=click.Choice([m.value for m in ViewMode], case_sensitive=False),
    default=ViewMode.WEEKLY.value,
    show_default=True,
)
@click.option("--date", "on_date", type=DATE_TYPE, default=None, help="Reference day (YYYY-MM-DD).")
@click.option("--offset", type=int, default=0, help="Periods to move back (<0) or forward (>0).")
@click.pass_obj
def show_habits(app: AppContext, view: str, on_date: datetime | None, offset: int) -> None:
    """Show progress for the current week or month."""

    today = date.today()
    mode = ViewMode(view.lower())
    reference = shift_period(_as_date(on_date), mode, offset)

    click.echo(period_label(reference, mode))
    click.echo("")
    habits = app.store.habits
    if not habits:
        click.echo("No habits yet. Add one with 'habittrail add NAME'.")
        return

    days = window(reference, mode)
    for habit in habits:
        for line in _render_habit(habit, days, today):
            click.echo(line)
        click.echo("")


@main.command("stats")
@click.option("--date", "on_date", type=DATE_TYPE, default=None, help="Treat this day as today.")
@click.pass_obj
def show_stats(app: AppContext, on_date: datetime | None) -> None:
    """Show today's completions and the current streak."""

    summary = summarize(app.store.habits, _as_date(on_date))
    click.echo(f"Habits: {summary.total_habits}")
    click.echo(f"Completed today: {summary.completed_today}")
    click.echo(f"Current streak: {summary.current_streak} days")
    click.echo(f"Longest streak: {summary.longest_streak} days")


@main.command("categories")
def list_categories() -> None:
    """List the available habit categories."""

    for category in HABIT_CATEGORIES:
        click.echo(f"{category.value:<14}{CATEGORY_DISPLAY_NAMES[category]}")


@main.command("clear")
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt.")
@click.pass_obj
def clear_habits(app: AppContext, yes: bool) -> None:
    """Remove all habits. This cannot be undone."""

    if not yes and not click.confirm(
        "Are you sure you want to clear all data? This cannot be undone."
    ):
        click.echo("Cancelled.")
        return
    try:
        app.store.clear()
    except PersistenceError as exc:
        _warn_unsaved(exc)
        return
    click.echo("All data has been cleared")


if __name__ == "__main__":  # pragma: no cover
    main()
