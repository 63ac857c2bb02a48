"""Command line interface for Nityam."""

from __future__ import annotations

import time
from datetime import date
from typing import Optional

import click

from .context import AppContext, create_app_context
from .domain.habit import (
    Frequency,
    Habit,
    HabitType,
    ScheduleError,
    Weekday,
    days_of_month_schedule,
    interval_schedule,
)
from .logging_config import setup_logging
from .scheduler import create_scheduler
from .services import (
    edit_habit,
    is_task_day,
    next_task_day_on_or_after,
    rebuild_best_streak,
    rollover_all,
    toggle_completion,
    validate_schedule,
)
from .services import stats


def _parse_int_list(raw: str) -> list[int]:
    try:
        return [int(token) for token in raw.split(",") if token.strip()]
    except ValueError as exc:
        raise click.BadParameter(f"Expected comma-separated numbers, got {raw!r}") from exc


def _schedule_changes(weekly: Optional[str], days_of_month: Optional[str], every: Optional[int]) -> dict:
    chosen = [opt for opt in (weekly, days_of_month, every) if opt is not None]
    if len(chosen) > 1:
        raise click.UsageError("Use only one of --weekly, --days-of-month and --every.")
    try:
        if weekly is not None:
            return {
                "frequency": Frequency.WEEKLY,
                "task_days": frozenset(Weekday.parse(t) for t in weekly.split(",") if t.strip()),
                "custom_schedule": None,
            }
        if days_of_month is not None:
            return {
                "frequency": Frequency.CUSTOM,
                "custom_schedule": days_of_month_schedule(_parse_int_list(days_of_month)),
            }
        if every is not None:
            return {"frequency": Frequency.CUSTOM, "custom_schedule": interval_schedule(every)}
    except ScheduleError as exc:
        raise click.ClickException(str(exc)) from exc
    return {}


def _roll_forward(app: AppContext, today: date) -> list[Habit]:
    """Apply any pending day rollover, then load the up-to-date habits."""
    rollover_all(app.habit_repo, today)
    return app.habit_repo.load_all_habits()


def _resolve(app: AppContext, habit_ref: str) -> Habit:
    """Find a habit by full id or unique id prefix."""
    habit = app.habit_repo.get(habit_ref)
    if habit is not None:
        return habit
    matches = [h for h in app.habit_repo.load_all_habits() if h.id.startswith(habit_ref)]
    if len(matches) == 1:
        return matches[0]
    if not matches:
        raise click.ClickException(f"No habit matches {habit_ref!r}")
    raise click.ClickException(f"{habit_ref!r} matches {len(matches)} habits; use a longer id")


def _save(app: AppContext, habit: Habit) -> None:
    if not app.habit_repo.save(habit):
        raise click.ClickException(f"Could not save habit {habit.name!r}")


def _describe_schedule(habit: Habit) -> str:
    if habit.frequency is Frequency.DAILY:
        return "daily"
    if habit.frequency is Frequency.WEEKLY:
        return "weekly " + ",".join(d.short_name for d in sorted(habit.task_days))
    schedule = habit.custom_schedule
    if schedule is None:
        return "custom (unset)"
    if schedule.interval:
        return f"every {schedule.interval} days"
    return "monthly on " + ",".join(str(d) for d in sorted(schedule.days_of_month))


@click.group()
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Track habits and their streaks."""
    if ctx.obj is None:
        app = create_app_context()
        setup_logging(app.config)
        ctx.obj = app


@cli.command("list")
@click.pass_obj
def list_habits(app: AppContext) -> None:
    """Show every habit with today's state and streaks."""
    today = app.clock.today()
    habits = _roll_forward(app, today)
    if not habits:
        click.echo("No habits yet. Add one with 'nityam add NAME'.")
        return
    for habit in habits:
        if not is_task_day(habit, today):
            state = "off"
        else:
            state = "done" if habit.is_completed_on(today) else "pending"
        upcoming = next_task_day_on_or_after(habit, today, app.config.LOOKAHEAD_DAYS)
        click.echo(
            f"{habit.id[:8]}  {habit.name:<24} {state:<8} "
            f"streak {habit.current_streak} (best {habit.best_streak})  "
            f"{_describe_schedule(habit)}  next {upcoming.isoformat() if upcoming else '-'}"
        )


@cli.command("add")
@click.argument("name")
@click.option("--weekly", help="Comma-separated weekdays, e.g. Mon,Wed,Fri")
@click.option("--days-of-month", help="Comma-separated days of the month, e.g. 1,15")
@click.option("--every", type=int, help="Repeat every N days")
@click.option("--negative", is_flag=True, default=False, help="A habit to break")
@click.option("--icon", default="checkmark", show_default=True)
@click.option("--minutes", type=float, default=0.0, help="Target duration in minutes")
@click.pass_obj
def add_habit(
    app: AppContext,
    name: str,
    weekly: Optional[str],
    days_of_month: Optional[str],
    every: Optional[int],
    negative: bool,
    icon: str,
    minutes: float,
) -> None:
    """Create a habit (daily unless a schedule option is given)."""
    if minutes < 0:
        raise click.BadParameter("--minutes must not be negative")
    today = app.clock.today()
    habit = Habit(
        name=name,
        icon_name=icon,
        habit_type=HabitType.NEGATIVE if negative else HabitType.POSITIVE,
        target_duration_seconds=minutes * 60,
        last_reset_date=today,
        created_on=today,
        **_schedule_changes(weekly, days_of_month, every),
    )
    try:
        validate_schedule(habit)
    except ScheduleError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(app, habit)
    click.echo(f"Added {habit.name} ({habit.id[:8]}), {_describe_schedule(habit)}")


@cli.command("edit")
@click.argument("habit_ref")
@click.option("--name")
@click.option("--daily", is_flag=True, default=False, help="Switch to a daily schedule")
@click.option("--weekly", help="Comma-separated weekdays, e.g. Mon,Wed,Fri")
@click.option("--days-of-month", help="Comma-separated days of the month")
@click.option("--every", type=int, help="Repeat every N days")
@click.pass_obj
def edit(
    app: AppContext,
    habit_ref: str,
    name: Optional[str],
    daily: bool,
    weekly: Optional[str],
    days_of_month: Optional[str],
    every: Optional[int],
) -> None:
    """Rename a habit or change its schedule."""
    habit = _resolve(app, habit_ref)
    changes = _schedule_changes(weekly, days_of_month, every)
    if daily:
        if changes:
            raise click.UsageError("--daily cannot be combined with another schedule.")
        changes = {"frequency": Frequency.DAILY, "custom_schedule": None}
    if name:
        changes["name"] = name
    if not changes:
        raise click.UsageError("Nothing to change.")
    try:
        habit = edit_habit(habit, app.clock.today(), **changes)
    except ScheduleError as exc:
        raise click.ClickException(str(exc)) from exc
    _save(app, habit)
    click.echo(f"Updated {habit.name}: {_describe_schedule(habit)}")


@cli.command("toggle")
@click.argument("habit_ref")
@click.pass_obj
def toggle(app: AppContext, habit_ref: str) -> None:
    """Mark a habit done for today, or undo it."""
    today = app.clock.today()
    habit = _resolve(app, habit_ref)
    if not is_task_day(habit, today):
        click.echo(f"{habit.name} is not scheduled today.")
        return
    habit = toggle_completion(habit, today)
    _save(app, habit)
    verb = "Completed" if habit.is_completed else "Undid"
    click.echo(f"{verb} {habit.name}. Streak {habit.current_streak} (best {habit.best_streak})")


@cli.command("delete")
@click.argument("habit_ref")
@click.confirmation_option(prompt="Delete this habit and its history?")
@click.pass_obj
def delete(app: AppContext, habit_ref: str) -> None:
    """Delete a habit and all of its completions."""
    habit = _resolve(app, habit_ref)
    app.habit_repo.delete(habit.id)
    click.echo(f"Deleted {habit.name}")


@cli.command("rollover")
@click.option("--rebuild", is_flag=True, default=False, help="Also recompute best streaks from history")
@click.pass_obj
def rollover(app: AppContext, rebuild: bool) -> None:
    """Run the new-day check for every habit."""
    today = app.clock.today()
    report = rollover_all(app.habit_repo, today)
    if rebuild:
        for habit in app.habit_repo.load_all_habits():
            rebuilt = rebuild_best_streak(habit, today)
            if rebuilt != habit:
                _save(app, rebuilt)
    click.echo(f"Checked {report.checked}, updated {report.updated}, failed {len(report.failed)}")
    if report.failed:
        raise click.exceptions.Exit(1)


@cli.command("stats")
@click.argument("habit_ref", required=False)
@click.option("--days", type=click.IntRange(min=1), default=stats.DEFAULT_WINDOW_DAYS, show_default=True)
@click.pass_obj
def show_stats(app: AppContext, habit_ref: Optional[str], days: int) -> None:
    """Summary across all habits, or detail for one."""
    today = app.clock.today()
    habits = _roll_forward(app, today)
    if habit_ref is None:
        summary = stats.overview(habits)
        click.echo(f"Habits: {summary.total_habits}")
        click.echo(f"Completed today: {summary.completed_today} ({summary.completion_rate:.0%})")
        click.echo(f"Best streak: {summary.best_streak}")
        return

    habit = _resolve(app, habit_ref)
    summary = stats.summarize(habit, today, days)
    click.echo(f"{summary.name}")
    click.echo(f"  current streak: {summary.current_streak}")
    click.echo(f"  best streak:    {summary.best_streak}")
    click.echo(f"  longest run:    {summary.longest_streak}")
    click.echo(f"  completions:    {summary.total_completions}")
    click.echo(f"  last {days} days: {summary.completion_rate:.0%} of task days")
    history = stats.completion_history(habit, today, days)
    marks = "".join("#" if s.completed else ("." if s.scheduled else " ") for s in history)
    click.echo(f"  [{marks}]")
    for row in stats.weekday_pattern(habit, today, days):
        if row.scheduled:
            click.echo(f"  {row.weekday.short_name}: {row.completed}/{row.scheduled} ({row.percentage:.0f}%)")


@cli.command("serve")
@click.pass_obj
def serve(app: AppContext) -> None:
    """Keep running and process day rollovers in the background."""
    scheduler = create_scheduler(app, auto_start=True)
    click.echo("Rollover scheduler running. Press Ctrl+C to stop.")
    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        pass
    finally:
        scheduler.stop()


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
