"""Command-line interface for the FitScore engine."""

import logging
from datetime import date, datetime

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markdown import Markdown
from rich import box
from sqlalchemy.exc import SQLAlchemyError

from .config import config
from .analysis import (
    AnalysisNarrator,
    CompositeFitScoreCalculator,
    DailyBiometrics,
    RecoveryScorer,
    TrainingScorer,
    TrainingSession,
    UserContext,
    Zone,
)
from .analysis.narrator import TABLE_ROWS

console = Console()

ZONE_STYLES = {
    Zone.GREEN: "green",
    Zone.YELLOW: "yellow",
    Zone.RED: "red",
}

INTENSITY_CHOICES = click.Choice(["Low", "Moderate", "High"], case_sensitive=False)
LOAD_CHOICES = click.Choice(["Light", "Normal", "Heavy", "Competition"], case_sensitive=False)


def parse_day(value: str) -> date:
    """Parse YYYY-MM-DD, defaulting to today."""
    if not value:
        return date.today()
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise click.BadParameter(f"'{value}' is not a YYYY-MM-DD date")


def biometrics_options(func):
    """Shared biometric input options."""
    options = [
        click.option("--recovery", "recovery_percent", type=float, help="Recovery percentage (0-100)"),
        click.option("--sleep-hours", type=float, help="Hours slept"),
        click.option("--sleep-score", "sleep_score_percent", type=float, help="Sleep performance (0-100)"),
        click.option("--hrv", type=float, help="HRV in ms"),
        click.option("--hrv-baseline", type=float, help="7-day average HRV in ms"),
        click.option("--rhr", "resting_heart_rate", type=float, help="Resting heart rate (bpm)"),
        click.option("--strain", "strain_score", type=float, help="Day strain (0-21)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def context_options(func):
    """Shared user context options."""
    options = [
        click.option("--rehab-stage", help="Acute, Sub-acute, Rehab, Return-to-training or None"),
        click.option("--primary-goal", help="e.g. 'High Performance', 'Rehab & Return'"),
        click.option("--weekly-load", type=LOAD_CHOICES, help="Planned load this week"),
        click.option("--fitness-goal", help="e.g. 'strength', 'endurance', 'weight loss'"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def print_score(title: str, result) -> None:
    """Print a ScoreResult as a breakdown table plus analysis panel."""
    style = ZONE_STYLES[result.zone]
    table = Table(title=title, box=box.ROUNDED)
    table.add_column("Component", style="cyan")
    table.add_column("Points", justify="right")
    for name, value in result.breakdown.items():
        table.add_row(name.replace("_", " ").title(), f"{value:.2f}")
    table.add_row("[bold]Score[/bold]", f"[bold {style}]{result.score:.1f}/10[/bold {style}]")
    console.print(table)
    console.print(Panel(result.analysis, title=f"Zone: {result.zone.value}", style=style))


def print_fit_score(result, narrator: AnalysisNarrator) -> None:
    style = ZONE_STYLES[result.zone]
    table = Table(title="FitScore", box=box.ROUNDED)
    table.add_column("Metric", style="cyan")
    table.add_column("Score", justify="right")
    for key, label in TABLE_ROWS:
        value = result.components[key]
        suffix = " (est.)" if key == "nutrition" and result.nutrition_estimated else ""
        table.add_row(label, f"{value:.1f}/10{suffix}")
    table.add_row("[bold]🎯 FitScore[/bold]", f"[bold {style}]{result.fit_score:.1f}/10[/bold {style}]")
    console.print(table)
    console.print(Panel(narrator.render(result), style=style))


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
def cli(log_level):
    """FitScore recovery, training and composite scoring."""
    logging.basicConfig(
        level=(log_level or config.LOG_LEVEL).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        config.validate()
    except ValueError as e:
        console.print(f"[red]❌ Configuration Error: {e}[/red]")
        raise SystemExit(1)


@cli.command()
@biometrics_options
def recovery(**readings):
    """Score recovery from today's biometrics."""
    biometrics = DailyBiometrics(**readings)
    print_score("Recovery Score", RecoveryScorer().score(biometrics))


@cli.command()
@click.option("--type", "session_type", required=True, help="Session type, e.g. 'Morning Run'")
@click.option("--duration", type=float, required=True, help="Duration in minutes")
@click.option("--intensity", type=INTENSITY_CHOICES, help="Session intensity")
@click.option("--goal", help="Session goal")
@click.option("--comment", help="How the session felt")
@click.option("--skipped", is_flag=True, help="Session was skipped")
@biometrics_options
@context_options
def training(session_type, duration, intensity, goal, comment, skipped,
             rehab_stage, primary_goal, weekly_load, fitness_goal, **readings):
    """Score a training session."""
    session = TrainingSession(type=session_type, duration=duration, intensity=intensity,
                              goal=goal, comment=comment, skipped=skipped)
    context = UserContext(rehab_stage=rehab_stage, primary_goal=primary_goal,
                          weekly_load=weekly_load, fitness_goal=fitness_goal)
    print_score("Training Score", TrainingScorer().score(session, DailyBiometrics(**readings), context))


@cli.command()
@biometrics_options
@click.option("--target-sleep", type=float, help="Target sleep hours")
@click.option("--nutrition", type=click.FloatRange(0, 10), help="Nutrition score from meal analysis (0-10)")
@click.option("--markdown", is_flag=True, help="Print the markdown table instead")
def composite(target_sleep, nutrition, markdown, **readings):
    """Calculate the composite FitScore."""
    narrator = AnalysisNarrator()
    result = CompositeFitScoreCalculator().from_biometrics(
        DailyBiometrics(**readings), nutrition_score=nutrition, target_sleep_hours=target_sleep
    )
    if markdown:
        click.echo(narrator.render_table(result))
    else:
        print_fit_score(result, narrator)


@cli.command("init-db")
def init_db():
    """Create the database tables."""
    from .db import get_db

    try:
        get_db()
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database error: {e}[/red]")
        return
    console.print(f"[green]✅ Database ready at {config.DATABASE_URL}[/green]")


@cli.command("log-biometrics")
@click.option("--date", "day", help="Day (YYYY-MM-DD), defaults to today")
@click.option("--user-id", default=None, help="User ID")
@biometrics_options
def log_biometrics(day, user_id, **readings):
    """Store a day's biometrics."""
    from .analysis.daily_scoring import DailyScoringService

    day = parse_day(day)
    try:
        DailyScoringService(user_id).record_biometrics(DailyBiometrics(date=day, **readings))
    except (ValueError, SQLAlchemyError) as e:
        console.print(f"[red]❌ Could not store biometrics: {e}[/red]")
        return
    console.print(f"[green]✅ Biometrics stored for {day}[/green]")


@cli.command("log-session")
@click.option("--date", "day", help="Day (YYYY-MM-DD), defaults to today")
@click.option("--user-id", default=None, help="User ID")
@click.option("--type", "session_type", required=True, help="Session type")
@click.option("--duration", type=float, required=True, help="Duration in minutes")
@click.option("--intensity", type=INTENSITY_CHOICES, help="Session intensity")
@click.option("--goal", help="Session goal")
@click.option("--comment", help="How the session felt")
@click.option("--skipped", is_flag=True, help="Session was skipped")
def log_session(day, user_id, session_type, duration, intensity, goal, comment, skipped):
    """Store a training session."""
    from .analysis.daily_scoring import DailyScoringService

    day = parse_day(day)
    session = TrainingSession(type=session_type, duration=duration, intensity=intensity,
                              goal=goal, comment=comment, skipped=skipped)
    try:
        session_id = DailyScoringService(user_id).record_session(day, session)
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Could not store session: {e}[/red]")
        return
    console.print(f"[green]✅ Session #{session_id} stored for {day}[/green]")


@cli.command("set-context")
@click.option("--user-id", default=None, help="User ID")
@context_options
def set_context(user_id, rehab_stage, primary_goal, weekly_load, fitness_goal):
    """Store the user's training context."""
    from .analysis.daily_scoring import DailyScoringService

    context = UserContext(rehab_stage=rehab_stage, primary_goal=primary_goal,
                          weekly_load=weekly_load, fitness_goal=fitness_goal)
    try:
        DailyScoringService(user_id).set_context(context)
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Could not store context: {e}[/red]")
        return
    console.print("[green]✅ Context updated[/green]")


@cli.command()
@click.option("--date", "day", help="Day (YYYY-MM-DD), defaults to today")
@click.option("--user-id", default=None, help="User ID")
@click.option("--nutrition", type=click.FloatRange(0, 10), help="Nutrition score (0-10)")
@click.option("--target-sleep", type=float, help="Target sleep hours")
@click.option("--markdown", is_flag=True, help="Print the markdown table")
def daily(day, user_id, nutrition, target_sleep, markdown):
    """Score a stored day and save the results."""
    from .analysis.daily_scoring import DailyScoringService

    day = parse_day(day)
    console.print(Panel.fit(f"📊 Daily Scores for {day}", style="bold blue"))

    try:
        report = DailyScoringService(user_id).score_day(day, nutrition, target_sleep)
    except LookupError as e:
        console.print(f"[orange3]⚠️  {e}[/orange3]")
        return
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database error: {e}[/red]")
        return

    print_score("Recovery Score", report.recovery)
    for index, result in enumerate(report.sessions, start=1):
        print_score(f"Training Session {index}", result)

    if markdown:
        console.print(Markdown(report.table))
        console.print(report.summary)
    else:
        print_fit_score(report.fit_score, AnalysisNarrator())


@cli.command()
@click.option("--date", "day", help="Day (YYYY-MM-DD), defaults to today")
@click.option("--user-id", default=None, help="User ID")
@click.option("--days", default=None, type=int, help="Days of history to use")
def forecast(day, user_id, days):
    """Forecast the FitScore trend from stored history."""
    from .analysis.daily_scoring import DailyScoringService

    day = parse_day(day)
    try:
        result = DailyScoringService(user_id).forecast(day, days)
    except LookupError as e:
        console.print(f"[orange3]⚠️  {e}[/orange3]")
        return
    except SQLAlchemyError as e:
        console.print(f"[red]❌ Database error: {e}[/red]")
        return

    arrows = {"up": "📈", "down": "📉", "stable": "➡️"}
    console.print(Panel(f"{arrows[result.trend]} Forecast: [bold]{result.forecast:.1f}/10[/bold]\n{result.message}",
                        title="FitScore Forecast", style="bold blue"))


if __name__ == "__main__":
    cli()
