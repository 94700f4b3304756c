"""Main CLI interface for the live scoring system."""

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import typer
from loguru import logger as loguru_logger
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..config import settings
from ..database import create_tables, drop_tables, get_session
from ..exceptions import ScoringError
from ..schemas import (
    EndInnings,
    MatchCreate,
    RebuildInnings,
    RecordBall,
    StartInnings,
    UndoBall,
    UpdateInnings,
)
from ..scoring.types import ExtraType, Side, TossDecision, WicketType, enum_value
from ..services import MatchService, ScoringService

# Initialize rich console
console = Console()


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """Setup logging configuration for both the standard library and loguru."""
    log_level = getattr(logging, level.upper(), logging.INFO)

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    console_handler = RichHandler(console=console, show_time=True, show_path=False)
    console_handler.setLevel(log_level)

    handlers: List[logging.Handler] = [console_handler]
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)

    # Service-layer messages go through loguru; send them to the same handlers
    loguru_logger.remove()
    for handler in handlers:
        loguru_logger.add(handler, level=logging.getLevelName(log_level), format="{message}")


app = typer.Typer(
    name="cricket-scoring",
    help="Live Cricket Scorer - ball-by-ball scoring and live scorecards",
    no_args_is_help=True
)

PASSCODE_OPTION = typer.Option(
    ..., "--passcode", "-p", prompt=True, hide_input=True, envvar="SCORER_PASSCODE", help="Scorer passcode"
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Log file path"),
):
    """Live Cricket Scorer - ball-by-ball scoring and live scorecards."""
    log_level = "DEBUG" if verbose else settings.logging.level
    setup_logging(log_level, log_file or settings.logging.file)


@contextmanager
def report_errors(action: str):
    """Print scoring and validation failures in red and exit with status 1."""
    try:
        yield
    except ScoringError as e:
        console.print(f"[red]❌ {action} failed: {e.message}[/red]")
        raise typer.Exit(1)
    except PydanticValidationError as e:
        messages = "; ".join(str(err["msg"]).removeprefix("Value error, ") for err in e.errors())
        console.print(f"[red]❌ {action} failed: {messages}[/red]")
        raise typer.Exit(1)


def apply_command(match_id: int, passcode: str, command: Any) -> Dict[str, Any]:
    """Check the passcode, run one scoring command and return the fresh scorecard."""
    with get_session() as session:
        MatchService(session).require_passcode(match_id, passcode)
        ScoringService(session).execute(match_id, command)
        return MatchService(session).scorecard(match_id)


def print_live_summary(card: Dict[str, Any]) -> None:
    """One-glance view of the innings in progress."""
    if card["result_summary"]:
        console.print(f"[bold green]🏆 {card['result_summary']}[/bold green]")
    if not card["innings"]:
        return

    current = card["innings"][-1]
    batting = card["team_a_name"] if current["batting_team"] == Side.A.value else card["team_b_name"]
    line = f"[bold]{batting}[/bold] {current['score']} ({current['overs']} ov, RR {current['run_rate']})"
    if current["target"] is not None:
        line += f"  target {current['target']}, RRR {current['required_run_rate']}"
    console.print(line)

    if not current["is_completed"]:
        console.print(
            f"  Striker: {current['striker'] or '-'}  Non-striker: {current['non_striker'] or '-'}  "
            f"Bowler: {current['bowler'] or '-'}"
        )
        console.print(f"  This over: {' '.join(current['this_over']) or '-'}")
    if current["commentary"]:
        console.print(f"  [italic]{current['commentary'][0]}[/italic]")


@app.command()
def setup_db(force: bool = typer.Option(False, "--force", help="Force recreation of tables")):
    """Initialize database schema."""
    console.print("[bold]Setting up database schema...[/bold]")

    try:
        if force:
            console.print("Dropping existing tables...")
            drop_tables()

        console.print("Creating database tables...")
        create_tables()

        console.print("[green]✅ Database schema initialized successfully![/green]")

    except Exception as e:
        console.print(f"[red]❌ Database setup failed: {e}[/red]")
        raise typer.Exit(1)


@app.command("create-match")
def create_match(
    team_a: str = typer.Option(..., "--team-a", help="Name of side A"),
    team_b: str = typer.Option(..., "--team-b", help="Name of side B"),
    players_a: str = typer.Option(..., "--players-a", help="Comma-separated side A players in batting order"),
    players_b: str = typer.Option(..., "--players-b", help="Comma-separated side B players in batting order"),
    overs: int = typer.Option(settings.scoring.default_total_overs, "--overs", help="Overs per innings"),
    location: Optional[str] = typer.Option(None, "--location", help="Venue"),
    toss_winner: Optional[Side] = typer.Option(None, "--toss-winner", help="Side that won the toss"),
    toss_decision: Optional[TossDecision] = typer.Option(None, "--toss-decision", help="bat or bowl"),
    passcode: str = typer.Option(
        ..., "--passcode", "-p", prompt=True, hide_input=True, confirmation_prompt=True,
        help="4-6 digit scorer passcode",
    ),
):
    """Create a match with both squads."""
    with report_errors("Create match"):
        data = MatchCreate(
            team_a_name=team_a,
            team_b_name=team_b,
            total_overs=overs,
            location=location,
            passcode=passcode,
            players_a=players_a.split(","),
            players_b=players_b.split(","),
            toss_winner=toss_winner,
            toss_decision=toss_decision,
        )
        with get_session() as session:
            match = MatchService(session).create_match(data)
            match_id = match.id

    console.print(f"[green]✅ Match {match_id} created: {data.team_a_name} vs {data.team_b_name}[/green]")


@app.command("list-matches")
def list_matches(all_matches: bool = typer.Option(False, "--all", help="Include deleted matches")):
    """List matches, newest first."""
    with get_session() as session:
        matches = MatchService(session).list_matches(include_deleted=all_matches)

        table = Table(title="Matches")
        table.add_column("ID", style="cyan")
        table.add_column("Teams", style="green")
        table.add_column("Overs", style="yellow")
        table.add_column("Status", style="magenta")
        table.add_column("Result")
        for match in matches:
            status = enum_value(match.status)
            if match.is_deleted:
                status += " (deleted)"
            table.add_row(
                str(match.id),
                f"{match.team_a_name} vs {match.team_b_name}",
                str(match.total_overs),
                status,
                match.result_summary or "",
            )

    console.print(table)


@app.command()
def show(match_id: int = typer.Argument(..., help="Match ID")):
    """Show the full scorecard of a match."""
    with report_errors("Show"):
        with get_session() as session:
            card = MatchService(session).scorecard(match_id)

    console.print(f"\n[bold blue]🏏 {card['team_a_name']} vs {card['team_b_name']}[/bold blue] ({card['status']})")
    names = {Side.A.value: card["team_a_name"], Side.B.value: card["team_b_name"]}

    for innings in card["innings"]:
        batting = Table(
            title=f"Innings {innings['innings_number']}: {names[innings['batting_team']]} "
                  f"{innings['score']} ({innings['overs']} ov)"
        )
        batting.add_column("Batter", style="cyan")
        batting.add_column("Dismissal")
        batting.add_column("R", style="green", justify="right")
        batting.add_column("B", justify="right")
        batting.add_column("4s", justify="right")
        batting.add_column("6s", justify="right")
        batting.add_column("SR", style="yellow", justify="right")
        for row in innings["batting"]:
            if row["balls"] == 0 and not row["is_out"]:
                continue
            batting.add_row(
                row["name"],
                row["dismissal_text"] or "not out",
                str(row["runs"]),
                str(row["balls"]),
                str(row["fours"]),
                str(row["sixes"]),
                f"{row['strike_rate']:.2f}",
            )
        console.print(batting)

        extras = innings["extras"]
        console.print(
            f"Extras: {extras['total']} (wd {extras['wides']}, nb {extras['no_balls']}, "
            f"b {extras['byes']}, lb {extras['leg_byes']})"
        )

        bowling = Table(title=f"Bowling: {names[innings['bowling_team']]}")
        bowling.add_column("Bowler", style="cyan")
        bowling.add_column("O", justify="right")
        bowling.add_column("M", justify="right")
        bowling.add_column("R", justify="right")
        bowling.add_column("W", style="red", justify="right")
        bowling.add_column("Econ", style="yellow", justify="right")
        for row in innings["bowling"]:
            if row["balls"] == 0 and row["runs"] == 0:
                continue
            bowling.add_row(
                row["name"],
                row["overs"],
                str(row["maidens"]),
                str(row["runs"]),
                str(row["wickets"]),
                f"{row['economy']:.2f}",
            )
        console.print(bowling)

        if innings["fall_of_wickets"]:
            fow = ", ".join(
                f"{f['wicket_number']}-{f['score']} ({f['player_name']}, {f['over']})"
                for f in innings["fall_of_wickets"]
            )
            console.print(f"Fall of wickets: {fow}")

    print_live_summary(card)


@app.command("start-innings")
def start_innings(
    match_id: int = typer.Argument(..., help="Match ID"),
    number: int = typer.Argument(..., help="Innings number (1 or 2)"),
    batting_team: Side = typer.Argument(..., help="Batting side (a or b)"),
    passcode: str = PASSCODE_OPTION,
):
    """Start an innings and put the match live."""
    with report_errors("Start innings"):
        card = apply_command(match_id, passcode, StartInnings(innings_number=number, batting_team=batting_team))
    console.print(f"[green]✅ Innings {number} started[/green]")
    print_live_summary(card)


@app.command()
def select(
    match_id: int = typer.Argument(..., help="Match ID"),
    striker: Optional[int] = typer.Option(None, "--striker", help="Striker player ID"),
    non_striker: Optional[int] = typer.Option(None, "--non-striker", help="Non-striker player ID"),
    bowler: Optional[int] = typer.Option(None, "--bowler", help="Bowler player ID"),
    passcode: str = PASSCODE_OPTION,
):
    """Select striker, non-striker and bowler for the current innings."""
    chosen = {
        key: value
        for key, value in (("striker_id", striker), ("non_striker_id", non_striker), ("current_bowler_id", bowler))
        if value is not None
    }
    with report_errors("Select players"):
        card = apply_command(match_id, passcode, UpdateInnings(**chosen))
    print_live_summary(card)


@app.command()
def ball(
    match_id: int = typer.Argument(..., help="Match ID"),
    runs: int = typer.Argument(0, help="Runs off the bat, or byes run"),
    extra: Optional[ExtraType] = typer.Option(None, "--extra", help="Extra type"),
    extra_runs: int = typer.Option(0, "--extra-runs", help="Extra runs on top of the penalty"),
    wicket: Optional[WicketType] = typer.Option(None, "--wicket", help="Dismissal kind if a wicket fell"),
    dismissed: Optional[int] = typer.Option(None, "--dismissed", help="Dismissed player ID (defaults to striker)"),
    passcode: str = PASSCODE_OPTION,
):
    """Record one delivery."""
    with report_errors("Record ball"):
        command = RecordBall(
            runs=runs,
            extra_type=extra,
            extra_runs=extra_runs,
            is_wicket=wicket is not None,
            wicket_type=wicket,
            dismissed_player_id=dismissed,
        )
        card = apply_command(match_id, passcode, command)
    print_live_summary(card)


@app.command()
def undo(match_id: int = typer.Argument(..., help="Match ID"), passcode: str = PASSCODE_OPTION):
    """Undo the last delivery of the current innings."""
    with report_errors("Undo"):
        card = apply_command(match_id, passcode, UndoBall())
    console.print("[yellow]↩ Last ball undone[/yellow]")
    print_live_summary(card)


@app.command("end-innings")
def end_innings(match_id: int = typer.Argument(..., help="Match ID"), passcode: str = PASSCODE_OPTION):
    """End the current innings."""
    with report_errors("End innings"):
        card = apply_command(match_id, passcode, EndInnings())
    console.print("[green]✅ Innings ended[/green]")
    print_live_summary(card)


@app.command("delete-match")
def delete_match(match_id: int = typer.Argument(..., help="Match ID"), passcode: str = PASSCODE_OPTION):
    """Soft-delete a match."""
    with report_errors("Delete match"):
        with get_session() as session:
            MatchService(session).delete_match(match_id, passcode)
    console.print(f"[green]✅ Match {match_id} deleted[/green]")


@app.command()
def repair(match_id: int = typer.Argument(..., help="Match ID"), passcode: str = PASSCODE_OPTION):
    """Re-derive innings totals from the ball events."""
    with report_errors("Repair"):
        with get_session() as session:
            matches = MatchService(session)
            matches.require_passcode(match_id, passcode)
            scoring = ScoringService(session)
            innings_ids = [innings.id for innings in matches.get_innings(match_id)]
            for innings_id in innings_ids:
                scoring.execute(match_id, RebuildInnings(innings_id=innings_id))
            repaired = len(scoring.changes)

    table = Table(title=f"Repair of match {match_id}")
    table.add_column("Innings checked", style="cyan")
    table.add_column("Innings rebuilt", style="green")
    table.add_row(str(len(innings_ids)), str(repaired))
    console.print(table)


@app.command()
def serve(
    host: str = typer.Option(settings.api.host, "--host", help="Bind address"),
    port: int = typer.Option(settings.api.port, "--port", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the HTTP API."""
    import uvicorn

    console.print(f"[bold]Serving live scorer API on http://{host}:{port}[/bold]")
    uvicorn.run("cricket_scoring.api.app:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    app()
