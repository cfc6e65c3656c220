"""
TalentMatch Command Line Interface

Provides CLI commands for scoring candidates against jobs, ranking stored
candidates, and checking the database and embedding model.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from talentmatch.core.exceptions import MatchingError

app = typer.Typer(
    name="talentmatch",
    help="Candidate-job AI match scoring CLI",
    add_completion=False,
)
console = Console()


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    elif score >= 60:
        return "yellow"
    return "red"


def _load_json(path: Path) -> dict:
    if not path.exists():
        console.print(f"[red]Error: File does not exist: {path}[/red]")
        raise typer.Exit(1)
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        console.print(f"[red]Error: Invalid JSON in {path}: {e}[/red]")
        raise typer.Exit(1)


@app.callback()
def main() -> None:
    """Configure logging before any command runs."""
    from talentmatch.utils.logger import setup_logging

    setup_logging()


@app.command()
def version():
    """Show application version."""
    from talentmatch import __version__, __app_name__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration."""
    from talentmatch.utils.config import get_settings

    settings = get_settings()

    table = Table(title="TalentMatch Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Embedding Provider", settings.ml.provider)
    table.add_row("Embedding Model", settings.ml.active_model)
    table.add_row(
        "Weights (semantic/skills/experience)",
        f"{settings.matching.semantic_weight}/{settings.matching.skills_weight}/"
        f"{settings.matching.experience_weight}",
    )
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def init_db():
    """Create the candidate and job collection indexes."""
    from talentmatch.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    db_manager = get_database_manager()
    if not db_manager.check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB.[/red]")
        console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
        raise typer.Exit(1)

    console.print("  [green]✓[/green] Connected to MongoDB")
    db_manager.ensure_indexes()
    console.print("  [green]✓[/green] Indexes created")
    console.print("\n[green]Database initialized successfully![/green]")


@app.command()
def score(
    candidate_file: Path = typer.Argument(..., help="JSON file with candidate skills, currentTitle, summaryText"),
    job_file: Path = typer.Argument(..., help="JSON file with job title and descriptionText"),
    no_reasons: bool = typer.Option(False, "--no-reasons", help="Skip match reasons"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    """Score a candidate against a job from JSON files."""
    from pydantic import ValidationError

    from talentmatch.core.matching import get_matching_engine
    from talentmatch.data.models import CandidateInput, JobInput

    try:
        candidate = CandidateInput.model_validate(_load_json(candidate_file))
        job = JobInput.model_validate(_load_json(job_file))
    except ValidationError as e:
        console.print(f"[red]Error: Invalid input: {e}[/red]")
        raise typer.Exit(1)

    try:
        result = get_matching_engine().score(candidate, job, include_reasons=not no_reasons)
    except MatchingError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json(by_alias=True))
        return

    style = _score_style(result.match_score)
    console.print(f"\n[bold]Match score:[/bold] [{style}]{result.match_score}[/{style}]")
    console.print(f"[bold]Assessment:[/bold] {result.overall_assessment}")

    table = Table(title="Score Breakdown")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Detail")
    table.add_row("Semantic", str(result.semantic_score), result.semantic_match.confidence)
    table.add_row(
        "Skills",
        str(result.skills_match.score),
        ", ".join(result.skills_match.matching_skills) or "-",
    )
    table.add_row("Experience", str(result.experience_match.score), result.experience_match.reason)
    console.print(table)

    for reason in result.match_reasons:
        console.print(f"  • {reason}")


def _ranking_defaults(top_n: Optional[int], min_score: Optional[int]) -> tuple[int, int]:
    from talentmatch.utils.config import get_settings

    settings = get_settings().matching
    top_n = top_n or settings.default_top_n
    min_score = settings.default_min_score if min_score is None else min_score
    return top_n, min_score


def _require_database() -> None:
    from talentmatch.data.database import get_database_manager

    if not get_database_manager().check_sync_connection():
        console.print("[red]Error: Could not connect to MongoDB. Run 'init-db' first.[/red]")
        raise typer.Exit(1)


def _print_ranking(results: list, title: str, id_column: str, id_of) -> None:
    table = Table(title=title)
    table.add_column("Rank", justify="right")
    table.add_column(id_column, style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Assessment")
    table.add_column("Top Reason")

    for rank, result in enumerate(results, 1):
        style = _score_style(result.match_score)
        table.add_row(
            str(rank),
            id_of(result) or "-",
            f"[{style}]{result.match_score}[/{style}]",
            result.overall_assessment,
            result.match_reasons[0] if result.match_reasons else "",
        )

    console.print(table)


@app.command()
def match(
    job_id: str = typer.Argument(..., help="Job ID to match candidates against"),
    top_n: Optional[int] = typer.Option(None, "--top", "-n", help="Number of top matches to show"),
    min_score: Optional[int] = typer.Option(None, "--min-score", "-m", help="Minimum match score"),
):
    """Rank stored candidates against a job posting."""
    from talentmatch.core.matching import create_match_service

    top_n, min_score = _ranking_defaults(top_n, min_score)
    _require_database()

    console.print(f"[yellow]Matching candidates for job: {job_id}[/yellow]")

    try:
        results = create_match_service().match_candidates_for_job(
            job_id, top_n=top_n, min_score=min_score
        )
    except (MatchingError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not results:
        console.print(f"[yellow]No candidates scored {min_score} or higher.[/yellow]")
        raise typer.Exit(0)

    _print_ranking(
        results, f"Top {len(results)} Candidates", "Candidate ID", lambda r: r.candidate_id
    )


@app.command()
def match_jobs(
    candidate_id: str = typer.Argument(..., help="Candidate ID to find jobs for"),
    top_n: Optional[int] = typer.Option(None, "--top", "-n", help="Number of top matches to show"),
    min_score: Optional[int] = typer.Option(None, "--min-score", "-m", help="Minimum match score"),
):
    """Rank open job postings for a stored candidate."""
    from talentmatch.core.matching import create_match_service

    top_n, min_score = _ranking_defaults(top_n, min_score)
    _require_database()

    console.print(f"[yellow]Matching open jobs for candidate: {candidate_id}[/yellow]")

    try:
        results = create_match_service().match_jobs_for_candidate(
            candidate_id, top_n=top_n, min_score=min_score
        )
    except (MatchingError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not results:
        console.print(f"[yellow]No open jobs scored {min_score} or higher.[/yellow]")
        raise typer.Exit(0)

    _print_ranking(results, f"Top {len(results)} Jobs", "Job ID", lambda r: r.job_id)


@app.command()
def health_check():
    """Check database and embedding model status."""
    from talentmatch.data.database import get_database_manager
    from talentmatch.utils.config import get_settings

    console.print("[bold cyan]System Health Check[/bold cyan]")
    console.print(f"[dim]{'─' * 50}[/dim]")

    settings = get_settings()
    all_healthy = True

    console.print("\n[bold]Database:[/bold]")
    if get_database_manager().check_sync_connection():
        console.print("  [green]✓[/green] MongoDB connected")
        console.print(f"    Host: {settings.database.host}:{settings.database.port}")
        console.print(f"    Database: {settings.database.name}")
    else:
        console.print("  [red]✗[/red] MongoDB not connected")
        all_healthy = False

    console.print("\n[bold]Embedding Model:[/bold]")
    from talentmatch.ml.embeddings import get_embedding_provider

    try:
        provider = get_embedding_provider()
        vector = provider.embed("health check")
        console.print(f"  [green]✓[/green] {provider.model_name} ready (dimension {vector.size})")
    except MatchingError as e:
        console.print(f"  [red]✗[/red] Embedding model unavailable: {e}")
        all_healthy = False

    console.print(f"\n[dim]{'─' * 50}[/dim]")
    if all_healthy:
        console.print("[green]All critical systems operational.[/green]")
    else:
        console.print("[red]Some systems require attention.[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
