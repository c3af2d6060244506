"""CLI interface for coedit."""

import json
import sys
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from coedit.analysis import CollaborationAnalyzer, WEIGHT_FUNCTIONS
from coedit.config import (
    MIN_COMBINED_WEIGHT,
    SIMILARITY_THRESHOLD,
    TOP_CONTRIBUTORS,
    WEIGHT_FUNCTION,
)
from coedit.errors import AnalysisError
from coedit.git.repository import GitRepository, GitRepositoryError, load_commit_file
from coedit.models import AnalysisResult, CommitRecord
from coedit.visualization.charts import ChartGenerator
from coedit.visualization.report import ReportGenerator


console = Console()


def parse_date(date_str: str | None) -> datetime | None:
    """Parse a date string into a datetime object.

    Args:
        date_str: Date string in YYYY-MM-DD format, or None

    Returns:
        datetime object or None
    """
    if not date_str:
        return None

    try:
        dt = datetime.strptime(date_str, "%Y-%m-%d")
        return dt.replace(tzinfo=timezone.utc)
    except ValueError:
        pass

    try:
        dt = datetime.strptime(date_str, "%Y-%m-%dT%H:%M:%S")
        return dt.replace(tzinfo=timezone.utc)
    except ValueError:
        raise click.BadParameter(f"Invalid date format: {date_str}. Use YYYY-MM-DD.")


def repository_name(source: str) -> str:
    """Derive a display name from a path or clone URL."""
    name = source.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name or source


def filter_commits(
    commits: list[CommitRecord],
    since: datetime | None = None,
    until: datetime | None = None,
    author: str | None = None,
) -> list[CommitRecord]:
    """Apply date and author filters to already loaded commits."""
    result = []
    for commit in commits:
        if since and commit.timestamp < since:
            continue
        if until and commit.timestamp > until:
            continue
        if author and author not in commit.author and author != commit.author_email:
            continue
        result.append(commit)
    return result


def collect_commits(
    source: str,
    since: datetime | None = None,
    until: datetime | None = None,
    author: str | None = None,
    verbose: bool = False,
) -> tuple[str, list[CommitRecord]]:
    """Load commits from a JSON export, a local repository or a clone URL.

    Remote repositories are cloned into a temporary directory that is
    removed once the history has been read.

    Returns:
        Tuple of (display name, commits)
    """
    path = Path(source)

    if path.is_file():
        if verbose:
            console.print(f"Loading commits from {source}")
        commits = filter_commits(load_commit_file(path), since, until, author)
        return path.stem, commits

    if path.is_dir():
        if verbose:
            console.print(f"Opening repository: {source}")
        repo = GitRepository(source)
        if verbose:
            console.print("Collecting commits...")
        commits = list(repo.iter_commits(since=since, until=until, author=author))
        return repo.name, commits

    console.print(f"Downloading '{source}'...")
    with tempfile.TemporaryDirectory(prefix="coedit-") as tmpdir:
        repo = GitRepository.clone(source, Path(tmpdir) / "repo")
        console.print("Download done")
        if verbose:
            console.print("Collecting commits...")
        commits = list(repo.iter_commits(since=since, until=until, author=author))

    return repository_name(source), commits


def run_analysis(source, since, until, author, threshold, top, min_activity, weight, verbose):
    """Collect commits and analyze them.

    Returns:
        Tuple of (display name, AnalysisResult)
    """
    analyzer = CollaborationAnalyzer(
        threshold=threshold,
        top=top,
        min_combined_weight=min_activity,
        weight_function=weight,
    )

    name, commits = collect_commits(
        source, since=parse_date(since), until=parse_date(until), author=author, verbose=verbose
    )

    if verbose:
        console.print(f"Found {len(commits)} commits")
        console.print("Analyzing data...")

    return name, analyzer.analyze(commits)


def similarity_table(result: AnalysisResult, name: str) -> Table:
    table = Table(title=f"Similar Developers: {name}")
    table.add_column("Developer", style="cyan")
    table.add_column("Developer", style="cyan")
    table.add_column("Similarity", style="green", justify="right")

    for pair in result.similarities:
        table.add_row(pair.developer_a, pair.developer_b, f"{pair.percent}%")

    return table


def contributor_table(result: AnalysisResult, name: str) -> Table:
    table = Table(title=f"Top Contributors: {name}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Developer", style="cyan")
    table.add_column("Insertions", style="green", justify="right")
    table.add_column("Deletions", style="red", justify="right")
    table.add_column("Commits", justify="right")
    table.add_column("Files / Commit", style="yellow", justify="right")

    for rank, summary in enumerate(result.top_contributors, start=1):
        table.add_row(
            str(rank),
            summary.developer,
            f"+{summary.insertions:,}",
            f"-{summary.deletions:,}",
            f"{summary.commits:,}",
            f"{summary.average_files_per_commit:.2f}",
        )

    return table


def print_similarities(result: AnalysisResult, name: str) -> None:
    if result.similarities:
        console.print(similarity_table(result, name))
    else:
        console.print(
            f"[yellow]No developer pairs above {result.threshold:.0%} similarity.[/yellow]"
        )


def print_contributors(result: AnalysisResult, name: str) -> None:
    if result.top_contributors:
        console.print(contributor_table(result, name))
    else:
        console.print("[yellow]No contributors found.[/yellow]")


def analysis_options(func):
    """Options shared by every command that runs an analysis."""
    options = [
        click.argument("source"),
        click.option(
            "--threshold",
            type=click.FloatRange(0, 1, max_open=True),
            default=SIMILARITY_THRESHOLD,
            show_default=True,
            help="Report pairs more similar than this (0-1)",
        ),
        click.option(
            "--top",
            type=click.IntRange(min=1),
            default=TOP_CONTRIBUTORS,
            show_default=True,
            help="Number of top contributors",
        ),
        click.option(
            "--min-activity",
            type=click.FloatRange(min=0, min_open=True),
            default=MIN_COMBINED_WEIGHT,
            show_default=True,
            help="Minimum combined weight for a developer pair",
        ),
        click.option(
            "--weight",
            type=click.Choice(sorted(WEIGHT_FUNCTIONS)),
            default=WEIGHT_FUNCTION,
            show_default=True,
            help="How line changes are weighted",
        ),
        click.option("--since", help="Only commits after this date (YYYY-MM-DD)"),
        click.option("--until", help="Only commits before this date (YYYY-MM-DD)"),
        click.option("--author", help="Filter by author"),
        click.option("-v", "--verbose", is_flag=True, help="Verbose output"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def fail(error: Exception, verbose: bool = False) -> None:
    console.print(f"[red]Error: {escape(str(error))}[/red]")
    if verbose and not isinstance(error, (GitRepositoryError, AnalysisError)):
        import traceback

        traceback.print_exc()
    sys.exit(1)


@click.group()
@click.version_option(package_name="coedit")
def cli():
    """Coedit - find developers who work on the same files.

    SOURCE is a local repository, a JSON file of exported commits, or a
    URL to clone.
    """
    pass


@cli.command()
@analysis_options
@click.option("-o", "--output", type=click.Path(), help="Output file path")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["table", "json", "html"]),
    default="table",
)
def analyze(
    source, threshold, top, min_activity, weight, since, until, author, verbose, output, output_format
):
    """Similar developers and top contributors."""
    try:
        name, result = run_analysis(
            source, since, until, author, threshold, top, min_activity, weight, verbose
        )

        if result.total_commits == 0:
            console.print("[yellow]No commits found matching criteria.[/yellow]")

        if verbose and result.renames:
            console.print(f"Resolved {len(result.renames)} renames")

        if output_format == "table":
            print_similarities(result, name)
            print_contributors(result, name)
            return

        figures = ChartGenerator(result).all_charts()
        report = ReportGenerator(
            figures=figures,
            result=result,
            title=f"Collaboration Analysis: {name}",
            source=source,
        )

        if output_format == "html":
            path = report.write_html(output or "report.html")
            console.print(f"[green]Report written to {path}[/green]")

        elif output_format == "json":
            text = json.dumps(report.to_json(), indent=2, default=str)
            if output:
                Path(output).write_text(text)
                console.print(f"[green]JSON written to {output}[/green]")
            else:
                click.echo(text)

    except (GitRepositoryError, AnalysisError) as e:
        fail(e)
    except Exception as e:
        fail(e, verbose)


@cli.command()
@analysis_options
def similarity(source, threshold, top, min_activity, weight, since, until, author, verbose):
    """Developer pairs that edit the same files."""
    try:
        name, result = run_analysis(
            source, since, until, author, threshold, top, min_activity, weight, verbose
        )
        print_similarities(result, name)
    except (GitRepositoryError, AnalysisError) as e:
        fail(e)
    except Exception as e:
        fail(e, verbose)


@cli.command()
@analysis_options
def contributors(source, threshold, top, min_activity, weight, since, until, author, verbose):
    """Top contributors by lines inserted."""
    try:
        name, result = run_analysis(
            source, since, until, author, threshold, top, min_activity, weight, verbose
        )
        print_contributors(result, name)
    except (GitRepositoryError, AnalysisError) as e:
        fail(e)
    except Exception as e:
        fail(e, verbose)


@cli.command()
@click.argument("source")
@click.option("--since", help="Only commits after this date (YYYY-MM-DD)")
@click.option("--until", help="Only commits before this date (YYYY-MM-DD)")
@click.option("--author", help="Filter by author")
@click.option("-o", "--output", type=click.Path(), help="Output file path")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
def export(source, since, until, author, output, verbose):
    """Save commits as JSON for later offline analysis."""
    try:
        _, commits = collect_commits(
            source, since=parse_date(since), until=parse_date(until), author=author, verbose=verbose
        )
        text = json.dumps([commit.to_dict() for commit in commits], indent=2)

        if output:
            Path(output).write_text(text)
            console.print(f"[green]Exported {len(commits)} commits to {output}[/green]")
        else:
            click.echo(text)

    except (GitRepositoryError, AnalysisError) as e:
        fail(e)
    except Exception as e:
        fail(e, verbose)
