"""Unified CLI for the Summons Tracker.

This module provides a single entry point for key worklist operations:
- Listing worklist views and their aliases
- Showing a classified, sorted worklist from a snapshot
- Dashboard counts
- Calendar agenda by appearance date
- Validating (and optionally saving) a lifecycle transition
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import date, timedelta
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cli import __version__

try:
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")
except Exception:
    pass

# Initialize Typer app and console
app = typer.Typer(
    name="summons-tracker",
    help="Summons lifecycle tracking and worklists",
    add_completion=False,
)
# Use force_terminal=False to avoid legacy Windows rendering issues with Unicode
console = Console(legacy_windows=False)


@app.callback()
def main_callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _parse_day(value: str | None) -> date | None:
    return date.fromisoformat(value) if value else None


@app.command()
def views() -> None:
    """List canonical worklist views and accepted aliases."""
    from summons_tracker.views.classifier import ViewKind, aliases_for

    table = Table(title="Worklist views")
    table.add_column("View", style="bold", no_wrap=True)
    table.add_column("Aliases")
    for kind in ViewKind:
        table.add_row(kind.value, ", ".join(aliases_for(kind)))
    console.print(table)


@app.command()
def show(
    config: Path = typer.Option(  # noqa: B008
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to config (.toml or .json)",
    ),
    snapshot: str = typer.Option(
        "data/summons.json", "--snapshot", "-s", help="Summons snapshot (.json or .csv)"
    ),
    view: str = typer.Option("All Summons", "--view", "-w", help="Worklist view or alias"),
    today: str = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
    limit: int = typer.Option(50, "--limit", "-n", help="Maximum rows to display"),
    search: str = typer.Option(None, "--search", help="Filter by name, case or role"),
) -> None:
    """Show a worklist: classified, sorted and optionally searched."""
    try:
        from summons_tracker.core.dates import resolve_today
        from summons_tracker.core.summons import derive_response_label
        from summons_tracker.data.loader import load_snapshot
        from summons_tracker.views.classifier import classify
        from summons_tracker.views.search import search_summons
        from summons_tracker.views.sorter import sort_summons

        from cli.config import TrackerConfig, load_tracker_config

        # Resolve parameters: config -> flags
        if config:
            cfg = load_tracker_config(config)
        else:
            cfg = TrackerConfig(
                snapshot=Path(snapshot), today=_parse_day(today), view=view, limit=limit
            )

        day = resolve_today(cfg.today)
        records = load_snapshot(cfg.snapshot)
        if search:
            records = search_summons(records, search)
        rows = sort_summons(cfg.view, classify(cfg.view, records, today=day))

        table = Table(title=f"{cfg.view} ({len(rows)}) as of {day.isoformat()}")
        for column in ("ID", "Person", "Case", "Status", "Response", "Appearance"):
            table.add_column(column)
        for record in rows[: cfg.limit]:
            effective = record.effective_date
            table.add_row(
                record.id,
                record.person_name,
                record.case_id,
                record.status.value,
                derive_response_label(record, day).value,
                effective.isoformat() if effective else "-",
            )
        console.print(table)
        if len(rows) > cfg.limit:
            console.print(f"[dim]... {len(rows) - cfg.limit} more[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def stats(
    snapshot: str = typer.Option(
        "data/summons.json", "--snapshot", "-s", help="Summons snapshot (.json or .csv)"
    ),
    today: str = typer.Option(None, "--today", help="Reference day (YYYY-MM-DD)"),
) -> None:
    """Show dashboard counts for a snapshot."""
    try:
        from summons_tracker.data.loader import load_cases, load_snapshot
        from summons_tracker.views.stats import STAT_VIEWS, compute_stats

        path = Path(snapshot)
        records = load_snapshot(path)
        result = compute_stats(records, today=_parse_day(today))

        table = Table(title="Summons counts")
        table.add_column("View", style="bold")
        table.add_column("Count", justify="right")
        for name, kind in STAT_VIEWS.items():
            table.add_row(kind.value, str(getattr(result, name)))
        console.print(table)

        cases = [case.with_counts(records) for case in load_cases(path)]
        if cases:
            case_table = Table(title="Cases")
            for column in ("Case", "Status", "Total", "Active"):
                case_table.add_column(column)
            for case in cases:
                case_table.add_row(
                    case.name or case.id, case.status,
                    str(case.total_summons), str(case.active_summons),
                )
            console.print(case_table)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def agenda(
    snapshot: str = typer.Option(
        "data/summons.json", "--snapshot", "-s", help="Summons snapshot (.json or .csv)"
    ),
    today: str = typer.Option(None, "--today", help="First day (YYYY-MM-DD)"),
    days: int = typer.Option(7, "--days", "-d", help="Number of days after the first day"),
) -> None:
    """Show appearances grouped by effective date."""
    try:
        from summons_tracker.core.dates import resolve_today
        from summons_tracker.data.loader import load_snapshot
        from summons_tracker.views.agenda import group_by_effective_date

        start = resolve_today(_parse_day(today))
        end = start + timedelta(days=days)
        grouped = group_by_effective_date(load_snapshot(Path(snapshot)), start, end)

        console.print(f"[bold blue]Agenda {start} -> {end}[/bold blue]")
        if not grouped:
            console.print("  No appearances scheduled")
        for day, records in grouped.items():
            console.print(f"\n[bold]{day.strftime('%a %d %b %Y')}[/bold]")
            for record in records:
                console.print(f"  - {record.person_name} ({record.case_id}) [{record.status.value}]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(code=1)


@app.command()
def transition(
    config: Path = typer.Option(  # noqa: B008
        None,
        "--config",
        exists=True,
        dir_okay=False,
        readable=True,
        help="Path to config (.toml or .json)",
    ),
    snapshot: str = typer.Option(
        "data/summons.json", "--snapshot", "-s", help="Summons snapshot (.json or .csv)"
    ),
    summons_id: str = typer.Option(None, "--id", help="Summons to change"),
    patch: str = typer.Option("{}", "--patch", "-p", help="JSON object of field updates"),
    target: str = typer.Option(None, "--target", "-t", help="Status to reach"),
    save: bool = typer.Option(False, "--save", help="Write the snapshot back on success"),
) -> None:
    """Validate a lifecycle change against a summons, optionally saving it."""
    ok = False
    try:
        from summons_tracker.control.editor import SummonsEditor
        from summons_tracker.data.loader import load_snapshot, save_snapshot
        from summons_tracker.data.store import InMemorySummonsStore

        from cli.config import TransitionConfig, load_transition_config

        if config:
            tcfg = load_transition_config(config)
        else:
            tcfg = TransitionConfig(
                snapshot=Path(snapshot),
                summons_id=summons_id or "",
                patch=json.loads(patch),
                target=target,
                save=save,
            )

        store = InMemorySummonsStore(load_snapshot(tcfg.snapshot))
        editor = SummonsEditor(store)
        result = editor.apply_patch(tcfg.summons_id, tcfg.patch, tcfg.target)

        if result.ok:
            ok = True
            console.print(
                f"[bold green]Valid:[/bold green] {result.from_status.value} -> {result.to_status.value}"
            )
            for entry in result.activity:
                console.print(f"  {entry.description}")
            if tcfg.save and result.changes:
                save_snapshot(store.fetch_all(), tcfg.snapshot)
                console.print(f"Saved to: {tcfg.snapshot}")
        else:
            error = result.error
            console.print(f"[bold red]{type(error).__name__}:[/bold red] {error}")
            fields = getattr(error, "fields", ())
            if fields:
                console.print(f"  Fields: {', '.join(fields)}")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {e}")

    if not ok:
        raise typer.Exit(code=1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Summons Tracker CLI v{__version__}")
    console.print("Summons lifecycle tracking and worklists")


def main() -> None:
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
