#!/usr/bin/env python3
"""
Hackathon Tracker CLI - command-line interface for the reconciled record store.

This CLI provides:
- Submitting extracted hackathon candidates for reconciliation
- Refreshing lifecycle statuses against today's date
- Listing records grouped by status
- Store statistics and database initialization
"""

import json
import sys
from typing import Any, List, Optional

import click
from tabulate import tabulate

from config import BANNER_WIDTH, SECTION_SEPARATOR_WIDTH, MAX_DISPLAY_NAME, MAX_DISPLAY_ORGANIZER
from config_loader import ConfigurationError, load_settings
from database_utils import DatabaseManager
from hackathon_models import HACKATHON_STATUSES, HackathonCandidate
from hackathon_repository import HackathonStoreError, InMemoryHackathonStore, get_hackathon_store
from hackathon_service import HackathonService, reference_date
from lifecycle import UnknownStatusError, group_by_status


def print_banner(text: str, width: int = BANNER_WIDTH):
    """Print a formatted banner."""
    click.echo("=" * width)
    click.echo(text.center(width))
    click.echo("=" * width)


def print_section(text: str, width: int = SECTION_SEPARATOR_WIDTH):
    """Print a section separator."""
    click.echo(f"\n{'-' * width}")
    click.echo(text)
    click.echo(f"{'-' * width}")


def _truncate(value: Optional[str], length: int) -> str:
    value = value or ''
    return value if len(value) <= length else value[:length - 3] + '...'


def _load_candidates(path: str) -> List[HackathonCandidate]:
    """Read one candidate object or a list of them from a JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        data: Any = json.load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list) or not all(isinstance(item, dict) for item in data):
        raise click.BadParameter("expected a JSON object or a list of objects", param_hint='FILE')

    return [HackathonCandidate.from_dict(item) for item in data]


@click.group()
@click.version_option(version='1.0.0')
@click.option('--store', 'backend', type=click.Choice(['json', 'sql']), default=None,
              help='Storage backend (defaults to HACKATHON_STORE_BACKEND)')
@click.option('--data-dir', type=click.Path(file_okay=False), default=None,
              help='Data directory for the json backend')
@click.option('--database-url', default=None, help='Database URL for the sql backend')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False), default=None,
              help='YAML file with reconciliation settings')
@click.pass_context
def cli(ctx, backend: Optional[str], data_dir: Optional[str], database_url: Optional[str],
        config_path: Optional[str]):
    """Hackathon Tracker CLI - reconcile, classify and inspect hackathon records."""
    ctx.ensure_object(dict)
    try:
        settings = load_settings(config_path)
        store = get_hackathon_store(backend, data_dir, database_url)
    except (ConfigurationError, HackathonStoreError, ValueError) as e:
        raise click.ClickException(str(e))

    ctx.obj['store'] = store
    ctx.obj['service'] = HackathonService(store, settings)
    ctx.obj['database_url'] = database_url


@cli.command()
@click.argument('candidate_file', type=click.Path(exists=True, dir_okay=False))
@click.option('--source', default='manual-submission', help='Source identifier recorded on new records')
@click.option('--as-of', default=None, help='Reference date (YYYY-MM-DD), defaults to today')
@click.option('--dry-run', is_flag=True, help='Show what would happen without saving')
@click.pass_context
def submit(ctx, candidate_file: str, source: str, as_of: Optional[str], dry_run: bool):
    """Reconcile extracted hackathon candidates from a JSON file."""
    service: HackathonService = ctx.obj['service']
    candidates = _load_candidates(candidate_file)
    try:
        as_of = reference_date(as_of)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint='--as-of')

    print_banner(f"Submitting {len(candidates)} candidate(s) from {source}")

    if dry_run:
        click.echo("\nDRY RUN - No data will be saved")
        # Later candidates must see the records earlier ones would create
        preview = HackathonService(InMemoryHackathonStore(service.store.load_all()), service.settings)
        for candidate in candidates:
            result = preview.process_candidate(candidate, source, as_of)
            if result.action == 'merged':
                click.echo(f"  merge   {candidate.name} -> {result.hackathon.id} (similarity {result.similarity:.2f})")
            elif result.action == 'created':
                click.echo(f"  create  {candidate.name} as {result.hackathon.id}")
            else:
                click.echo(f"  skip    {candidate.name} ({result.reason})")
        return

    counts = service.process_batch(((c, source) for c in candidates), as_of)

    click.echo(f"\nReconciliation Results:")
    click.echo(f"  - Created: {counts['created']}")
    click.echo(f"  - Merged: {counts['merged']}")
    click.echo(f"  - Skipped: {counts['skipped']}")
    if counts['errors'] > 0:
        click.echo(f"  - Errors: {counts['errors']}")
        sys.exit(1)


@cli.command('update-status')
@click.option('--as-of', default=None, help='Reference date (YYYY-MM-DD), defaults to today')
@click.pass_context
def update_status(ctx, as_of: Optional[str]):
    """Recompute lifecycle status for every stored hackathon."""
    service: HackathonService = ctx.obj['service']
    try:
        result = service.update_statuses(as_of)
    except ValueError as e:
        raise click.ClickException(str(e))

    click.echo(f"Lifecycle update complete. {result['updated']}/{result['checked']} hackathons updated.")


@cli.command('list')
@click.option('--status', type=click.Choice(['all'] + list(HACKATHON_STATUSES)), default='all',
              help='Only show one status')
@click.option('--format', 'output_format', type=click.Choice(['table', 'json']), default='table',
              help='Output format')
@click.pass_context
def list_hackathons(ctx, status: str, output_format: str):
    """List hackathons grouped by lifecycle status."""
    store = ctx.obj['store']
    try:
        groups = group_by_status(store.load_all())
    except UnknownStatusError as e:
        raise click.ClickException(str(e))

    if status != 'all':
        groups = {status: groups[status]}

    if output_format == 'json':
        click.echo(json.dumps(
            {key: [h.to_dict() for h in hackathons] for key, hackathons in groups.items()},
            indent=2
        ))
        return

    if not any(groups.values()):
        click.echo("No hackathons found matching criteria.")
        return

    headers = ['Name', 'Organizer', 'Submission', 'Format', 'Source', 'Confidence']
    for group_status, hackathons in groups.items():
        if not hackathons:
            continue
        print_section(f"{group_status} ({len(hackathons)})")
        rows = [
            [
                _truncate(h.name, MAX_DISPLAY_NAME),
                _truncate(h.organizer, MAX_DISPLAY_ORGANIZER),
                h.submission_deadline or 'TBD',
                h.format or '-',
                h.source,
                f"{h.confidence:.2f}",
            ]
            for h in hackathons
        ]
        click.echo(tabulate(rows, headers=headers, tablefmt='grid'))


@cli.command()
@click.pass_context
def stats(ctx):
    """Show store statistics."""
    try:
        stats = ctx.obj['service'].get_statistics()
    except UnknownStatusError as e:
        raise click.ClickException(str(e))

    print_banner("Hackathon Tracker Statistics")

    print_section("Hackathon Counts")
    click.echo(f"Total Hackathons: {stats['total_hackathons']}")
    for status, count in stats['by_status'].items():
        click.echo(f"  - {status}: {count}")

    if stats['by_source']:
        print_section("Sources")
        for source, count in sorted(stats['by_source'].items(), key=lambda x: x[1], reverse=True):
            click.echo(f"  - {source}: {count}")

    print_section("Quality Metrics")
    click.echo(f"Average Confidence: {stats['average_confidence']:.2f}")


@cli.command('init-db')
@click.option('--drop', is_flag=True, help='Drop existing tables first')
@click.pass_context
def init_db(ctx, drop: bool):
    """Initialize the database tables for the sql backend."""
    print_banner("Database Initialization")

    manager = DatabaseManager(ctx.obj['database_url'])

    if drop:
        click.echo("WARNING: This will drop all existing tables!")
        if not click.confirm("Are you sure you want to continue?"):
            click.echo("Aborted.")
            return
        manager.drop_tables()

    try:
        manager.create_tables()
    except Exception as e:
        raise click.ClickException(f"Error initializing database: {e}")

    click.echo("Database tables created successfully!")
    click.echo(f"  - Hackathons: {manager.get_database_stats()['hackathons_count']}")


if __name__ == '__main__':
    cli()
