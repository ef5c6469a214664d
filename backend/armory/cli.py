# Overview: Flask CLI command groups for seeding, reporting and schema setup.

# backend/armory/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to wsgi.py (PowerShell: $env:FLASK_APP="wsgi.py").
# - Use: python -m flask <group> <command> [options]
#
# The default "memory" record store lives only as long as the process, so
# report/list accept --with-demo to seed before answering. Set
# RECORD_STORE_BACKEND=sql to keep movements between invocations.
#
# Ledger:
# - python -m flask ledger seed-demo
#   Load the demo movements (idempotent: skipped when the store holds records).
# - python -m flask ledger report --user admin --date 2024-06-05 [--base "Base Alpha"] [--type Weapons]
#   Print the balance report for a user as JSON.
# - python -m flask ledger list transfers --user commander1 [--date ...] [--base ...] [--type ...]
#   Print the records of one kind visible to a user.
#
# System:
# - python -m flask system init-db
#   Create the SQL record-store tables (sql backend).

import json

import click
from flask import current_app
from flask.cli import with_appcontext

from .extensions import db, get_record_store
from .records import ReportFilter
from .services import balance_service, movement_service, seed_service
from .services.identity_service import resolve_viewer
from .validation import ValidationError


LIST_KINDS = {
    "purchases": "purchase",
    "transfers": "transfer",
    "assignments": "assignment",
}


def _resolve(username, date_cutoff, base, equipment_type):
    try:
        viewer = resolve_viewer(username, current_app.config["VIEWERS"])
        report_filter = ReportFilter.from_mapping({
            "date": date_cutoff,
            "base": base,
            "equipment_type": equipment_type,
        })
    except ValidationError as e:
        raise click.ClickException(e.message)
    return viewer, report_filter


@click.group('ledger')
def ledger_group():
    """Movement ledger commands."""


@ledger_group.command('seed-demo')
@with_appcontext
def seed_demo():
    """Load the demo purchases, transfer and assignments."""
    counts = seed_service.seed_demo_movements(get_record_store())
    click.echo(
        f"Record store now holds {counts['purchase']} purchases, "
        f"{counts['transfer']} transfers, {counts['assignment']} assignments"
    )


@ledger_group.command('report')
@click.option('--user', 'username', required=True, help='Username from the viewer directory')
@click.option('--date', 'date_cutoff', default=None, help='Cutoff date YYYY-MM-DD')
@click.option('--base', default=None, help='Restrict to one base')
@click.option('--type', 'equipment_type', default=None, help='Restrict to one equipment type')
@click.option('--with-demo', is_flag=True, help='Seed the demo movements first')
@with_appcontext
def report_cli(username, date_cutoff, base, equipment_type, with_demo):
    """Print the balance report for a user."""
    viewer, report_filter = _resolve(username, date_cutoff, base, equipment_type)
    store = get_record_store()
    if with_demo:
        seed_service.seed_demo_movements(store)

    report = balance_service.compute_report(store, viewer, report_filter)
    click.echo(json.dumps(report.to_dict(), indent=2))


@ledger_group.command('list')
@click.argument('kind', type=click.Choice(sorted(LIST_KINDS)))
@click.option('--user', 'username', required=True, help='Username from the viewer directory')
@click.option('--date', 'date_cutoff', default=None, help='Exact date YYYY-MM-DD')
@click.option('--base', default=None)
@click.option('--type', 'equipment_type', default=None)
@click.option('--with-demo', is_flag=True, help='Seed the demo movements first')
@with_appcontext
def list_cli(kind, username, date_cutoff, base, equipment_type, with_demo):
    """List the records of one kind visible to a user."""
    viewer, report_filter = _resolve(username, date_cutoff, base, equipment_type)
    store = get_record_store()
    if with_demo:
        seed_service.seed_demo_movements(store)

    try:
        records = movement_service.list_records(store, viewer, LIST_KINDS[kind], report_filter)
    except ValidationError as e:
        raise click.ClickException(e.message)

    if not records:
        click.echo(f"No {kind} found.")
        return
    for record in records:
        click.echo(json.dumps(record.to_dict()))


@click.group('system')
def system_group():
    """System bootstrap commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create the SQL record-store tables."""
    db.create_all()
    click.echo("Record store tables created")


def register_commands(app):
    app.cli.add_command(ledger_group)
    app.cli.add_command(system_group)
