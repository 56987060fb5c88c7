# plant_care/commands.py
"""
Flask CLI commands.

    flask --app run migrate-data --source json_file --target firestore
    flask --app run tasks-today
"""
import logging
from typing import Tuple

import click
from flask import Flask, current_app

from plant_care.core.errors import PlantCareError
from plant_care.repositories import BACKENDS, create_store
from plant_care.repositories.base import CareDataStore


def migrate_data(source: CareDataStore, target: CareDataStore, dry_run: bool = False) -> Tuple[int, int]:
    """
    Copies every plant and action from source to target.
    Plants are upserted by id; actions already present in the target (same id)
    are skipped, so the migration can be re-run safely.

    Returns:
        (number of plants copied, number of actions copied)
    """
    plants = source.plants.list()
    actions = source.actions.list()
    existing_action_ids = {a.id for a in target.actions.list()}
    new_actions = [a for a in actions if a.id not in existing_action_ids]

    if dry_run:
        return len(plants), len(new_actions)

    for plant in plants:
        target.plants.upsert(plant)
    for action in new_actions:
        target.actions.add(action)

    logging.info(f"Migrated {len(plants)} plants and {len(new_actions)} actions "
                 f"from {source.backend_name} to {target.backend_name}")
    return len(plants), len(new_actions)


def register_commands(app: Flask) -> None:

    @app.cli.command('migrate-data')
    @click.option('--source', type=click.Choice(BACKENDS), default='json_file', show_default=True,
                  help='Backend to read from.')
    @click.option('--target', type=click.Choice(BACKENDS), required=True, help='Backend to write to.')
    @click.option('--dry-run', is_flag=True, help='Only report what would be copied.')
    def migrate_data_command(source, target, dry_run):
        """Copy plants and care actions from one storage backend to another."""
        if source == target:
            raise click.UsageError("--source and --target must differ")
        try:
            source_store = create_store(current_app.config, backend=source)
            target_store = create_store(current_app.config, backend=target)
            plant_count, action_count = migrate_data(source_store, target_store, dry_run=dry_run)
        except PlantCareError as e:
            raise click.ClickException(e.message)

        prefix = "Would copy" if dry_run else "Copied"
        click.echo(f"{prefix} {plant_count} plants and {action_count} actions from {source} to {target}.")

    @app.cli.command('tasks-today')
    def tasks_today_command():
        """Print today's due and overdue care tasks."""
        try:
            result = current_app.services['tasks'].get_today_tasks()
        except PlantCareError as e:
            raise click.ClickException(e.message)

        if not result['count']:
            click.echo(f"No care tasks for {result['date']}.")
            return

        click.echo(f"{result['count']} care task(s) for {result['date']}:")
        for task in result['due']:
            click.echo(f"  [due]     {task['plantName']}: {task['type']}")
        for task in result['overdue']:
            click.echo(f"  [overdue] {task['plantName']}: {task['type']} (since {task['date']})")
