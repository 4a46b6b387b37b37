import json

import click
from flask.cli import AppGroup

from sitecms.application.document_editor import load_document
from sitecms.domain.documents import DOCUMENTS
from sitecms.extensions import db
from sitecms.persistence import get_bridge

settings_cli = AppGroup("settings", help="Manage stored site settings documents.")


def _schema_or_fail(key):
    schema = DOCUMENTS.get(key)
    if schema is None:
        raise click.BadParameter(f"Unknown document '{key}'. Known: {', '.join(sorted(DOCUMENTS))}")
    return schema


@settings_cli.command("init-db")
def init_db():
    """Create the database tables."""
    db.create_all()
    click.echo("Tables created.")


@settings_cli.command("seed")
@click.option("--force", is_flag=True, help="Overwrite documents that already exist.")
def seed(force):
    """Store the initial document for every known key."""
    bridge = get_bridge()
    for key, schema in DOCUMENTS.items():
        if not force and bridge.load(key, None) is not None:
            click.echo(f"{key}: exists, skipped")
            continue
        bridge.save(key, schema.initial_document(), actor_id="cli")
        click.echo(f"{key}: seeded")


@settings_cli.command("show")
@click.argument("key")
def show(key):
    """Print a settings document as JSON."""
    schema = _schema_or_fail(key)
    document = load_document(get_bridge(), schema)
    click.echo(json.dumps(document, indent=2, ensure_ascii=False))


@settings_cli.command("reset")
@click.argument("key")
@click.confirmation_option(prompt="Replace the stored document with its initial content?")
def reset(key):
    """Replace a stored document with its initial content."""
    schema = _schema_or_fail(key)
    get_bridge().save(key, schema.initial_document(), actor_id="cli")
    click.echo(f"{key}: reset")
