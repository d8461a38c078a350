"""Command-line interface for the crossword store"""

import asyncio
import json
import logging
import sys

import click
import colorlog

from .db import CrosswordRepository, init_pool, check_connection, close_all_connections
from .errors import CrosswordNotFound
from .models import Crossword


def setup_logging(verbose: bool = False):
    """Setup colored logging, tagged with the emitting logger"""
    log_level = logging.DEBUG if verbose else logging.INFO

    # Create colored formatter
    formatter = colorlog.ColoredFormatter(
        '%(log_color)s%(levelname)-8s%(reset)s %(purple)s%(name)s%(reset)s %(blue)s%(message)s',
        datefmt=None,
        reset=True,
        log_colors={
            'DEBUG': 'cyan',
            'INFO': 'green',
            'WARNING': 'yellow',
            'ERROR': 'red',
            'CRITICAL': 'red,bg_white',
        }
    )

    # Setup handler
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Setup root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(handler)


def run_with_repository(operation):
    """Run a repository coroutine against the process-wide pool"""
    repository = CrosswordRepository(init_pool())
    try:
        return asyncio.run(operation(repository))
    finally:
        repository.close()
        close_all_connections()


@click.group()
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
def cli(verbose):
    """Crossword Store - puzzle storage tools

    Lists, shows and imports crosswords kept in the crossword database.
    """
    setup_logging(verbose)


@cli.command()
def check_db():
    """Check database connection"""
    try:
        pool = init_pool()
        if check_connection(pool):
            logging.info("✓ Database connection successful")
        else:
            logging.error("✗ Database connection failed")
            sys.exit(1)
    except Exception as e:
        logging.error(f"✗ Database connection failed: {e}")
        sys.exit(1)
    finally:
        close_all_connections()


@cli.command()
@click.argument('series')
def ids(series):
    """Show the ids of all crosswords in a series"""
    try:
        crossword_ids = run_with_repository(lambda repo: repo.get_ids_for_series(series))
    except Exception as e:
        logging.error(f"Failed to get crossword ids: {e}")
        sys.exit(1)

    if not crossword_ids:
        logging.warning(f"No crosswords found in series {series}")
    for crossword_id in crossword_ids:
        click.echo(crossword_id)


@cli.command('list')
@click.argument('series')
def list_crosswords(series):
    """Show id and date of all crosswords in a series"""
    try:
        metadata = run_with_repository(lambda repo: repo.get_metadata_for_series(series))
    except Exception as e:
        logging.error(f"Failed to get crossword metadata: {e}")
        sys.exit(1)

    if not metadata:
        logging.warning(f"No crosswords found in series {series}")
    for item in metadata:
        click.echo(f"{item.id}  {item.date.isoformat()}")


@cli.command()
@click.argument('series')
@click.argument('crossword_id')
def show(series, crossword_id):
    """Print a stored crossword as JSON"""
    try:
        crossword = run_with_repository(
            lambda repo: repo.get_by_series_and_id(crossword_id, series)
        )
    except CrosswordNotFound:
        logging.error(f"Crossword {crossword_id} not found in series {series}")
        sys.exit(1)
    except Exception as e:
        logging.error(f"Failed to get crossword: {e}")
        sys.exit(1)

    click.echo(json.dumps(crossword.to_dict(), indent=2))


@cli.command('import')
@click.argument('source', type=click.File('r'))
def import_crosswords(source):
    """Store crosswords from a JSON file

    SOURCE holds a JSON array of objects with id, series, date and
    crossword_json keys.
    """
    try:
        data = json.load(source)
        if not isinstance(data, list):
            raise ValueError("expected a JSON array of crosswords")
        crosswords = [Crossword.from_dict(item) for item in data]
    except ValueError as e:
        logging.error(f"Invalid crossword file: {e}")
        sys.exit(1)

    try:
        count = run_with_repository(lambda repo: repo.store_crosswords(crosswords))
    except Exception as e:
        logging.error(f"✗ Failed to store crosswords: {e}")
        sys.exit(1)

    logging.info(f"✓ Stored {count} crosswords")


if __name__ == '__main__':
    cli()
