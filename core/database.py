# core/database.py

import logging

from django.core.exceptions import ImproperlyConfigured
from django.db import DatabaseError, connections

logger = logging.getLogger(__name__)


def ensure_database(alias='default'):
    """
    Opens a connection to the store at process start. A store that cannot be
    reached is fatal: ImproperlyConfigured stops the WSGI worker from booting.
    """
    connection = connections[alias]
    try:
        connection.ensure_connection()
    except DatabaseError as exc:
        logger.critical("Could not connect to database '%s': %s", alias, exc)
        raise ImproperlyConfigured(f"Database '{alias}' is unavailable: {exc}") from exc
    logger.info("Database '%s' connection established (%s)", alias, connection.vendor)


def close_database():
    """Drains every open connection of this process, used at shutdown."""
    connections.close_all()
    logger.info("Database connections closed")


def server_time():
    """Round-trips the store and returns its clock."""
    with connections['default'].cursor() as cursor:
        cursor.execute('SELECT CURRENT_TIMESTAMP')
        return cursor.fetchone()[0]
