"""
MySQL connection from settings and storage initialisation (creates tables if not exist).
"""
import logging
from contextlib import contextmanager
from typing import Optional

import pymysql

from authstore.core.settings import Settings, get_settings
from authstore.mysql.storage import MySQLStorage

logger = logging.getLogger(__name__)


@contextmanager
def get_connection(settings: Optional[Settings] = None):
    """Open a pymysql connection from settings; closed on exit. Storage commits per statement."""
    settings = settings or get_settings()
    conn = pymysql.connect(**settings.connect_kwargs())
    try:
        yield conn
    finally:
        conn.close()


def init_storage(conn, settings: Optional[Settings] = None) -> MySQLStorage:
    """Build the combined storage for ``conn`` with the configured tables and create them."""
    settings = settings or get_settings()
    storage = MySQLStorage(conn, settings.replace_mapping())
    storage.init()
    logger.info(
        "Storage ready (users=%s, sessions=%s, unique email=%s)",
        settings.users_table,
        settings.sessions_table,
        settings.email_unique,
    )
    return storage
