"""
Create the user and session tables.
Run from project root: python -m authstore   (connection and tables from MYSQL_* / AUTH_* in .env)
"""
import logging
import sys

import pymysql

from authstore.core.logging_config import setup_logging
from authstore.core.settings import get_settings
from authstore.db import get_connection, init_storage

logger = logging.getLogger("authstore.cli")


def main() -> int:
    setup_logging()
    settings = get_settings()
    try:
        with get_connection(settings) as conn:
            init_storage(conn, settings)
    except pymysql.MySQLError as e:
        logger.warning("MySQL init failed: %s. Set MYSQL_* in .env and ensure MySQL is running.", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
