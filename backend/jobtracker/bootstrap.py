from __future__ import annotations

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection, Engine

from jobtracker.database import Base
from jobtracker.models import JobApplication, User  # noqa: F401


logger = logging.getLogger(__name__)


def _column_exists(conn: Connection, table_name: str, column_name: str) -> bool:
    columns = inspect(conn).get_columns(table_name)
    return any(column["name"] == column_name for column in columns)


def _add_column_if_missing(conn: Connection, table_name: str, column_name: str, column_sql: str) -> None:
    if _column_exists(conn, table_name, column_name):
        return
    conn.execute(text(f"ALTER TABLE {table_name} ADD COLUMN {column_sql}"))
    logger.info("Added missing column %s.%s", table_name, column_name)


def run_runtime_migrations(engine: Engine) -> None:
    """Bring an existing database up to the current schema.

    ``create_all`` only creates missing tables, so a ``job_applications`` table
    from before records were owned by users gains its ``user_id`` column and
    indexes here.
    """
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn)
        _add_column_if_missing(
            conn,
            JobApplication.__tablename__,
            "user_id",
            "user_id INTEGER REFERENCES users(id) ON DELETE CASCADE",
        )
        for index in JobApplication.__table__.indexes:
            index.create(bind=conn, checkfirst=True)
    logger.info("Database schema ready")
