"""Translatable table trait for schema migrations."""

import logging

import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

TRANSLATABLE_FIELDS = ("locale", "content_id")


def translatable_columns() -> list[sa.Column]:
    """Columns added to a table by the translatable trait."""
    return [
        sa.Column("locale", sa.String(16), nullable=True),
        sa.Column("content_id", sa.Integer(), nullable=True),
    ]


def translatable_index_name(table_name: str) -> str:
    return f"idx_{table_name}_content_locale"


def table_columns(bind: Engine | Connection, table_name: str) -> set[str]:
    """Column names of a live table (fresh inspector, no cached metadata)."""
    return {column["name"] for column in sa_inspect(bind).get_columns(table_name)}


def missing_translatable_fields(bind: Engine | Connection, table_name: str) -> list[str]:
    columns = table_columns(bind, table_name)
    return [field for field in TRANSLATABLE_FIELDS if field not in columns]


def add_translatable_index(operations: Operations, table_name: str) -> None:
    operations.create_index(
        translatable_index_name(table_name),
        table_name,
        ["content_id", "locale"],
        unique=True,
    )


def change_table(engine: Engine, table_name: str, *, translatable: bool = False) -> list[str]:
    """Alter an existing table in place.

    With ``translatable`` the missing trait columns and the
    (content_id, locale) unique index are added.

    Returns:
        Names of the columns added
    """
    added: list[str] = []
    if not translatable:
        return added

    with engine.begin() as connection:
        operations = Operations(MigrationContext.configure(connection))
        existing = table_columns(connection, table_name)
        for column in translatable_columns():
            if column.name not in existing:
                operations.add_column(table_name, column)
                added.append(column.name)

        # Existing rows become single-variant items of their own
        table = sa.table(table_name, sa.column("id"), sa.column("content_id"))
        offset = connection.execute(sa.select(sa.func.max(table.c.content_id))).scalar() or 0
        operations.execute(
            table.update()
            .where(table.c.content_id.is_(None))
            .values(content_id=table.c.id + offset)
        )

        indexes = {index["name"] for index in sa_inspect(connection).get_indexes(table_name)}
        if translatable_index_name(table_name) not in indexes:
            add_translatable_index(operations, table_name)

    logger.info("Added translatable columns %s to %s", added, table_name)
    return added
