"""Schema migration helpers for the category tables.

Used from alembic revisions::

    CategoriesMigration(op).create_categories_table(
        lambda t: t.column("name", sa.String(255), nullable=False)
    )
"""

from collections.abc import Callable
from typing import Any

import sqlalchemy as sa
from alembic.operations import Operations

from catlingo.hooks import dispatch
from catlingo.i18n.schema import add_translatable_index, translatable_columns


class TableDefinition:
    """Collects the columns of a table being created.

    An integer ``id`` primary key is always added first.
    """

    def __init__(self, name: str):
        self.name = name
        self.columns: list[sa.Column] = [sa.Column("id", sa.Integer(), primary_key=True)]
        self.constraints: list[sa.Constraint] = []

    def column(self, name: str, type_: Any, *args: Any, **kwargs: Any) -> sa.Column:  # noqa: ANN401
        column = sa.Column(name, type_, *args, **kwargs)
        self.columns.append(column)
        return column

    def references(self, table: str, *, column: str | None = None, **kwargs: Any) -> sa.Column:
        """Add an integer foreign key column to ``table``."""
        singular = f"{table[:-3]}y" if table.endswith("ies") else table.removesuffix("s")
        name = column or f"{singular}_id"
        return self.column(name, sa.Integer(), sa.ForeignKey(f"{table}.id"), **kwargs)

    def timestamps(self) -> None:
        for name in ("created_at", "updated_at"):
            self.column(
                name,
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            )

    def constraint(self, constraint: sa.Constraint) -> None:
        self.constraints.append(constraint)


TableDefiner = Callable[[TableDefinition], None]


class CategoriesMigration:
    """Creates the category plugin tables through installed hooks."""

    def __init__(self, operations: Operations):
        self.op = operations

    def create_table(
        self,
        name: str,
        define: TableDefiner,
        *,
        translatable: bool = False,
        trait_columns: bool = False,
    ) -> TableDefinition:
        """Create ``name`` with the columns ``define`` adds.

        With ``trait_columns`` the table gets the ``locale`` and ``content_id``
        columns. ``translatable`` adds them plus the (content_id, locale)
        unique index.
        """
        table = TableDefinition(name)
        define(table)
        columns = list(table.columns)
        if translatable or trait_columns:
            existing = {column.name for column in columns}
            columns.extend(c for c in translatable_columns() if c.name not in existing)

        self.op.create_table(name, *columns, *table.constraints)
        if translatable:
            add_translatable_index(self.op, name)
        return table

    def create_categories_table(self, define: TableDefiner) -> TableDefinition:
        return dispatch(self, "uhook_create_categories_table", define)

    def create_category_relations_table(self, define: TableDefiner) -> TableDefinition:
        return dispatch(self, "uhook_create_category_relations_table", define)

    # Host defaults

    def uhook_create_categories_table(self, define: TableDefiner) -> TableDefinition:
        # Category always maps the trait columns; only the index is left out
        return self.create_table("categories", define, trait_columns=True)

    def uhook_create_category_relations_table(self, define: TableDefiner) -> TableDefinition:
        return self.create_table("category_relations", define)
