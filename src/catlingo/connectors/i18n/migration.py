"""Translatable table creation for ``CategoriesMigration``."""

from catlingo.categories.migration import CategoriesMigration, TableDefiner, TableDefinition


def uhook_create_categories_table(
    migration: CategoriesMigration, define: TableDefiner
) -> TableDefinition:
    return migration.create_table("categories", define, translatable=True)


def uhook_create_category_relations_table(
    migration: CategoriesMigration, define: TableDefiner
) -> TableDefinition:
    return migration.create_table("category_relations", define)
