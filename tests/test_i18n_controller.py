"""Tests for the locale-aware admin controller hooks."""

from typing import Any

import pytest
from sqlalchemy import select
from sqlalchemy.orm import Session

from catlingo.admin.controller import PROCEED, CategoriesController, Redirect
from catlingo.connectors import I18nConnector
from catlingo.db.models import Category, CategorySet
from catlingo.i18n import ANY_LOCALE
from conftest import add_category


@pytest.fixture
def catalog(db_session: Session, category_set: CategorySet) -> dict[str, Category]:
    red_en = add_category(db_session, category_set, "Red", "en", description="warm")
    records = {
        "red_en": red_en,
        "red_es": add_category(db_session, category_set, "Rojo", "es", content_id=red_en.content_id),
        "blue_es": add_category(db_session, category_set, "Azul", "es"),
        "green_any": add_category(db_session, category_set, "Green", ANY_LOCALE),
    }
    db_session.commit()
    return records


def make_controller(
    session: Session,
    category_set: CategorySet,
    locale: str = "en",
    **params: Any,
) -> CategoriesController:
    return CategoriesController(session, category_set, params=params, current_locale=locale)


# =============================================================================
# index
# =============================================================================


def test_index_one_variant_per_category(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    categories = make_controller(db_session, category_set, "en").index()

    assert categories == [catalog["blue_es"], catalog["green_any"], catalog["red_en"]]


def test_index_in_other_locale(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    categories = make_controller(db_session, category_set, "es").index()

    assert categories == [catalog["blue_es"], catalog["green_any"], catalog["red_es"]]


def test_index_locale_filter(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "es", filter_locale="es")

    assert controller.index() == [catalog["blue_es"], catalog["red_es"]]


def test_index_text_filter_and_pagination(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "es", filter_text="r")

    assert controller.index() == [catalog["green_any"], catalog["red_es"]]
    assert controller.index(limit=1, offset=1) == [catalog["red_es"]]


# =============================================================================
# new / create
# =============================================================================


def test_new_translation_draft(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(
        db_session, category_set, "ca", **{"from": str(catalog["red_en"].content_id)}
    )

    draft = controller.new()

    assert draft.id is None
    assert draft.locale == "ca"
    assert draft.content_id == catalog["red_en"].content_id
    assert draft.name == "Red"
    assert draft.description == "warm"
    assert draft.category_set_id == category_set.id


def test_new_without_source(
    db_session: Session, category_set: CategorySet, i18n_connector: I18nConnector
) -> None:
    draft = make_controller(db_session, category_set, "ca").new()

    assert draft.id is None
    assert draft.name is None
    assert draft.content_id is None
    assert draft.category_set_id == category_set.id


def test_create_stamps_current_locale(
    db_session: Session, category_set: CategorySet, i18n_connector: I18nConnector
) -> None:
    controller = make_controller(
        db_session,
        category_set,
        "ca",
        category={"name": "Groc", "locale": "en", "description": "sunny"},
    )

    category = controller.create()

    assert category.id is not None
    assert category.locale == "ca"
    assert category.description == "sunny"
    assert category.content_id is not None


def test_create_translation_keeps_content_id(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    content_id = catalog["red_en"].content_id
    controller = make_controller(
        db_session, category_set, "ca", category={"name": "Vermell", "content_id": content_id}
    )

    category = controller.create()

    assert category.content_id == content_id
    assert catalog["red_en"].in_locale("ca") is category


# =============================================================================
# show / edit guards
# =============================================================================


def test_show_in_current_locale_proceeds(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "en")

    assert controller.show(catalog["red_en"]) is PROCEED
    assert controller.edit(catalog["red_en"]) is PROCEED


def test_any_locale_variant_proceeds(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "ca")

    assert controller.show(catalog["green_any"]) is PROCEED


def test_other_locale_redirects_to_listing(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "en")

    assert controller.show(catalog["red_es"]) == Redirect("/category_sets/tags/categories")
    assert controller.edit(catalog["blue_es"]) == Redirect("/category_sets/tags/categories")


# =============================================================================
# destroy
# =============================================================================


def test_destroy_single_variant(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "es")

    assert controller.destroy(catalog["red_es"]) is True

    remaining = db_session.scalars(
        select(Category).where(Category.content_id == catalog["red_en"].content_id)
    ).all()
    assert remaining == [catalog["red_en"]]


def test_destroy_content(
    db_session: Session,
    category_set: CategorySet,
    catalog: dict[str, Category],
    i18n_connector: I18nConnector,
) -> None:
    controller = make_controller(db_session, category_set, "es", destroy_content=True)

    assert controller.destroy(catalog["red_es"]) is True

    remaining = db_session.scalars(
        select(Category).where(Category.content_id == catalog["red_en"].content_id)
    ).all()
    assert remaining == []
