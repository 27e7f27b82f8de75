"""End-to-end tests for the admin REST API with the i18n connector active."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import select
from sqlalchemy.orm import Session

from catlingo.categories.services import create_category_set
from catlingo.connectors import I18nConnector
from catlingo.db.models import Category, CategorySet, Locale
from catlingo.i18n import ANY_LOCALE
from conftest import add_category

BASE = "/category_sets/tags/categories"


@pytest.fixture
def catalog(
    db_session: Session,
    category_set: CategorySet,
    locales: list[Locale],
    i18n_connector: I18nConnector,
) -> dict[str, Category]:
    red_en = add_category(db_session, category_set, "Red", "en", description="warm")
    records = {
        "red_en": red_en,
        "red_es": add_category(db_session, category_set, "Rojo", "es", content_id=red_en.content_id),
        "blue_es": add_category(db_session, category_set, "Azul", "es"),
        "green_any": add_category(db_session, category_set, "Green", ANY_LOCALE),
    }
    db_session.commit()
    return records


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_category_sets(client: TestClient, category_set: CategorySet) -> None:
    response = client.get("/category_sets")

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["category_sets"][0]["key"] == "tags"


def test_unknown_set_is_404(client: TestClient) -> None:
    assert client.get("/category_sets/nope/categories").status_code == 404


# =============================================================================
# Index
# =============================================================================


def test_index_in_request_locale(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.get(BASE, headers={"X-Locale": "es"})

    assert response.status_code == 200
    data = response.json()
    assert [row["category"]["name"] for row in data["categories"]] == ["Azul", "Green", "Rojo"]
    assert data["count"] == 3
    assert data["filters"][0]["field"] == "filter_locale"
    assert [o["value"] for o in data["filters"][0]["options"]] == ["en", "es", "ca"]


def test_index_defaults_to_configured_locale(
    client: TestClient, catalog: dict[str, Category]
) -> None:
    data = client.get(BASE).json()

    rows = {row["category"]["name"]: row for row in data["categories"]}
    assert set(rows) == {"Azul", "Green", "Red"}
    assert [a["label"] for a in rows["Azul"]["actions"]] == ["Translate", "Remove"]
    assert [a["label"] for a in rows["Red"]["actions"]] == [
        "View",
        "Edit",
        "Remove",
        "Remove translation",
    ]


def test_index_locale_filter(client: TestClient, catalog: dict[str, Category]) -> None:
    data = client.get(BASE, params={"filter_locale": "es"}, headers={"X-Locale": "es"}).json()

    assert [row["category"]["name"] for row in data["categories"]] == ["Azul", "Rojo"]
    assert data["filters_info"][0]["value"] == "es"


# =============================================================================
# Show / edit guards
# =============================================================================


def test_show_in_current_locale(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.get(f"{BASE}/{catalog['red_es'].id}", headers={"X-Locale": "es"})

    assert response.status_code == 200
    data = response.json()
    assert data["category"]["name"] == "Rojo"
    assert data["details"] == [
        {"tag": "dt", "content": "Locale:"},
        {"tag": "dd", "content": "Español"},
    ]


def test_show_other_locale_redirects(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.get(
        f"{BASE}/{catalog['red_es'].id}",
        headers={"X-Locale": "en"},
        follow_redirects=False,
    )

    assert response.status_code == 303
    assert response.headers["location"] == BASE


def test_edit_other_locale_redirects(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.get(
        f"{BASE}/{catalog['blue_es'].id}/edit",
        headers={"X-Locale": "ca"},
        follow_redirects=False,
    )

    assert response.status_code == 303


def test_edit_form_lists_translations(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.get(f"{BASE}/{catalog['red_en'].id}/edit", headers={"X-Locale": "en"})

    assert response.status_code == 200
    data = response.json()
    assert [t["locale"] for t in data["sidebar"]["translations"]] == ["es"]
    assert data["hidden_fields"][0] == {
        "name": "category[content_id]",
        "value": str(catalog["red_en"].content_id),
    }


def test_show_unknown_category_is_404(client: TestClient, catalog: dict[str, Category]) -> None:
    assert client.get(f"{BASE}/9999").status_code == 404


# =============================================================================
# New / create
# =============================================================================


def test_new_translation_form(client: TestClient, catalog: dict[str, Category]) -> None:
    content_id = catalog["red_en"].content_id

    response = client.get(f"{BASE}/new", params={"from": content_id}, headers={"X-Locale": "ca"})

    assert response.status_code == 200
    data = response.json()
    assert data["category"]["id"] is None
    assert data["category"]["name"] == "Red"
    assert data["category"]["locale"] == "ca"
    assert data["category"]["content_id"] == content_id
    assert [t["locale"] for t in data["sidebar"]["translations"]] == ["en", "es"]


def test_create_in_request_locale(
    client: TestClient, db_session: Session, catalog: dict[str, Category]
) -> None:
    response = client.post(
        BASE,
        json={"name": "Groc", "locale": "en"},
        headers={"X-Locale": "ca"},
    )

    assert response.status_code == 201
    data = response.json()
    assert data["locale"] == "ca"
    assert data["content_id"] is not None
    assert db_session.get(Category, data["id"]) is not None


def test_create_translation(client: TestClient, catalog: dict[str, Category]) -> None:
    content_id = catalog["red_en"].content_id

    response = client.post(
        BASE,
        params={"from": content_id},
        json={"name": "Vermell", "content_id": content_id},
        headers={"X-Locale": "ca"},
    )

    assert response.status_code == 201
    assert response.json()["content_id"] == content_id
    assert catalog["red_en"].in_locale("ca").name == "Vermell"


def test_create_duplicate_translation_conflicts(
    client: TestClient, catalog: dict[str, Category]
) -> None:
    response = client.post(
        BASE,
        json={"name": "Rojo otra vez", "content_id": catalog["red_en"].content_id},
        headers={"X-Locale": "es"},
    )

    assert response.status_code == 409


def test_create_in_non_editable_set_conflicts(
    client: TestClient, db_session: Session, catalog: dict[str, Category]
) -> None:
    create_category_set(db_session, "fixed", "Fixed", is_editable=False)
    db_session.commit()

    response = client.post("/category_sets/fixed/categories", json={"name": "Nuevo"})

    assert response.status_code == 409


def test_create_requires_name(client: TestClient, catalog: dict[str, Category]) -> None:
    assert client.post(BASE, json={"name": ""}).status_code == 422


# =============================================================================
# Update / destroy
# =============================================================================


def test_update(client: TestClient, catalog: dict[str, Category]) -> None:
    response = client.put(
        f"{BASE}/{catalog['red_es'].id}",
        json={"description": "cálido"},
        headers={"X-Locale": "es"},
    )

    assert response.status_code == 200
    assert response.json()["description"] == "cálido"
    assert response.json()["name"] == "Rojo"


def test_destroy_translation(
    client: TestClient, db_session: Session, catalog: dict[str, Category]
) -> None:
    response = client.delete(f"{BASE}/{catalog['red_es'].id}", headers={"X-Locale": "es"})

    assert response.status_code == 200
    assert response.json() == {"destroyed": True}
    remaining = db_session.scalars(
        select(Category.name).where(Category.content_id == catalog["red_en"].content_id)
    ).all()
    assert remaining == ["Red"]


def test_destroy_content(
    client: TestClient, db_session: Session, catalog: dict[str, Category]
) -> None:
    response = client.delete(
        f"{BASE}/{catalog['red_es'].id}",
        params={"destroy_content": "true"},
        headers={"X-Locale": "es"},
    )

    assert response.status_code == 200
    remaining = db_session.scalars(
        select(Category).where(Category.content_id == catalog["red_en"].content_id)
    ).all()
    assert remaining == []
