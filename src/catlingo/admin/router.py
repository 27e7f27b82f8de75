"""REST API router for category administration."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from fastapi.responses import RedirectResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catlingo.admin.controller import CategoriesController, Redirect
from catlingo.admin.helpers import CategoryForm, CategoryViewHelper
from catlingo.categories.errors import (
    CategoryNotFoundError,
    CategorySetNotEditableError,
    CategorySetNotFoundError,
)
from catlingo.categories.services import get_category, list_category_sets, require_category_set
from catlingo.config import get_settings
from catlingo.db.engine import get_session
from catlingo.db.models import Category, CategorySet
from catlingo.schemas.api import (
    CategoryCreate,
    CategoryDestroyResponse,
    CategoryDetailResponse,
    CategoryFormResponse,
    CategoryIndexResponse,
    CategoryResponse,
    CategoryRow,
    CategorySetListResponse,
    CategorySetResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["categories"])


def get_current_locale(x_locale: str | None = Header(default=None, alias="X-Locale")) -> str:
    """Display locale of the request."""
    return x_locale or get_settings().default_locale


def _load_set(session: Session, set_key: str) -> CategorySet:
    try:
        return require_category_set(session, set_key)
    except CategorySetNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def _load_category(session: Session, category_set: CategorySet, category_id: int) -> Category:
    try:
        return get_category(session, category_set, category_id)
    except CategoryNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e


def _screen(
    session: Session,
    category_set: CategorySet,
    params: dict[str, Any],
    current_locale: str,
) -> tuple[CategoriesController, CategoryViewHelper]:
    controller = CategoriesController(
        session, category_set, params=params, current_locale=current_locale
    )
    helper = CategoryViewHelper(session, category_set, params=params, current_locale=current_locale)
    return controller, helper


@router.get("/category_sets", response_model=CategorySetListResponse)
def list_sets(session: Session = Depends(get_session)) -> CategorySetListResponse:
    """List category sets."""
    category_sets = list_category_sets(session)
    return CategorySetListResponse(
        category_sets=[CategorySetResponse.model_validate(s) for s in category_sets],
        count=len(category_sets),
    )


@router.get("/category_sets/{set_key}/categories", response_model=CategoryIndexResponse)
def index(
    set_key: str,
    filter_locale: str | None = Query(default=None, description="Only categories in this locale"),
    filter_text: str | None = Query(default=None, description="Name contains this text"),
    limit: int = Query(default=100, ge=1, le=1000),
    offset: int = Query(default=0, ge=0),
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> CategoryIndexResponse:
    """List the categories of a set with the actions available for each."""
    category_set = _load_set(session, set_key)
    params = {"filter_locale": filter_locale, "filter_text": filter_text}
    controller, helper = _screen(session, category_set, params, current_locale)

    categories = controller.index(limit=limit, offset=offset)
    rows = [
        CategoryRow(
            category=CategoryResponse.model_validate(category),
            actions=helper.category_index_actions(category),
        )
        for category in categories
    ]
    return CategoryIndexResponse(
        categories=rows,
        count=len(rows),
        filters=helper.category_filters(params),
        filters_info=helper.category_filters_info(),
    )


@router.get("/category_sets/{set_key}/categories/new", response_model=CategoryFormResponse)
def new(
    set_key: str,
    from_: int | None = Query(default=None, alias="from", description="content_id to translate"),
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> CategoryFormResponse:
    """Draft for the new-category form, optionally a translation of ``from``."""
    category_set = _load_set(session, set_key)
    controller, helper = _screen(session, category_set, {"from": from_}, current_locale)

    category = controller.new()
    return CategoryFormResponse(
        category=CategoryResponse.model_validate(category),
        hidden_fields=helper.category_form(CategoryForm(category)),
        sidebar=helper.new_category_sidebar(category),
    )


@router.get(
    "/category_sets/{set_key}/categories/{category_id}",
    response_model=CategoryDetailResponse,
)
def show(
    set_key: str,
    category_id: int,
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> Any:  # noqa: ANN401
    """Show a category, or redirect to the listing when it is not viewable."""
    category_set = _load_set(session, set_key)
    category = _load_category(session, category_set, category_id)
    controller, helper = _screen(session, category_set, {}, current_locale)

    outcome = controller.show(category)
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=303)

    return CategoryDetailResponse(
        category=CategoryResponse.model_validate(category),
        details=helper.category_partial(category),
    )


@router.get(
    "/category_sets/{set_key}/categories/{category_id}/edit",
    response_model=CategoryFormResponse,
)
def edit(
    set_key: str,
    category_id: int,
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> Any:  # noqa: ANN401
    """Edit form for a category, or redirect to the listing when not editable."""
    category_set = _load_set(session, set_key)
    category = _load_category(session, category_set, category_id)
    controller, helper = _screen(session, category_set, {}, current_locale)

    outcome = controller.edit(category)
    if isinstance(outcome, Redirect):
        return RedirectResponse(outcome.location, status_code=303)

    return CategoryFormResponse(
        category=CategoryResponse.model_validate(category),
        hidden_fields=helper.category_form(CategoryForm(category)),
        sidebar=helper.edit_category_sidebar(category),
    )


@router.post(
    "/category_sets/{set_key}/categories",
    response_model=CategoryResponse,
    status_code=201,
)
def create(
    set_key: str,
    payload: CategoryCreate,
    from_: int | None = Query(default=None, alias="from"),
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> CategoryResponse:
    """Create a category (or a translation when ``content_id`` is given)."""
    category_set = _load_set(session, set_key)
    params = {"category": payload.model_dump(exclude_none=True), "from": from_}
    controller, _ = _screen(session, category_set, params, current_locale)

    try:
        category = controller.create()
        session.commit()
    except CategorySetNotEditableError as e:
        session.rollback()
        raise HTTPException(status_code=409, detail=str(e)) from e
    except IntegrityError as e:
        session.rollback()
        raise HTTPException(
            status_code=409,
            detail="A category already exists for this content and locale",
        ) from e

    return CategoryResponse.model_validate(category)


@router.put(
    "/category_sets/{set_key}/categories/{category_id}",
    response_model=CategoryResponse,
)
def update(
    set_key: str,
    category_id: int,
    payload: CategoryUpdate,
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> CategoryResponse:
    """Update a category's name and/or description."""
    category_set = _load_set(session, set_key)
    category = _load_category(session, category_set, category_id)
    params = {"category": payload.model_dump(exclude_none=True)}
    controller, _ = _screen(session, category_set, params, current_locale)

    category = controller.update(category)
    session.commit()
    return CategoryResponse.model_validate(category)


@router.delete(
    "/category_sets/{set_key}/categories/{category_id}",
    response_model=CategoryDestroyResponse,
)
def destroy(
    set_key: str,
    category_id: int,
    destroy_content: bool = Query(default=False, description="Also remove every translation"),
    session: Session = Depends(get_session),
    current_locale: str = Depends(get_current_locale),
) -> CategoryDestroyResponse:
    """Remove a category, or all of its translations with ``destroy_content``."""
    category_set = _load_set(session, set_key)
    category = _load_category(session, category_set, category_id)
    params = {"destroy_content": destroy_content}
    controller, _ = _screen(session, category_set, params, current_locale)

    destroyed = controller.destroy(category)
    session.commit()
    return CategoryDestroyResponse(destroyed=destroyed)
