"""Pydantic schemas for the catlingo admin API.

These types define the request/response models of the admin service and the
view fragments produced by the presentation hooks.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CategorySetResponse(BaseModel):
    """A category set."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    key: str
    name: str
    is_editable: bool


class CategorySetListResponse(BaseModel):
    """Response from GET /category_sets endpoint."""

    category_sets: list[CategorySetResponse]
    count: int


class CategoryResponse(BaseModel):
    """A category, saved or not (``id`` is None for drafts)."""

    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    category_set_id: int | None = None
    name: str | None = None
    description: str | None = None
    locale: str | None = None
    content_id: int | None = None


class CategoryCreate(BaseModel):
    """Request body for POST /category_sets/{key}/categories endpoint."""

    name: str = Field(min_length=1)
    description: str | None = None
    locale: str | None = Field(default=None, description="Ignored when the i18n connector is active")
    content_id: int | None = Field(default=None, description="Logical category being translated")


class CategoryUpdate(BaseModel):
    """Request body for PUT /category_sets/{key}/categories/{id} endpoint."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None


class CategoryDestroyResponse(BaseModel):
    """Response from DELETE /category_sets/{key}/categories/{id} endpoint."""

    destroyed: bool


# =============================================================================
# View fragments
# =============================================================================


class ActionLink(BaseModel):
    """A link shown for a category row."""

    label: str
    href: str
    method: Literal["get", "delete"] = "get"
    confirm: str | None = None


class FilterOption(BaseModel):
    value: str
    label: str


class FilterControl(BaseModel):
    """An extra filter control for the category listing."""

    kind: Literal["links", "string"]
    field: str
    caption: str
    url: str
    options: list[FilterOption] = Field(default_factory=list)


class FilterInfo(BaseModel):
    """Description of an applied filter."""

    kind: Literal["links", "string"]
    field: str
    caption: str
    value: str | None = None


class HiddenField(BaseModel):
    name: str
    value: str | None = None


class ViewFragment(BaseModel):
    """A tagged piece of text, e.g. a definition-list term."""

    tag: str
    content: str


class TranslationEntry(BaseModel):
    locale: str | None
    category_id: int
    href: str


class TranslationsPanel(BaseModel):
    """Sidebar listing the other locale variants of a category."""

    content_id: int | None
    translations: list[TranslationEntry] = Field(default_factory=list)
    hide_preview_link: bool = False


# =============================================================================
# Screens
# =============================================================================


class CategoryRow(BaseModel):
    category: CategoryResponse
    actions: list[ActionLink]


class CategoryIndexResponse(BaseModel):
    """Response from GET /category_sets/{key}/categories endpoint."""

    categories: list[CategoryRow]
    count: int
    filters: list[FilterControl] = Field(default_factory=list)
    filters_info: list[FilterInfo] = Field(default_factory=list)


class CategoryFormResponse(BaseModel):
    """Response from the new and edit endpoints."""

    category: CategoryResponse
    hidden_fields: list[HiddenField] = Field(default_factory=list)
    sidebar: TranslationsPanel | None = None


class CategoryDetailResponse(BaseModel):
    """Response from GET /category_sets/{key}/categories/{id} endpoint."""

    category: CategoryResponse
    details: list[ViewFragment] = Field(default_factory=list)
