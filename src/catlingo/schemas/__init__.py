"""Schemas for the catlingo admin API."""

from catlingo.schemas.api import (
    ActionLink,
    CategoryCreate,
    CategoryResponse,
    FilterControl,
    FilterInfo,
    HiddenField,
    TranslationsPanel,
    ViewFragment,
)

__all__ = [
    "ActionLink",
    "CategoryCreate",
    "CategoryResponse",
    "FilterControl",
    "FilterInfo",
    "HiddenField",
    "TranslationsPanel",
    "ViewFragment",
]
