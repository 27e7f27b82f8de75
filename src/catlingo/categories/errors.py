"""Errors raised by the category plugin."""


class CategoryError(Exception):
    """Base exception for category operations."""

    pass


class CategoryNotFoundError(CategoryError, LookupError):
    """Category not found."""

    pass


class CategorySetNotFoundError(CategoryError, LookupError):
    """Category set not found."""

    pass


class CategorySetNotEditableError(CategoryError):
    """New categories cannot be added to this set."""

    pass
