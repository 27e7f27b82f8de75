"""Translatable model trait.

Rows of a translatable model are locale variants of one logical item, grouped
by ``content_id``. The ``"any"`` locale marks a locale-neutral variant that
matches every locale lookup.
"""

import logging
from typing import Any, ClassVar

from sqlalchemy import Integer, Select, String, case, event, func, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import Mapped, Session, mapped_column, object_session

logger = logging.getLogger(__name__)

ANY_LOCALE = "any"

# Never copied from a source variant by translate()
_IDENTITY_COLUMNS = frozenset({"id", "locale", "content_id", "created_at"})


class TranslationError(Exception):
    """A translatable operation could not be performed."""

    pass


class TranslatableMixin:
    """Mixin adding ``locale`` and ``content_id`` to a declarative model.

    The model must have an integer ``id`` primary key. The trait is switched
    on per class with ``translatable()``; the columns exist either way.
    """

    __translatable__: ClassVar[bool] = False
    __translatable_fields__: ClassVar[tuple[str, ...]] = ()

    locale: Mapped[str | None] = mapped_column(String(16), nullable=True)
    content_id: Mapped[int | None] = mapped_column(Integer, nullable=True)

    @classmethod
    def translatable(cls, *fields: str) -> None:
        """Enable the trait; ``fields`` hold per-locale values."""
        cls.__translatable__ = True
        cls.__translatable_fields__ = fields

    @classmethod
    def is_translatable(cls) -> bool:
        return bool(cls.__translatable__)

    def is_locale(self, code: str | None, *, skip_any: bool = False) -> bool:
        """Whether this variant belongs to ``code`` (``"any"`` matches unless skipped)."""
        if code is not None and self.locale == code:
            return True
        return not skip_any and self.locale == ANY_LOCALE

    @classmethod
    def locale_scope(cls, *locales: str | None, all_locales: bool = False) -> Select[Any]:
        """Select one variant per ``content_id``.

        Variants are ranked by the order of ``locales``, then ``"any"``. With
        ``all_locales`` items that exist only in other locales are included
        too, in their lowest-id variant.

        Args:
            locales: Preferred locale codes, most preferred first
            all_locales: Fall back to any other locale

        Returns:
            A select of model rows, composable with further filters
        """
        preferred = list(dict.fromkeys([code for code in locales if code] + [ANY_LOCALE]))
        rank = case(
            {code: position for position, code in enumerate(preferred)},
            value=cls.locale,
            else_=len(preferred),
        )
        # Rows without a content_id stand alone
        group = func.coalesce(cls.content_id, -cls.id)  # type: ignore[attr-defined]
        ranked = select(
            cls.id.label("id"),  # type: ignore[attr-defined]
            func.row_number()
            .over(partition_by=group, order_by=[rank, cls.id])  # type: ignore[attr-defined]
            .label("position"),
        )
        if not all_locales:
            ranked = ranked.where(cls.locale.in_(preferred))
        ranked_subquery = ranked.subquery()

        return (
            select(cls)
            .join(ranked_subquery, ranked_subquery.c.id == cls.id)  # type: ignore[attr-defined]
            .where(ranked_subquery.c.position == 1)
        )

    @classmethod
    def translate(
        cls,
        session: Session,
        content_id: int,
        locale: str,
        *,
        copy_all: bool = False,
    ) -> Any:  # noqa: ANN401
        """Build an unsaved variant of ``content_id`` in ``locale``.

        Values are seeded from an existing variant. Only the fields shared by
        all locales are copied unless ``copy_all`` is set.
        """
        record = cls(locale=locale, content_id=content_id)  # type: ignore[call-arg]
        source = session.scalars(
            cls.locale_scope(locale, all_locales=True).where(cls.content_id == content_id)
        ).first()
        if source is None:
            logger.debug("No variant of %s %s to translate from", cls.__name__, content_id)
            return record

        skipped = set(_IDENTITY_COLUMNS)
        if not copy_all:
            skipped.update(cls.__translatable_fields__)
        for attr in sa_inspect(cls).column_attrs:
            if attr.key not in skipped:
                setattr(record, attr.key, getattr(source, attr.key))
        return record

    def _session(self) -> Session:
        session = object_session(self)
        if session is None:
            raise TranslationError(f"{type(self).__name__} is not attached to a session")
        return session

    def in_locale(self, *locales: str | None) -> Any:  # noqa: ANN401
        """Return the variant of this item in the first matching locale, or None."""
        cls = type(self)
        session = self._session()
        if self.content_id is None:
            matches = self.locale is not None and self.locale in (*locales, ANY_LOCALE)
            return self if matches else None
        stmt = cls.locale_scope(*locales).where(cls.content_id == self.content_id)
        return session.scalars(stmt).first()

    def translations(self) -> list[Any]:
        """Other locale variants of this item (none without a ``content_id``)."""
        cls = type(self)
        session = self._session()
        if self.content_id is None:
            return []
        stmt = (
            select(cls)
            .where(cls.content_id == self.content_id, cls.id != self.id)  # type: ignore[attr-defined]
            .order_by(cls.id)  # type: ignore[attr-defined]
        )
        return list(session.scalars(stmt).all())

    def destroy_content(self) -> bool:
        """Delete this variant and every sibling sharing its ``content_id``."""
        session = self._session()
        for record in [self, *self.translations()]:
            session.delete(record)
        session.flush()
        return True


def is_translatable(model: type) -> bool:
    """Whether ``model`` is a translatable model with the trait switched on."""
    return issubclass(model, TranslatableMixin) and model.is_translatable()


@event.listens_for(Session, "before_flush")
def assign_content_ids(session: Session, flush_context: Any, instances: Any) -> None:  # noqa: ANN401
    """Give new translatable rows without a ``content_id`` a fresh one."""
    pending = [
        obj
        for obj in session.new
        if isinstance(obj, TranslatableMixin) and obj.content_id is None
    ]
    if not pending:
        return

    # session.new keeps the order rows were added in
    next_ids: dict[type, int] = {}
    for obj in pending:
        cls = type(obj)
        if cls not in next_ids:
            stored = session.execute(select(func.max(cls.content_id))).scalar() or 0
            claimed = [
                o.content_id
                for o in session.new
                if type(o) is cls and o.content_id is not None
            ]
            next_ids[cls] = max([stored, *claimed]) + 1
        obj.content_id = next_ids[cls]
        next_ids[cls] += 1
