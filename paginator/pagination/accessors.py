"""
Field accessors and the process-wide accessor cache.

A FieldAccessor is the resolved form of a sort field name: it reads one
attribute from an entity instance for in-memory ordering, and renders the
same attribute as an SQL ordering clause for queries executed by the
database.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import ColumnElement
from sqlalchemy.orm import QueryableAttribute

from paginator.constants import normalize_field_name
from paginator.exceptions import UntranslatableAccessorError

# (normalized fallback candidates, normalized requested name)
CacheKey = tuple[tuple[str, ...], str]


@dataclass(frozen=True)
class FieldAccessor:
    """
    Reads a single public attribute from instances of ``owner``.

    Accessors are pure and immutable, so one instance can be shared between
    threads and calls. Two accessors for the same owner and attribute compare
    equal regardless of the name that was requested to build them.

    Attributes:
        owner: The entity type the attribute belongs to.
        attribute: The attribute name as declared on the type.
        requested: The field name the caller asked for. Differs from
            ``attribute`` in case, or entirely when a fallback field was used.
    """

    owner: type
    attribute: str
    requested: str = field(default="", compare=False)

    def __call__(self, instance: Any) -> Any:
        return getattr(instance, self.attribute)

    @property
    def is_fallback(self) -> bool:
        """True when the attribute was chosen by the fallback policy."""
        return normalize_field_name(self.requested or self.attribute) != (
            normalize_field_name(self.attribute)
        )

    def column(self) -> ColumnElement[Any] | QueryableAttribute[Any]:
        """
        Get the SQL expression for this attribute on ``owner``.

        Raises:
            UntranslatableAccessorError: If the attribute is not a mapped
                column or SQL expression.
        """
        expression = getattr(self.owner, self.attribute, None)
        if not isinstance(expression, (QueryableAttribute, ColumnElement)):
            raise UntranslatableAccessorError(
                f"Field '{self.attribute}' of '{self.owner.__name__}' "
                "is not a queryable column"
            )
        return expression

    def order_by_clause(self, ascending: bool) -> ColumnElement[Any]:
        """
        Build the ordering clause used when sorting is pushed to the database.

        NULLs sort first ascending and last descending, the same placement
        in-memory ordering uses.
        """
        expression = self.column()
        if ascending:
            return expression.asc().nulls_first()
        return expression.desc().nulls_last()

    @classmethod
    def from_column(
        cls, attribute: QueryableAttribute[Any]
    ) -> "FieldAccessor":
        """Build an accessor from a mapped attribute such as ``Author.name``."""
        return cls(
            owner=attribute.class_,
            attribute=attribute.key,
            requested=attribute.key,
        )


class AccessorCache:
    """
    Process-wide registry of resolved accessors.

    Entries are keyed by owner type, then by the case-folded requested field
    name. Entries are never evicted. Builders run outside any lock: two
    threads racing on the same key may both build an accessor, and the first
    one stored is kept. Since accessors for a key are equivalent, callers
    cannot observe the difference.

    Accessors chosen by a fallback policy depend on the candidate list, so
    they are stored under a ``scope`` naming those candidates. Direct
    matches use the empty scope and are shared by every resolver.
    """

    def __init__(self) -> None:
        self._entries: dict[type, dict[CacheKey, FieldAccessor]] = {}

    def _fields(self, owner: type) -> dict[CacheKey, FieldAccessor]:
        fields = self._entries.get(owner)
        if fields is None:
            fields = self._entries.setdefault(owner, {})
        return fields

    @staticmethod
    def _key(field_name: str, scope: Sequence[str]) -> CacheKey:
        return (
            tuple(normalize_field_name(name) for name in scope),
            normalize_field_name(field_name),
        )

    def get(
        self, owner: type, field_name: str, scope: Sequence[str] = ()
    ) -> FieldAccessor | None:
        fields = self._entries.get(owner)
        if fields is None:
            return None
        return fields.get(self._key(field_name, scope))

    def get_or_build(
        self,
        owner: type,
        field_name: str,
        builder: Callable[[], FieldAccessor],
        scope: Sequence[str] = (),
    ) -> FieldAccessor:
        """
        Return the cached accessor, building and storing it on first use.

        Args:
            owner: Entity type the field belongs to.
            field_name: Requested field name (any case).
            builder: Called without arguments when no accessor is cached.
            scope: Fallback candidates the accessor was chosen from, or
                empty for a direct match.

        Returns:
            The stored accessor for the key.
        """
        fields = self._fields(owner)
        key = self._key(field_name, scope)

        accessor = fields.get(key)
        if accessor is None:
            accessor = fields.setdefault(key, builder())
        return accessor

    def __contains__(self, key: tuple[type, str]) -> bool:
        owner, field_name = key
        return self.get(owner, field_name) is not None

    def __len__(self) -> int:
        return sum(len(fields) for fields in list(self._entries.values()))

    def clear(self) -> None:
        self._entries.clear()


accessor_cache = AccessorCache()
