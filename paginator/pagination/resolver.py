"""
Resolution of runtime sort field names to field accessors.

Field names arrive as strings (typically from a request payload) and are
matched case-insensitively against the public members of the entity type.
Member lists are read once per type into a descriptor table, and resolved
accessors are cached process-wide, so repeated requests for the same field
cost a dictionary lookup.
"""

import dataclasses
import functools
import inspect
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, get_origin

from pydantic import BaseModel as PydanticBaseModel

from paginator.constants import (
    FRAMEWORK_MODULES,
    SortFieldPolicy,
    normalize_field_name,
)
from paginator.exceptions import FieldNotFoundError
from paginator.logging import logger
from paginator.pagination.accessors import (
    AccessorCache,
    FieldAccessor,
    accessor_cache,
)
from paginator.settings import app_settings


@dataclass(frozen=True)
class TypeDescriptor:
    """
    Public readable members of a type, indexed by case-folded name.

    Attributes:
        owner: The described type.
        members: Member names in declaration order.
    """

    owner: type
    members: tuple[str, ...]

    @functools.cached_property
    def _index(self) -> dict[str, str]:
        index: dict[str, str] = {}
        for name in self.members:
            index.setdefault(normalize_field_name(name), name)
        return index

    def lookup(self, field_name: str) -> str | None:
        """
        Find the declared member name for ``field_name``.

        An exact-case match wins; otherwise the first declared member whose
        case-folded name matches is returned.
        """
        if field_name in self.members:
            return field_name
        return self._index.get(normalize_field_name(field_name))


def _is_framework_class(cls: type) -> bool:
    return cls.__module__.split(".")[0] in FRAMEWORK_MODULES


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or get_origin(annotation) is ClassVar


def _iter_members(owner: type) -> Iterator[str]:
    if issubclass(owner, PydanticBaseModel):
        yield from owner.model_fields
        yield from owner.model_computed_fields

    if dataclasses.is_dataclass(owner):
        for f in dataclasses.fields(owner):
            yield f.name

    # NamedTuple
    yield from getattr(owner, "_fields", ())

    for cls in reversed(owner.__mro__):
        if _is_framework_class(cls):
            continue
        for name, annotation in inspect.get_annotations(cls).items():
            if not _is_class_var(annotation):
                yield name
        slots = vars(cls).get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        yield from slots
        for name, value in vars(cls).items():
            if isinstance(value, (property, functools.cached_property)):
                yield name


@functools.cache
def describe_type(owner: type) -> TypeDescriptor:
    """
    Build the descriptor table for ``owner``.

    The table is built once per type and memoized for the lifetime of the
    process. Members whose names start with an underscore are excluded.
    """
    seen: dict[str, None] = {}
    for name in _iter_members(owner):
        if not name.startswith("_"):
            seen.setdefault(name, None)

    logger.debug(
        f"Described type {owner.__name__} with {len(seen)} public members"
    )
    return TypeDescriptor(owner=owner, members=tuple(seen))


def describe_instance(sample: Any) -> TypeDescriptor:
    """
    Describe the public attributes stored on one instance.

    Covers plain classes that only assign attributes in ``__init__``. Not
    memoized, since instances of one class may carry different attributes.
    """
    members = tuple(
        name
        for name in getattr(sample, "__dict__", {})
        if not name.startswith("_")
    )
    return TypeDescriptor(owner=type(sample), members=members)


class SortKeyResolver:
    """
    Resolves field names to cached FieldAccessors.

    Under the strict policy an unknown name raises FieldNotFoundError at
    once. Under the fallback policy the fallback candidates are tried in
    order, and FieldNotFoundError is raised only if none of them exists.

    Example:
        ```python
        resolver = SortKeyResolver(SortFieldPolicy.FALLBACK)
        accessor = resolver.resolve(Author, "NAME")
        sorted(authors, key=accessor)
        ```
    """

    def __init__(
        self,
        policy: SortFieldPolicy | None = None,
        fallback_fields: Sequence[str] | None = None,
        cache: AccessorCache | None = None,
    ):
        """
        Initialize the resolver.

        Args:
            policy: Unknown-field policy. Defaults to
                app_settings.SORT_FIELD_POLICY.
            fallback_fields: Candidate fields for the fallback policy.
                Defaults to app_settings.SORT_FALLBACK_FIELDS.
            cache: Accessor cache. Defaults to the process-wide cache.
        """
        self.policy = SortFieldPolicy(policy or app_settings.SORT_FIELD_POLICY)
        self.fallback_fields = tuple(
            app_settings.SORT_FALLBACK_FIELDS
            if fallback_fields is None
            else fallback_fields
        )
        self.cache = accessor_cache if cache is None else cache

    def resolve(
        self, owner: type, field_name: str, sample: Any = None
    ) -> FieldAccessor:
        """
        Resolve ``field_name`` on ``owner`` to an accessor.

        Direct matches are cached under the requested name for every
        resolver. Fallback choices are cached under the requested name
        scoped to this resolver's fallback candidates, so resolvers with
        other candidates or the strict policy never see them.

        Args:
            owner: Entity type to resolve against.
            field_name: Requested field name, any case.
            sample: An instance of ``owner``. Its public instance attributes
                are searched when the type declares no matching member.

        Raises:
            FieldNotFoundError: If no member matches and no fallback applies.
        """
        cached = self.cache.get(owner, field_name)
        if cached is not None:
            return cached

        logger.debug(
            f"Sort accessor cache miss for {owner.__name__}.{field_name}"
        )
        attribute = self._match(owner, field_name, sample)
        if attribute is not None:
            return self.cache.get_or_build(
                owner,
                field_name,
                lambda: FieldAccessor(owner, attribute, field_name),
            )

        if self.policy is SortFieldPolicy.STRICT:
            raise FieldNotFoundError(field_name, owner.__name__)

        return self.cache.get_or_build(
            owner,
            field_name,
            lambda: self._fall_back(owner, field_name, sample),
            scope=self.fallback_fields,
        )

    def _match(
        self, owner: type, field_name: str, sample: Any
    ) -> str | None:
        attribute = describe_type(owner).lookup(field_name)
        if attribute is None and sample is not None:
            attribute = describe_instance(sample).lookup(field_name)
        return attribute

    def _fall_back(
        self, owner: type, field_name: str, sample: Any
    ) -> FieldAccessor:
        for candidate in self.fallback_fields:
            attribute = self._match(owner, candidate, sample)
            if attribute is not None:
                logger.warning(
                    f"Sort field '{field_name}' not found on "
                    f"{owner.__name__}, falling back to '{attribute}'"
                )
                return FieldAccessor(owner, attribute, field_name)

        raise FieldNotFoundError(field_name, owner.__name__)


@functools.cache
def _default_resolver(policy: SortFieldPolicy) -> SortKeyResolver:
    return SortKeyResolver(policy)


def get_resolver(policy: SortFieldPolicy | None = None) -> SortKeyResolver:
    """Get the shared resolver for ``policy`` (default from settings)."""
    return _default_resolver(
        SortFieldPolicy(policy or app_settings.SORT_FIELD_POLICY)
    )


def resolve_field(
    owner: type,
    field_name: str,
    policy: SortFieldPolicy | None = None,
) -> FieldAccessor:
    """
    Resolve a field name once so the accessor can be reused across calls.

    Example:
        >>> by_name = resolve_field(Author, "name")
        >>> page = create_page(authors, PageRequest(ascending=True), by_name)
    """
    return get_resolver(policy).resolve(owner, field_name)
