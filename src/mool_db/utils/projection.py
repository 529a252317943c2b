"""Projection and pagination resolution for read queries.

Turns the optional query-shaping inputs a caller collects (explicit
projection, allow-listed field names, page size/number) into the concrete
``projection``, ``skip`` and ``limit`` values handed to the driver.

Nothing in here raises: unknown field names are dropped and incomplete
pagination input means no pagination. The allow-list is the access boundary,
not this resolver.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, NamedTuple

DEFAULT_PROJECTION = {"_id": 1}


@dataclass(frozen=True)
class QueryShape:
    """
    Recognised query-shaping inputs for read operations.

    Attributes:
        projection: Explicit projection, used verbatim when given
        allowed_attributes: Allow-list of external field name -> storage path
        fields: Field name or names requested by the caller
        page_size: Documents per page
        page_number: 1-based page index
    """

    projection: Mapping[str, Any] | None = None
    allowed_attributes: Mapping[str, str] | None = None
    fields: str | Sequence[str] | None = None
    page_size: int | None = None
    page_number: int | None = None


class ResolvedQuery(NamedTuple):
    """Concrete projection and pagination values for a driver call."""

    projection: dict[str, Any]
    skip: int
    limit: int


def projection_generator(
    projection_object: Mapping[str, Any] | None = None,
    fetch_allowed_attributes: Mapping[str, str] | None = None,
    fields: str | Sequence[str] | None = None,
) -> dict[str, dict[str, Any]]:
    """
    Build a projection from an explicit object or an allow-listed field list.

    Args:
        projection_object: Explicit projection; allow-list and fields are ignored when set
        fetch_allowed_attributes: Mapping of permitted field name -> storage path
        fields: Single field name or sequence of names requested

    Returns:
        ``{"projection": {...}}``
    """
    if isinstance(projection_object, Mapping):
        return {"projection": dict(projection_object)}

    projection = dict(DEFAULT_PROJECTION)

    if isinstance(fields, str):
        fields = [fields]
    elif not isinstance(fields, Sequence):
        return {"projection": projection}

    allowed = fetch_allowed_attributes if isinstance(fetch_allowed_attributes, Mapping) else {}
    for name in fields:
        # Names outside the allow-list are skipped silently
        if isinstance(name, str) and name in allowed:
            projection[allowed[name]] = 1

    return {"projection": projection}


def page_props_generator(
    page_size: int | None = None,
    page_number: int | None = None,
) -> dict[str, int]:
    """
    Compute skip/limit for a 1-based page.

    Both values must be positive integers (or convertible to one), otherwise
    ``skip`` and ``limit`` are 0 (no pagination).
    """
    limit = 0
    skip = 0

    if page_size and page_number:
        try:
            size = int(page_size)
            number = int(page_number)
        except (TypeError, ValueError, OverflowError):
            return {"skip": skip, "limit": limit}
        if size > 0 and number > 0:
            limit = size
            skip = (number - 1) * size

    return {"skip": skip, "limit": limit}


def projection_and_page_props_generator(
    projection_object: Mapping[str, Any] | None = None,
    fetch_allowed_attributes: Mapping[str, str] | None = None,
    fields: str | Sequence[str] | None = None,
    page_size: int | None = None,
    page_number: int | None = None,
) -> dict[str, Any]:
    """Combine projection_generator and page_props_generator into one dict."""
    return {
        **projection_generator(projection_object, fetch_allowed_attributes, fields),
        **page_props_generator(page_size, page_number),
    }


def resolve_query_shape(shape: QueryShape | None = None) -> ResolvedQuery:
    """
    Resolve a QueryShape into the values passed to the driver.

    Args:
        shape: Query-shaping inputs; ``None`` behaves like an empty shape

    Returns:
        ResolvedQuery(projection, skip, limit)
    """
    shape = shape or QueryShape()
    props = projection_and_page_props_generator(
        shape.projection,
        shape.allowed_attributes,
        shape.fields,
        shape.page_size,
        shape.page_number,
    )
    return ResolvedQuery(props["projection"], props["skip"], props["limit"])
