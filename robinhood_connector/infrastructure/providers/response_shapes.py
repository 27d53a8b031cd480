"""Tagged union of decoded upstream response bodies.

Robinhood resource endpoints answer with one of three JSON shapes:

- Paginated envelope: ``{"results": [...], "next": "<url>" | null}``
- Bare array: ``[...]``
- Single object: ``{...}`` (no ``results`` array)

The transport classifies every decoded body into exactly one variant so
callers match on the shape instead of probing keys at each call site.

Usage:
    match body:
        case EnvelopeBody(results=results, next=next_url):
            ...
        case ListBody(items=items):
            ...
        case ObjectBody(item=item):
            ...
"""

from dataclasses import dataclass
from typing import Any, TypeAlias


@dataclass(frozen=True, slots=True, kw_only=True)
class EnvelopeBody:
    """Paginated page of results.

    Attributes:
        results: Records on this page, in upstream order.
        next: Absolute URL of the next page, or None on the last page.
    """

    results: list[dict[str, Any]]
    next: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class ListBody:
    """Bare JSON array of records."""

    items: list[dict[str, Any]]


@dataclass(frozen=True, slots=True, kw_only=True)
class ObjectBody:
    """Single JSON object."""

    item: dict[str, Any]


ResponseBody: TypeAlias = EnvelopeBody | ListBody | ObjectBody


def classify_body(data: Any) -> ResponseBody | None:
    """Classify a decoded JSON value into a response shape.

    Args:
        data: Value returned by ``response.json()``.

    Returns:
        The matching variant, or None when the value is neither a JSON
        object nor a JSON array (e.g. a bare string or number).

    Example:
        >>> classify_body({"results": [{"id": "1"}], "next": None})
        EnvelopeBody(results=[{'id': '1'}], next=None)
        >>> classify_body([{"id": "1"}])
        ListBody(items=[{'id': '1'}])
    """
    if isinstance(data, list):
        return ListBody(items=data)

    if isinstance(data, dict):
        results = data.get("results")
        if isinstance(results, list):
            return EnvelopeBody(results=results, next=data.get("next") or None)
        return ObjectBody(item=data)

    return None
