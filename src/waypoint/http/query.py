"""Query string encoding for URL generation.

``build_query`` is what URL generation uses for residual parameters. It
follows the bracketed convention of PHP's ``http_build_query`` so that
lists and nested mappings survive a round trip through most backends::

    build_query({"q": "cats", "tags": ["a", "b"]})  -> "q=cats&tags%5B0%5D=a&tags%5B1%5D=b"
"""

from collections.abc import Iterator, Mapping, Sequence
from typing import Any
from urllib.parse import urlencode


def is_multi_value(value: object) -> bool:
    """True for lists, tuples, mappings and other non-string containers."""
    if isinstance(value, str | bytes | bytearray):
        return False
    return isinstance(value, Sequence | Mapping | set | frozenset)


def scalar_to_str(value: object) -> str:
    """Stringify a scalar the way it appears in a path or query string."""
    if value is None:
        return ""
    if value is True:
        return "1"
    if value is False:
        return "0"
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return str(value)


def _flatten(key: str, value: Any) -> Iterator[tuple[str, str]]:
    if value is None:
        return
    if isinstance(value, Mapping):
        for sub_key, sub_value in value.items():
            yield from _flatten(f"{key}[{sub_key}]", sub_value)
    elif is_multi_value(value):
        for index, item in enumerate(value):
            yield from _flatten(f"{key}[{index}]", item)
    else:
        yield key, scalar_to_str(value)


def build_query(params: Mapping[str, Any]) -> str:
    """Encode *params* as a query string, keeping mapping order.

    ``None`` values are dropped, booleans become ``1``/``0``, sequences and
    mappings expand to bracketed keys.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in params.items():
        pairs.extend(_flatten(str(key), value))
    return urlencode(pairs)
