"""Column name to bind-parameter name conversion."""

from __future__ import annotations

import re
from collections.abc import Callable

#: Strategy turning a column name into a named-placeholder identifier.
PlaceholderNaming = Callable[[str], str]

_SEPARATORS = re.compile(r"[^0-9a-z]+")


def to_placeholder_name(column_name: str) -> str:
    """Return the bind name used for *column_name*.

    Lower-cases the name and collapses each run of characters outside
    ``[0-9a-z]`` into one ``_``. Leading and trailing separators are
    dropped and a leading digit is prefixed with ``_`` so the result is
    always a valid identifier.

    >>> to_placeholder_name("USER_ID")
    'user_id'
    >>> to_placeholder_name("Pk-2")
    'pk_2'
    """
    name = _SEPARATORS.sub("_", column_name.lower()).strip("_")
    if not name:
        raise ValueError(f"Cannot derive a placeholder name from {column_name!r}")
    if name[0].isdigit():
        name = f"_{name}"
    return name
