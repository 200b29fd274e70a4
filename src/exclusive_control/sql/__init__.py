"""Statement generation and caching."""

from __future__ import annotations

from .cache import TableDescriptorCache, get_default_cache
from .descriptor import TableDescriptor
from .templates import (
    TEMPLATE_FIELDS,
    SqlTemplateBuilder,
    SqlTemplates,
    build_table_descriptor,
)

__all__ = [
    "TEMPLATE_FIELDS",
    "SqlTemplateBuilder",
    "SqlTemplates",
    "TableDescriptor",
    "TableDescriptorCache",
    "build_table_descriptor",
    "get_default_cache",
]
