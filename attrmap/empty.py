"""Shared read-only empty values."""

from types import MappingProxyType
from typing import Any, Mapping

EMPTY_ATTRIBUTES: Mapping[str, Any] = MappingProxyType({})
"""Returned by ``get_attributes`` for namespaces without attributes."""

EMPTY_NAMES: tuple[str, ...] = ()
