"""attrmap: namespace-qualified attribute maps."""

from .attribute_map import AttributeMap
from .empty import EMPTY_ATTRIBUTES, EMPTY_NAMES
from .errors import InvalidArgument
from .factory import attribute_map

__all__ = [
    "EMPTY_ATTRIBUTES",
    "EMPTY_NAMES",
    "AttributeMap",
    "InvalidArgument",
    "attribute_map",
]
