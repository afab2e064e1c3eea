"""AttributeMap: (namespace, name) -> value container."""

from __future__ import annotations

import copy as _copy
import logging
from collections.abc import Iterator, MutableMapping
from types import MappingProxyType
from typing import Any, Iterable, Mapping, cast

from .empty import EMPTY_ATTRIBUTES, EMPTY_NAMES
from .errors import InvalidArgument
from .tiers import Empty, Multiple, Single, State, copy_state, lookup, state_hash

logger = logging.getLogger(__name__)

Key = tuple[str, str]


def _require(**arguments: Any) -> None:
    """Raise InvalidArgument for the first None argument."""
    for argument, value in arguments.items():
        if value is None:
            raise InvalidArgument(argument)


def _split(key: object) -> Key:
    if not isinstance(key, tuple) or len(key) != 2:
        raise KeyError(key)
    if key[0] is None or key[1] is None:
        raise KeyError(key)
    return key


class AttributeMap(MutableMapping[Key, Any]):
    """A map holding ``(namespace, name) -> value`` attributes.

    Most documents only ever use one namespace per element, so the
    first namespace written is kept in a dedicated slot and no nested
    dict is allocated for it. Further namespaces go to a lazily
    created overflow dict. Storing ``None`` removes an attribute.

    Implements ``MutableMapping[tuple[str, str], Any]``.

    Args:
        source: Another AttributeMap to copy. Both tiers are
            duplicated, so the maps share no mutable storage.
    """

    def __init__(self, source: AttributeMap | None = None) -> None:
        if source is None:
            self._state: State = Empty()
        elif isinstance(source, AttributeMap):
            self._state = copy_state(source._state)
        else:
            raise TypeError(
                f"AttributeMap requires an AttributeMap source, "
                f"not {type(source).__name__}"
            )

    # -- Read operations --

    @property
    def singleton_namespace(self) -> str | None:
        """The namespace held in the fast slot, or None while empty."""
        if isinstance(self._state, Empty):
            return None
        return self._state.namespace

    def get_attribute(self, namespace: str, name: str) -> Any:
        """Return the value stored under ``(namespace, name)``, or None."""
        _require(namespace=namespace, name=name)
        attrs = lookup(self._state, namespace)
        if attrs is None:
            return None
        return attrs.get(name)

    def get_first_attribute(self, name: str) -> Any:
        """Return ``name`` from the first namespace that defines it.

        The singleton namespace is searched first, the overflow
        namespaces afterwards in no particular order. If several
        namespaces carry the same name, which value is returned is
        undefined.
        """
        _require(name=name)
        for _, attrs in self._namespace_items():
            value = attrs.get(name)
            if value is not None:
                return value
        return None

    def get_attributes(self, namespace: str) -> Mapping[str, Any]:
        """Read-only view of all attributes of ``namespace``. Never None."""
        _require(namespace=namespace)
        attrs = lookup(self._state, namespace)
        if attrs is None:
            return EMPTY_ATTRIBUTES
        return MappingProxyType(attrs)

    def get_names(self, namespace: str) -> tuple[str, ...]:
        """Names that have values in ``namespace``."""
        _require(namespace=namespace)
        attrs = lookup(self._state, namespace)
        if not attrs:
            return EMPTY_NAMES
        return tuple(attrs)

    def get_namespaces(self) -> tuple[str, ...]:
        """All namespaces known to this map.

        The singleton namespace is included even after its last
        attribute was removed.
        """
        state = self._state
        if isinstance(state, Empty):
            return EMPTY_NAMES
        if isinstance(state, Single):
            return (state.namespace,)
        return (state.namespace, *state.overflow)

    def _namespace_items(self) -> Iterable[tuple[str, dict[str, Any]]]:
        state = self._state
        if isinstance(state, Empty):
            return
        yield state.namespace, state.content
        if isinstance(state, Multiple):
            yield from state.overflow.items()

    # -- Write operations --

    def set_attribute(self, namespace: str, name: str, value: Any) -> Any:
        """Store ``value`` under ``(namespace, name)``.

        A ``None`` value removes the attribute.

        Returns:
            The value previously stored there, or None.
        """
        _require(namespace=namespace, name=name)
        state = self._state

        if isinstance(state, Empty):
            if value is not None:
                self._state = Single(namespace, {name: value})
            return None

        if namespace == state.namespace:
            if value is None:
                return state.content.pop(name, None)
            previous = state.content.get(name)
            state.content[name] = value
            return previous

        attrs = lookup(state, namespace)
        if attrs is None:
            if value is None:
                return None
            self._overflow()[namespace] = {name: value}
            return None

        if value is None:
            previous = attrs.pop(name, None)
            if not attrs:
                self._drop_overflow_namespace(namespace)
            return previous
        previous = attrs.get(name)
        attrs[name] = value
        return previous

    def remove_attribute(self, namespace: str, name: str) -> Any:
        """Remove ``(namespace, name)``. Returns the removed value or None."""
        return self.set_attribute(namespace, name, None)

    def merge(self, other: AttributeMap) -> None:
        """Copy all attributes of ``other`` into this map.

        Values from ``other`` win when the same ``(namespace, name)``
        exists in both maps. If this map is still empty it adopts the
        singleton namespace of ``other``.
        """
        if not isinstance(other, AttributeMap):
            raise InvalidArgument(
                "other",
                f"Can only merge an AttributeMap, not {type(other).__name__}",
            )
        if other is self or isinstance(other._state, Empty):
            return

        if isinstance(self._state, Empty):
            logger.debug(
                "Adopting singleton namespace %r from merged map",
                other._state.namespace,
            )
            self._state = copy_state(other._state)
            return

        for namespace, attrs in other._namespace_items():
            if namespace == self._state.namespace:
                self._state.content.update(attrs)
                continue
            if not attrs:
                continue
            overflow = self._overflow()
            target = overflow.get(namespace)
            if target is None:
                overflow[namespace] = dict(attrs)
            else:
                target.update(attrs)

    def clear(self) -> None:
        """Remove everything, including the singleton namespace choice."""
        if not isinstance(self._state, Empty):
            logger.debug("Clearing map with namespaces %r", self.get_namespaces())
        self._state = Empty()

    def _overflow(self) -> dict[str, dict[str, Any]]:
        """Overflow dict, allocating it on first use."""
        if isinstance(self._state, Multiple):
            return self._state.overflow
        state = cast(Single, self._state)
        logger.debug("Allocating overflow beside namespace %r", state.namespace)
        self._state = Multiple(state.namespace, state.content, {})
        return self._state.overflow

    def _drop_overflow_namespace(self, namespace: str) -> None:
        state = cast(Multiple, self._state)
        del state.overflow[namespace]
        if not state.overflow:
            logger.debug("Overflow emptied, back to namespace %r", state.namespace)
            self._state = Single(state.namespace, state.content)

    # -- Copy / compare --

    def copy(self) -> AttributeMap:
        """An independent copy; values themselves are shared."""
        return AttributeMap(self)

    def __copy__(self) -> AttributeMap:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> AttributeMap:
        result = AttributeMap()
        memo[id(self)] = result
        result._state = _copy.deepcopy(self._state, memo)
        return result

    def __eq__(self, other: object) -> bool:
        """Compare storage states field by field.

        Two maps holding the same attributes compare unequal when they
        chose a different singleton namespace. Use ``content_equals``
        to compare attributes only.
        """
        if self is other:
            return True
        if not isinstance(other, AttributeMap):
            return NotImplemented
        return self._state == other._state

    def __hash__(self) -> int:
        return state_hash(self._state)

    def content_equals(self, other: AttributeMap) -> bool:
        """True when both maps hold the same attributes, however stored."""
        if not isinstance(other, AttributeMap):
            return False
        return self.to_dict() == other.to_dict()

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Nested ``{namespace: {name: value}}`` snapshot.

        Namespaces without attributes are left out.
        """
        return {
            namespace: dict(attrs)
            for namespace, attrs in self._namespace_items()
            if attrs
        }

    # -- Mapping protocol --

    def __getitem__(self, key: Key) -> Any:
        namespace, name = _split(key)
        value = self.get_attribute(namespace, name)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: Key, value: Any) -> None:
        namespace, name = _split(key)
        self.set_attribute(namespace, name, value)

    def __delitem__(self, key: Key) -> None:
        namespace, name = _split(key)
        if self.set_attribute(namespace, name, None) is None:
            raise KeyError(key)

    def __contains__(self, key: object) -> bool:
        try:
            namespace, name = _split(key)
        except KeyError:
            return False
        return self.get_attribute(namespace, name) is not None

    def __iter__(self) -> Iterator[Key]:
        for namespace, attrs in self._namespace_items():
            for name in attrs:
                yield namespace, name

    def __len__(self) -> int:
        return sum(len(attrs) for _, attrs in self._namespace_items())

    def __repr__(self) -> str:
        return f"AttributeMap({self.to_dict()!r})"
