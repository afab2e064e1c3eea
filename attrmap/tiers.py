"""Storage states for AttributeMap.

A map is always in exactly one of three states:

- ``Empty``: no namespace has been written yet.
- ``Single``: one namespace (the singleton) and its attributes.
- ``Multiple``: the singleton plus an overflow dict holding every
  other namespace.

The first namespace written becomes the singleton and stays there
until the map is cleared. Overflow inner dicts are never empty, and
an empty overflow collapses ``Multiple`` back to ``Single``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class Empty:
    """No namespace chosen yet."""


@dataclass
class Single:
    """Only the singleton namespace is populated."""

    namespace: str
    content: dict[str, Any] = field(default_factory=dict)


@dataclass
class Multiple:
    """Singleton namespace plus overflow namespaces."""

    namespace: str
    content: dict[str, Any]
    overflow: dict[str, dict[str, Any]]


State = Empty | Single | Multiple


def copy_state(state: State) -> State:
    """Duplicate every dict in ``state``. Values are shared."""
    if isinstance(state, Empty):
        return Empty()
    if isinstance(state, Single):
        return Single(state.namespace, dict(state.content))
    return Multiple(
        state.namespace,
        dict(state.content),
        {ns: dict(attrs) for ns, attrs in state.overflow.items()},
    )


def singleton_of(state: State) -> str | None:
    if isinstance(state, Empty):
        return None
    return state.namespace


def overflow_of(state: State) -> dict[str, dict[str, Any]] | None:
    if isinstance(state, Multiple):
        return state.overflow
    return None


def lookup(state: State, namespace: str) -> dict[str, Any] | None:
    """The live attribute dict for ``namespace``, or None."""
    if isinstance(state, Empty):
        return None
    if namespace == state.namespace:
        return state.content
    if isinstance(state, Multiple):
        return state.overflow.get(namespace)
    return None


def state_hash(state: State) -> int:
    """Hash consistent with dataclass equality of states.

    Only keys are hashed so that unhashable values are allowed.
    """
    overflow = overflow_of(state)
    overflow_hash = 0
    if overflow is not None:
        overflow_hash = hash(
            frozenset(
                (ns, frozenset(attrs)) for ns, attrs in overflow.items()
            )
        )
    result = overflow_hash
    result = 31 * result + hash(singleton_of(state))
    content = None if isinstance(state, Empty) else state.content
    result = 31 * result + (
        hash(frozenset(content)) if content is not None else 0
    )
    return result
