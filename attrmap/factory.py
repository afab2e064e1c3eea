"""Factory function for populated attribute maps."""

from typing import Any, Mapping

from .attribute_map import AttributeMap


def attribute_map(
    namespaces: Mapping[str, Mapping[str, Any]] | None = None,
    *,
    source: AttributeMap | None = None,
    namespace: str | None = None,
) -> AttributeMap:
    """Create an AttributeMap with initial content.

    Args:
        namespaces: Nested ``{namespace: {name: value}}`` content.
            ``None`` values are skipped.
        source: An AttributeMap to copy before ``namespaces`` is
            applied.
        namespace: Namespace to put in the singleton slot. Only takes
            effect when ``source`` is empty; it is written first so
            the remaining namespaces go to the overflow. It must have
            at least one non-None value in ``namespaces``.

    Returns:
        A new ``AttributeMap``.
    """
    if namespace is not None and not isinstance(namespace, str):
        raise TypeError(
            f"namespace must be a str, not {type(namespace).__name__}"
        )
    if namespaces is not None and not isinstance(namespaces, Mapping):
        raise TypeError(
            f"namespaces must be a mapping, not {type(namespaces).__name__}"
        )

    result = AttributeMap(source)
    content = dict(namespaces or {})

    order = list(content)
    if namespace is not None:
        preferred = content.get(namespace) or {}
        if not any(value is not None for value in preferred.values()):
            raise ValueError(
                f"Preferred namespace {namespace!r} has no attributes"
            )
        order.remove(namespace)
        order.insert(0, namespace)

    for ns in order:
        attrs = content[ns]
        if not isinstance(attrs, Mapping):
            raise TypeError(
                f"Attributes of namespace {ns!r} must be a mapping, "
                f"not {type(attrs).__name__}"
            )
        for name, value in attrs.items():
            result.set_attribute(ns, name, value)
    return result
