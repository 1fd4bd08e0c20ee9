"""
Helpers to navigate and manipulate nested dicts via "dot paths".

A path like "child1.child2.name" is split on "." with no escaping, so keys
containing a dot cannot be addressed.
"""
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
import logging
from typing import Any

from dotmix.core.mixins import mixin_registry

logger = logging.getLogger(__name__)


class _Missing:
    """Marker for "no value here", distinct from a present None."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "<MISSING>"

    def __reduce__(self):
        return (_Missing, ())


MISSING: Any = _Missing()


class PathConflictError(ValueError):
    """An intermediate node on a path exists but cannot hold keys."""
    def __init__(self, path: str, segment: str, found: Any):
        self.path = path
        self.segment = segment
        self.found = found
        super().__init__(
            f"Cannot set '{path}': '{segment}' holds {type(found).__name__}, "
            "which cannot be traversed"
        )


def is_plain_mapping(value: Any) -> bool:
    """True for data containers (dict and friends) that flatten/merge recurse into."""
    return isinstance(value, Mapping)


def _step(current: Any, key: str) -> Any:
    """Resolve a single path segment, or MISSING."""
    if isinstance(current, Mapping):
        return current[key] if key in current else MISSING
    if isinstance(current, Sequence) and not isinstance(current, (str, bytes)):
        try:
            return current[int(key)]
        except (ValueError, IndexError):
            return MISSING
    if current is None or current is MISSING or key.startswith("_"):
        return MISSING
    return getattr(current, key, MISSING)


@mixin_registry.register(category="paths")
def path(obj: Any, dot_path: str, default: Any = MISSING) -> Any:
    """
    Get a deeply nested value without raising.

    Usage:
        path(obj, "foo.bar")
        path(obj, "foo.bar", "fallback")
        chain(obj).path("foo.bar").value()

    Returns `default` (MISSING unless given) as soon as a segment does not
    resolve. A resolved None is returned as None.
    """
    if obj is None or obj is MISSING:
        return default
    current = obj
    for key in dot_path.split("."):
        current = _step(current, key)
        if current is MISSING:
            return default
    return current


@mixin_registry.register(category="paths")
def has_path(obj: Any, dot_path: str) -> bool:
    """True if every segment of the path resolves (even to None)."""
    return path(obj, dot_path) is not MISSING


def _slot(container: Any, key: str) -> Any:
    """Key or list index that `key` addresses in `container`, or None."""
    if isinstance(container, MutableSequence):
        try:
            index = int(key)
        except ValueError:
            return None
        return index if -len(container) <= index < len(container) else None
    if isinstance(container, MutableMapping):
        return key
    return None


def _can_descend(node: Any, key: str) -> bool:
    return isinstance(node, MutableMapping) or (
        isinstance(node, MutableSequence) and _slot(node, key) is not None
    )


def _write(container: Any, slot: Any, value: Any, undo: list | None) -> None:
    if undo is not None:
        if isinstance(container, MutableMapping) and slot not in container:
            undo.append((container, slot, MISSING))
        else:
            undo.append((container, slot, container[slot]))
    container[slot] = value


def _rollback(undo: list) -> None:
    for container, slot, previous in reversed(undo):
        if previous is MISSING:
            del container[slot]
        else:
            container[slot] = previous


def _set(obj: MutableMapping, dot_path: str, value: Any, replace: bool, undo: list | None) -> None:
    keys = dot_path.split(".")
    current = obj
    for key, next_key in zip(keys[:-1], keys[1:]):
        slot = _slot(current, key)
        if isinstance(current, MutableMapping) and key not in current:
            _write(current, slot, {}, undo)
        elif not _can_descend(current[slot], next_key):
            if not replace:
                raise PathConflictError(dot_path, key, current[slot])
            logger.debug("Replacing %s at '%s' with a dict to set '%s'",
                         type(current[slot]).__name__, key, dot_path)
            _write(current, slot, {}, undo)
        current = current[slot]
    _write(current, _slot(current, keys[-1]), value, undo)


@mixin_registry.register(category="paths")
def set_path(obj: MutableMapping, dot_path: str, value: Any, *, replace: bool = True) -> None:
    """
    Set a value in a nested dict via a dot-separated path, creating empty
    dicts for missing intermediate nodes.

    Lists are stepped into when the next segment is an in-range index, so
    "items.0.id" updates the first item in place. Any other existing node
    that cannot hold the next segment is replaced by a new dict when
    `replace` is True, otherwise PathConflictError is raised and nothing
    is written.
    """
    undo: list = []
    try:
        _set(obj, dot_path, value, replace, undo)
    except PathConflictError:
        _rollback(undo)
        raise


@mixin_registry.register(category="paths")
def unset_path(obj: MutableMapping, dot_path: str) -> Any:
    """
    Delete a key (or list item) via a dot-separated path.
    Returns the removed value, or MISSING if there was nothing to delete.
    """
    keys = dot_path.split(".")
    current = obj
    for key in keys[:-1]:
        slot = _slot(current, key)
        if slot is None or (isinstance(current, MutableMapping) and key not in current):
            return MISSING  # Key path does not exist; nothing to delete
        current = current[slot]
    slot = _slot(current, keys[-1])
    if slot is None:
        return MISSING
    if isinstance(current, MutableMapping):
        return current.pop(slot, MISSING)
    return current.pop(slot)


@mixin_registry.register(category="paths")
def extend_paths(obj: MutableMapping, attrs_by_path: Mapping[str, Any] | None,
                 *, replace: bool = True) -> MutableMapping:
    """
    Apply `set_path` for every {path: value} entry, in order.

    Usage:
        extend_paths(doc, {"owner.name": "Ada", "owner.id": 7})

    All or nothing: if any entry raises PathConflictError, the entries
    already applied are rolled back before it propagates.
    """
    if not attrs_by_path:
        return obj
    undo: list = []
    try:
        for dot_path, value in attrs_by_path.items():
            _set(obj, dot_path, value, replace, undo)
    except PathConflictError:
        _rollback(undo)
        raise
    return obj
