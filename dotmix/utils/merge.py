"""
Deep merge, flatten and diff helpers for nested dicts.

Only plain mappings are recursed into; lists, strings, dates and other
objects are treated as leaf values.
"""
from collections.abc import Mapping, MutableMapping
from typing import Any

from dotmix.core.mixins import mixin_registry
from dotmix.utils.collection import is_equal
from dotmix.utils.dict_path import extend_paths, is_plain_mapping


@mixin_registry.register(category="merge")
def extend_deep(target: MutableMapping, source: Mapping | None) -> MutableMapping:
    """
    Recursively merge `source` into `target` and return `target`.

    Nested mappings are merged key by key into fresh dicts on the target, so
    the source is never aliased. Anything else, lists included, replaces the
    target's value outright.
    """
    if not source:
        return target
    for key, value in source.items():
        if is_plain_mapping(value):
            if not isinstance(target.get(key), MutableMapping):
                target[key] = {}
            extend_deep(target[key], value)
        else:
            target[key] = value
    return target


@mixin_registry.register(category="merge")
def flatten(obj: Mapping) -> dict[str, Any]:
    """
    Takes a nested dict and returns a flat dict keyed with path names.

    Useful for whitelisting which paths a client may update: flatten the
    request body, then check each key.

        {"level1": {"level2": "value"}} -> {"level1.level2": "value"}

    Empty nested dicts are kept as values so the result can be rebuilt
    with `unflatten`.
    """
    flat: dict[str, Any] = {}
    for key, value in obj.items():
        if is_plain_mapping(value) and value:
            for child_key, child_value in flatten(value).items():
                flat[f"{key}.{child_key}"] = child_value
        else:
            flat[str(key)] = value
    return flat


@mixin_registry.register(category="merge")
def unflatten(flat: Mapping[str, Any], *, replace: bool = True) -> dict[str, Any]:
    """Rebuild a nested dict from {path: value} pairs."""
    return extend_paths({}, flat, replace=replace)


@mixin_registry.register(category="merge")
def get_changes(before: Mapping, after: Mapping) -> dict[str, Any]:
    """
    Paths in `after` that are new or whose value differs from `before`.

    Paths only present in `before` are not reported: this lists additions
    and changes, not removals.
    """
    old = flatten(before or {})
    changes = {}
    for key, value in flatten(after or {}).items():
        if key not in old or not is_equal(old[key], value):
            changes[key] = value
    return changes
