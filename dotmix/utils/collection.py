"""
Collection helpers the path mixins are built on: iteration, search and
deep equality, plus find-by-path and pluck-by-path.

A collection is a sequence (iterated in order) or a mapping (iterated
over its values).
"""
from collections.abc import Iterable, Mapping, Sequence
import math
from numbers import Number
from typing import Any, Callable

from dotmix.core.mixins import mixin_registry
from dotmix.utils.dict_path import MISSING, path


def _values(collection: Any) -> Iterable:
    if collection is None or collection is MISSING:
        return ()
    if isinstance(collection, Mapping):
        return collection.values()
    return collection


@mixin_registry.register(category="collections")
def each(collection: Any, fn: Callable[[Any], Any]) -> Any:
    """Call `fn` on every item. Returns the collection unchanged."""
    for item in _values(collection):
        fn(item)
    return collection


@mixin_registry.register(category="collections")
def map_(collection: Any, fn: Callable[[Any], Any]) -> list:
    """Return a list of `fn(item)` for every item."""
    return [fn(item) for item in _values(collection)]


@mixin_registry.register(category="collections")
def find(collection: Any, predicate: Callable[[Any], bool]) -> Any:
    """First item for which `predicate` is truthy, or MISSING."""
    return next((item for item in _values(collection) if predicate(item)), MISSING)


@mixin_registry.register(category="collections")
def filter_(collection: Any, predicate: Callable[[Any], bool]) -> list:
    """Items for which `predicate` is truthy."""
    return [item for item in _values(collection) if predicate(item)]


@mixin_registry.register(category="collections")
def reject(collection: Any, predicate: Callable[[Any], bool]) -> list:
    """Items for which `predicate` is falsy."""
    return [item for item in _values(collection) if not predicate(item)]


@mixin_registry.register(category="collections")
def compact(collection: Any) -> list:
    """Drop MISSING and None entries."""
    return [item for item in _values(collection) if item is not None and item is not MISSING]


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


@mixin_registry.register(category="collections")
def is_equal(a: Any, b: Any) -> bool:
    """
    Deep value equality. Mappings compare by keys and values, sequences
    element-wise, bools never equal ints and NaN equals NaN.
    """
    if a is b:
        return True
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        if a.keys() != b.keys():
            return False
        return all(is_equal(a[k], b[k]) for k in a)
    if _is_sequence(a) and _is_sequence(b):
        if len(a) != len(b):
            return False
        return all(is_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, bool) != isinstance(b, bool):
        return False
    if isinstance(a, float) and isinstance(b, float) and math.isnan(a) and math.isnan(b):
        return True
    return bool(a == b)


def _to_number(value: Any) -> float | None:
    if isinstance(value, Number) and not isinstance(value, complex):
        return float(value)
    if isinstance(value, str):
        s = value.strip()
        if s == "":
            return 0.0  # "" == 0 in loose comparison
        if "_" in s:
            return None  # float() accepts "1_000", loose comparison does not
        try:
            number = float(s)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def loose_equals(a: Any, b: Any) -> bool:
    """
    Coercing comparison used by `fetch`:
    - None and MISSING equal each other (and nothing else)
    - a number equals a string holding the same number ("10" == 10)
    - bools compare as 0/1 against numbers and numeric strings
    Everything else falls back to ==.
    """
    a_absent = a is None or a is MISSING
    b_absent = b is None or b is MISSING
    if a_absent or b_absent:
        return a_absent and b_absent
    if isinstance(a, str) and isinstance(b, str):
        return a == b
    a_num = isinstance(a, Number)
    b_num = isinstance(b, Number)
    if a_num != b_num and (isinstance(a, str) or isinstance(b, str)):
        x, y = _to_number(a), _to_number(b)
        return x is not None and y is not None and x == y
    return bool(a == b)


@mixin_registry.register(category="paths")
def fetch(collection: Any, dot_path: str, value: Any, *, strict: bool = False) -> Any:
    """
    Find the first item whose value at `dot_path` matches `value`.
    Similar to 'find by ID' or 'find by slug'.

    Usage:
        fetch(rows, "id", 123)
        fetch(rows, "child.slug", "post-title")

    Matching is loose by default (10 matches "10"); pass strict=True for
    deep equality. Returns MISSING if nothing matches.
    """
    equals = is_equal if strict else loose_equals
    return find(collection, lambda item: equals(path(item, dot_path), value))


@mixin_registry.register(category="paths")
def pluck_path(collection: Any, dot_path: str) -> list:
    """
    Value at `dot_path` for every item. Same length and order as the
    collection, with MISSING where the path does not resolve.
    """
    return map_(collection, lambda item: path(item, dot_path))
