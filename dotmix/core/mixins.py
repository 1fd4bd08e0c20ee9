"""
Core definitions for the mixin registry and the chainable wrapper.

Every helper in dotmix registers itself here at import time, which is what
lets `chain(value)` expose it as a method.
"""
from dataclasses import dataclass
import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MixinDefinition:
    """
    A named helper function available on the shared namespace.

    Attributes:
        name: Unique name of the helper (e.g. "pluck_path").
        func: The function itself. Its first argument is the wrapped value
            when called through a Chain.
        description: First line of the function docstring.
        category: Grouping for listings (e.g. "paths", "collections").
    """
    name: str
    func: Callable
    description: str = ""
    category: str = "General"


class MixinRegistry:
    """
    Registry of named helper functions. Use `register` as a decorator, or
    `mixin` to merge a dict of functions in at once.
    """
    def __init__(self):
        self._mixins: dict[str, MixinDefinition] = {}

    def _add(self, name: str, func: Callable, category: str | None, override: bool) -> None:
        if not callable(func):
            raise ValueError(f"Mixin '{name}' must be callable, got {type(func).__name__}")
        if name in self._mixins and not override:
            raise ValueError(f"Mixin with name '{name}' is already registered.")
        doc = (func.__doc__ or "").strip()
        self._mixins[name] = MixinDefinition(
            name=name,
            func=func,
            description=doc.splitlines()[0] if doc else "",
            category=category or "General",
        )
        logger.debug("Registered mixin %s", name)

    def register(self, name: str | None = None, *, category: str | None = None):
        """
        Decorator to register a function under `name` (defaults to the
        function's own name, minus any trailing underscore).
        """
        def wrapper(func):
            self._add(name or func.__name__.rstrip("_"), func, category, override=False)
            return func
        return wrapper

    def mixin(self, functions: dict[str, Callable], *, override: bool = False) -> None:
        """Register several functions at once, keyed by name."""
        for name, func in functions.items():
            self._add(name, func, None, override=override)

    def __getitem__(self, name: str) -> Callable:
        """Allows dict-like access to registered functions"""
        if name not in self._mixins:
            raise KeyError(f"Mixin with name '{name}' not found.")
        return self._mixins[name].func

    def __contains__(self, name: object) -> bool:
        return name in self._mixins

    def get(self, name: str) -> Callable | None:
        """Retrieve a registered function by name."""
        definition = self._mixins.get(name)
        return definition.func if definition else None

    @property
    def all(self) -> dict[str, MixinDefinition]:
        """Get all registered mixin definitions."""
        return self._mixins


# Global mixin registry instance
mixin_registry = MixinRegistry()


class Chain:
    """
    Wraps a value so registered helpers can be called one after another.

    Usage:
        chain(rows).pluck_path("child.name").compact().value()
    """
    def __init__(self, wrapped: Any, registry: MixinRegistry | None = None):
        self._wrapped = wrapped
        self._registry = registry if registry is not None else mixin_registry

    def __getattr__(self, name: str) -> Callable[..., "Chain"]:
        if name.startswith("_"):
            raise AttributeError(name)
        func = self._registry.get(name)
        if func is None:
            raise AttributeError(f"'{type(self).__name__}' has no mixin named '{name}'")

        def method(*args, **kwargs) -> "Chain":
            return Chain(func(self._wrapped, *args, **kwargs), self._registry)
        method.__name__ = name
        method.__doc__ = func.__doc__
        return method

    def value(self) -> Any:
        """Unwrap the chained value."""
        return self._wrapped

    def __repr__(self) -> str:
        return f"Chain({self._wrapped!r})"


def chain(value: Any) -> Chain:
    """Wrap a value for chained calls."""
    return Chain(value)


def mixin(functions: dict[str, Callable], *, override: bool = False) -> None:
    """Add functions to the shared namespace, making them chainable."""
    mixin_registry.mixin(functions, override=override)
