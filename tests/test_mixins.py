"""
Tests for the mixin registry, chaining and the log alias.
"""
import logging

import pytest

from dotmix import MISSING, Chain, MixinRegistry, chain, log, mixin, mixin_registry


def test_every_helper_is_registered():
    for name in [
        "path", "set_path", "has_path", "unset_path", "extend_paths", "extend_deep",
        "flatten", "unflatten", "get_changes", "fetch", "pluck_path", "capitalize",
        "log", "each", "map", "find", "filter", "reject", "compact", "is_equal",
        "to_dataframe",
    ]:
        assert name in mixin_registry, name
    assert mixin_registry.all["to_dataframe"].category == "export"


def test_chain_plucks_then_drops_missing_values():
    rows = [{"id": 10, "name": "Name 1"}, {"id": 13}, {"id": 14, "name": "Name 4"}]
    result = chain(rows).pluck_path("name").compact().map(str.upper).value()
    assert result == ["NAME 1", "NAME 4"]


def test_chain_threads_mutating_helpers():
    doc = chain({}).extend_paths({"a.b": 1}).extend_deep({"a": {"c": 2}}).flatten().value()
    assert doc == {"a.b": 1, "a.c": 2}


def test_chain_unknown_name_raises_attribute_error():
    with pytest.raises(AttributeError, match="no mixin named 'nope'"):
        chain([]).nope()


def test_registry_rejects_duplicates_and_unknown_names():
    registry = MixinRegistry()

    @registry.register(category="test")
    def double_(x):
        """Double a number."""
        return x * 2

    assert registry["double"] is double_
    assert registry.all["double"].description == "Double a number."
    assert registry.all["double"].category == "test"
    assert registry.get("triple") is None
    with pytest.raises(ValueError, match="already registered"):
        registry.register("double")(lambda x: x)
    with pytest.raises(KeyError):
        registry["triple"]  # pylint: disable=pointless-statement
    assert Chain(4, registry).double().double().value() == 16


def test_mixin_adds_chainable_functions():
    registry = MixinRegistry()
    registry.mixin({"shout": lambda s: s.upper() + "!"})
    assert Chain("hi", registry).shout().value() == "HI!"
    with pytest.raises(ValueError):
        registry.mixin({"shout": str.lower})
    registry.mixin({"shout": str.lower}, override=True)
    assert Chain("HI", registry).shout().value() == "hi"


def test_global_mixin_registers_on_shared_namespace():
    name = "test_only_first_name"
    mixin({name: lambda rows: rows[0]["name"] if rows else MISSING}, override=True)
    assert chain([{"name": "Ada"}]).test_only_first_name().value() == "Ada"


def test_log_writes_space_joined_arguments(caplog):
    with caplog.at_level(logging.INFO, logger="dotmix"):
        log("hello", 1, {"a": 2})
    assert caplog.records[-1].getMessage() == "hello 1 {'a': 2}"


def test_log_uses_injected_logger(caplog):
    custom = logging.getLogger("custom.sink")
    with caplog.at_level(logging.INFO, logger="custom.sink"):
        log("x", "%d", logger=custom)
    assert caplog.records[-1].name == "custom.sink"
    assert caplog.records[-1].getMessage() == "x %d"


def test_log_never_raises_without_handlers():
    quiet = logging.getLogger("dotmix.quiet")
    quiet.propagate = False
    try:
        log("nothing", "listens", logger=quiet)
        log(logger=quiet)
    finally:
        quiet.propagate = True
