"""
dotmix: dot-path helpers for nested Python data.

Deep get/set, deep merge, flatten, find-by-path and pluck-by-path, all
registered on a shared mixin registry so they can be called directly or
chained:

    from dotmix import chain, path
    path(doc, "owner.name", "anonymous")
    chain(rows).pluck_path("owner.name").compact().value()
"""
from importlib.metadata import version, PackageNotFoundError

from dotmix.core.mixins import Chain, MixinRegistry, chain, mixin, mixin_registry
from dotmix.core.runtime import Context, build_context, log
from dotmix.core.settings import Settings, load_settings, save_settings
from dotmix.table import to_dataframe
from dotmix.utils.collection import (
    compact,
    each,
    fetch,
    filter_,
    find,
    is_equal,
    loose_equals,
    map_,
    pluck_path,
    reject,
)
from dotmix.utils.dict_path import (
    MISSING,
    PathConflictError,
    extend_paths,
    has_path,
    is_plain_mapping,
    path,
    set_path,
    unset_path,
)
from dotmix.utils.merge import extend_deep, flatten, get_changes, unflatten
from dotmix.utils.parse import capitalize

try:
    __version__ = version("dotmix")
except PackageNotFoundError:
    __version__ = "unknown"
__app_name__ = "dotmix"

__all__ = [
    "MISSING",
    "Chain",
    "Context",
    "MixinRegistry",
    "PathConflictError",
    "Settings",
    "build_context",
    "capitalize",
    "chain",
    "compact",
    "each",
    "extend_deep",
    "extend_paths",
    "fetch",
    "filter_",
    "find",
    "flatten",
    "get_changes",
    "has_path",
    "is_equal",
    "is_plain_mapping",
    "load_settings",
    "log",
    "loose_equals",
    "map_",
    "mixin",
    "mixin_registry",
    "path",
    "pluck_path",
    "reject",
    "save_settings",
    "set_path",
    "to_dataframe",
    "unflatten",
    "unset_path",
]
