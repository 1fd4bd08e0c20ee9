"""
Runtime context and logging for dotmix.
"""
from __future__ import annotations

from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path
import logging
from typing import Any

# triggers decorators, registering every helper into the mixin registry
import dotmix.utils.collection  # pylint: disable=unused-import
import dotmix.utils.merge  # pylint: disable=unused-import
import dotmix.utils.parse  # pylint: disable=unused-import
import dotmix.table  # pylint: disable=unused-import

from dotmix.core import paths
from dotmix.core.mixins import Chain, mixin_registry
from dotmix.core.settings import load_settings, Settings
from dotmix.utils.collection import fetch
from dotmix.utils.dict_path import extend_paths, set_path


def log(*args: Any, logger: logging.Logger | None = None) -> None:
    """
    Alias for logging at INFO level, space-joining the arguments.
    Silent when no handler is configured; never raises.
    """
    target = logger or logging.getLogger("dotmix")
    target.info(" ".join(["%s"] * len(args)), *args)


mixin_registry.register(category="diagnostics")(log)


@dataclass
class Context:
    """Settings and logger shared by the CLI and library callers."""
    settings_dir: Path
    settings: Settings
    logger: logging.Logger

    def log(self, *args: Any) -> None:
        """Log through this context's logger."""
        log(*args, logger=self.logger)

    def fetch(self, collection: Any, dot_path: str, value: Any) -> Any:
        """`fetch` using the configured comparison mode."""
        return fetch(collection, dot_path, value, strict=not self.settings.loose_equality)

    def set_path(self, obj: MutableMapping, dot_path: str, value: Any) -> None:
        """`set_path` using the configured conflict policy."""
        set_path(obj, dot_path, value, replace=self.settings.replace_conflicts)

    def extend_paths(self, obj: MutableMapping, attrs_by_path: dict | None) -> MutableMapping:
        """`extend_paths` using the configured conflict policy."""
        return extend_paths(obj, attrs_by_path, replace=self.settings.replace_conflicts)

    def chain(self, value: Any) -> Chain:
        """Wrap a value for chained calls."""
        return Chain(value)


def build_context(
    *,
    settings_dir: Path | None = None,
    verbose: bool = False,
) -> Context:
    """Builds and returns a Context for dotmix."""
    # 1. Settings
    if settings_dir is not None:
        settings_dir = settings_dir.expanduser().resolve()
    else:
        settings_dir = paths.default_settings_dir()
    settings = load_settings(settings_dir)
    verbose = verbose or settings.verbose
    # 2. Logging
    logger = logging.getLogger("dotmix")
    if not logging.getLogger().hasHandlers():
        logging.basicConfig(
            level=logging.DEBUG if verbose else logging.INFO,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    return Context(settings_dir=settings_dir, settings=settings, logger=logger)
