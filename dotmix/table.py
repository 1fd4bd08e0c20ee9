"""
Tabular export: nested records become rows with dot-path columns.
"""
from collections.abc import Mapping
from typing import Any, TYPE_CHECKING

from dotmix.core.mixins import mixin_registry
from dotmix.utils.collection import map_
from dotmix.utils.merge import flatten

if TYPE_CHECKING:
    import pandas as pd


@mixin_registry.register(category="export")
def to_dataframe(records: Any) -> "pd.DataFrame":
    """
    Flatten each record and build a DataFrame, one row per record.
    Columns are the union of all flattened paths, in first-seen order.

        [{"id": 1, "owner": {"name": "Ada"}}] -> columns ["id", "owner.name"]

    A single mapping is treated as a one-row table.
    """
    import pandas as pd  # pylint: disable=import-outside-toplevel
    if isinstance(records, Mapping):
        records = [records]
    rows = map_(records, lambda r: flatten(r) if isinstance(r, Mapping) else {"value": r})
    columns: dict[str, None] = {}
    for row in rows:
        columns.update(dict.fromkeys(row))
    return pd.DataFrame(rows, columns=list(columns))
