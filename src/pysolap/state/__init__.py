"""State/store layer.

:class:`EnumUnitStore` is the single place where per-unit records are
merged. Records only grow: incoming fields overwrite same-named fields and
leave everything else in place.
"""

from pysolap.state.aggregate import aggregate_to_county
from pysolap.state.store import EnumUnitStore, collect_values, merge_records, paired_values

__all__ = ["EnumUnitStore", "aggregate_to_county", "collect_values", "merge_records", "paired_values"]
