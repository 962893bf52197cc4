# ===== IMPORTS & DEPENDENCIES =====
import math
from typing import Any, Dict, Iterable, List, Mapping


# ===== UTILITY FUNCTIONS =====

def clean_ids(values: Iterable[Any]) -> List[int]:
    """
    Deduplicates a list of game ids, keeping first-seen order and dropping
    anything that is not a finite positive integer (bools, NaN, 0, -3, 2.5, "x").
    """
    seen = set()
    ids: List[int] = []
    for value in values or []:
        if isinstance(value, bool):
            continue
        if isinstance(value, float):
            if not math.isfinite(value) or not value.is_integer():
                continue
            value = int(value)
        elif isinstance(value, str):
            try:
                value = int(value.strip())
            except ValueError:
                continue
        elif not isinstance(value, int):
            continue
        if value > 0 and value not in seen:
            seen.add(value)
            ids.append(value)
    return ids


def reorder_by_ids(records: Iterable[Mapping[str, Any]], ids: Iterable[int]) -> List[Dict[str, Any]]:
    """
    Returns `records` in the order given by `ids`. IGDB does not preserve the
    order of an `id = (...)` filter; ids without a matching record are skipped.
    """
    by_id = {record.get('id'): record for record in records}
    return [by_id[game_id] for game_id in ids if game_id in by_id]
