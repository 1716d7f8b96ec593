from typing import Any, Callable, Dict, Iterable, Mapping, Union

KeySelector = Union[str, Callable[[Mapping[str, Any]], Any]]


def build_index(rows: Iterable[Mapping[str, Any]], key: KeySelector = "id") -> Dict[Any, Mapping[str, Any]]:
    """Map each row's key to the row.

    Later rows overwrite earlier ones sharing a key. Rows without a key are
    skipped. Nothing is deduplicated or reported.
    """
    select_key = (lambda row: row.get(key)) if isinstance(key, str) else key
    index = {}
    for row in rows or ():
        row_key = select_key(row)
        if row_key is None:
            continue
        try:
            index[row_key] = row
        except TypeError:
            continue
    return index


def lookup(index: Mapping[Any, Mapping[str, Any]], key: Any):
    if key is None:
        return None
    try:
        return index.get(key)
    except TypeError:
        return None


__all__ = ["build_index", "lookup"]
