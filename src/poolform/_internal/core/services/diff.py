from typing import Any, Dict, Iterable, Mapping, Optional, TypedDict


class FieldDiff(TypedDict):
    old: Any
    new: Any


StateDiff = Dict[str, FieldDiff]


def diff_states(
    old: Mapping[str, Any],
    new: Mapping[str, Any],
    keys: Optional[Iterable[str]] = None,
) -> StateDiff:
    """
    Returns a diff of two flat state maps.

    Nested values (dicts and lists) are compared as a whole.

    Args:
        old: The prior state.
        new: The planned state.
        keys: The keys to compare. Defaults to the union of both maps keys.

    Returns:
        A dict of changed keys in the form of
        `{<key>: {"old": old_value, "new": new_value}}`
    """
    if keys is None:
        keys = sorted(set(old) | set(new))
    changes: StateDiff = {}
    for key in keys:
        old_value = old.get(key)
        new_value = new.get(key)
        if _is_empty(old_value) and _is_empty(new_value):
            continue
        if old_value != new_value:
            changes[key] = {"old": old_value, "new": new_value}
    return changes


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == [] or value == {}

