"""Helpers for building request bodies field by field."""

import time
from typing import Any, Iterable, Mapping, MutableMapping, Optional


def copy_present(
    target: MutableMapping[str, Any],
    source: Mapping[str, Any],
    keys: Iterable[str],
    *,
    rename: Optional[Mapping[str, str]] = None,
) -> MutableMapping[str, Any]:
    """Copy ``keys`` from ``source`` only when they hold a value.

    Missing keys and explicit ``None`` are both skipped, so the backend never
    sees ``"max_tokens": null``. Later keys overwrite earlier ones when
    ``rename`` maps two source keys onto the same target key.
    """
    rename = rename or {}
    for key in keys:
        value = source.get(key)
        if value is None:
            continue
        target[rename.get(key, key)] = value
    return target


def is_given(value: Any) -> bool:
    """Whether a JSON value counts as set.

    ``None``, ``False``, zero and ``""`` are unset; any list or object is set,
    empty ones included.
    """
    if isinstance(value, (list, Mapping)):
        return True
    return bool(value)


def now_millis() -> int:
    return int(time.time() * 1000)


def now_seconds() -> int:
    return int(time.time())
