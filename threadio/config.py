"""Parsing of colon separated key=value configuration strings."""

from __future__ import annotations


def config_key_value_pairs(text: str) -> dict[str, str]:
    """Parse ``key=value:key:...`` into a dict ordered by key.

    A bare first entry holding '/' or '.' is taken as ``fileName``. Parsing
    stops at the first empty entry, and the first value given for a key wins.
    """
    result: dict[str, str] = {}
    for position, item in enumerate(text.split(":")):
        if not item:
            break
        key, separator, value = item.partition("=")
        if separator:
            result.setdefault(key, value)
        elif position == 0 and ("/" in item or "." in item):
            result.setdefault("fileName", item)
        else:
            result.setdefault(item, "")
    return dict(sorted(result.items()))