"""
Utility functions and helpers for ytmusic-shell
String handling and safe navigation over untyped JSON trees
"""

from typing import Any, Iterable, Sequence, Union


PathKey = Union[str, int]


def nav(data: Any, path: Sequence[PathKey], default: Any = None) -> Any:
    """
    Walk a nested dict/list structure without raising

    String keys index dictionaries, integer keys index lists. Any missing key,
    out-of-range index, ``None`` along the way, or container of the wrong type
    ends the walk and returns ``default``.

    Args:
        data: Parsed JSON value to walk
        path: Sequence of keys and indices
        default: Value returned when the path cannot be followed

    Returns:
        The value at the end of the path, or ``default``

    Example:
        >>> nav({'a': [{'b': 1}]}, ['a', 0, 'b'])
        1
        >>> nav({'a': []}, ['a', 0, 'b']) is None
        True
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        if current is None:
            return default
    return current


def nav_list(data: Any, path: Sequence[PathKey]) -> list:
    """Like nav(), but always returns a list (empty unless the target is a list)"""
    value = nav(data, path)
    return value if isinstance(value, list) else []


def first_present(data: Any, paths: Iterable[Sequence[PathKey]]) -> Any:
    """
    Return the value of the first path that resolves to something truthy

    Args:
        data: Parsed JSON value to walk
        paths: Candidate paths in priority order

    Returns:
        First non-empty value found, or None
    """
    for path in paths:
        value = nav(data, path)
        if value:
            return value
    return None


def join_runs(runs: Any) -> str:
    """
    Join the text of a list of text runs

    Runs are the service's rich-text fragments (``{"text": "..."}``). Anything
    that is not a dict with string text is skipped.

    Args:
        runs: List of run dictionaries

    Returns:
        Concatenated text, empty string if nothing usable
    """
    if not isinstance(runs, list):
        return ""
    return "".join(
        run["text"] for run in runs
        if isinstance(run, dict) and isinstance(run.get("text"), str)
    )


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length with suffix

    Args:
        text: Original text
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncating

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    if truncate_length <= 0:
        return suffix[:max_length]

    return text[:truncate_length] + suffix
