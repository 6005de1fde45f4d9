from __future__ import annotations


def normalize_string(value: str | None) -> str:
    """
    Normalizes a string by stripping leading and trailing whitespace and converting to lowercase.

    Used for every identity comparison, so that ``"MagnusCarlsen"`` and
    ``" magnuscarlsen "`` refer to the same player.

    Parameters
    ----------
    value : str or None
        The input string to normalize. If None, an empty string is used.

    Returns
    -------
    str
        The normalized string.

    Examples
    --------
    >>> normalize_string("  Hikaru  ")
    'hikaru'
    >>> normalize_string(None)
    ''
    """
    return (value or "").strip().lower()
