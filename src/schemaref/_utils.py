"""Shared internal utilities."""

from typing import Hashable, Iterable


def unique[T: Hashable](items: Iterable[T]) -> list[T]:
    """Remove duplicates from an iterable, keeping the first occurrence of each item.

    Parameters
    ----------
    items
        The items to deduplicate. Each must be hashable.

    Returns
    -------
    list
        The distinct items, in the order in which they first appeared.

    Examples
    --------
    >>> unique(["User", "Profile", "User", "Settings", "Profile"])
    ['User', 'Profile', 'Settings']

    """
    return list(dict.fromkeys(items))
