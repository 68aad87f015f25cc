"""Recover sibling order from the service's opaque order keys.

The service attaches an opaque printable string to every bucket and task. It
documents no structure for these keys, only that comparing them yields the
board order. Here a larger code point at the decisive position means the
entity is placed earlier, and a key that runs out of characters sorts after
the keys that continue past it.

Two strategies are available:

``pivot``
    Looks at a single character position: the first one where the keys do
    not all agree. Exact for any pair of keys and for sets whose members all
    differ at that same position. A set of three or more keys where some
    share the pivot character but diverge later keeps those tied keys in
    input order instead of comparing them further.

``lexicographic``
    Full character-by-character comparison with the same conventions. Agrees
    with ``pivot`` on every pair, and also orders the tied groups above.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Literal, TypeVar

T = TypeVar("T")
OrderStrategy = Literal["pivot", "lexicographic"]

# Below every real character code.
_EXHAUSTED = -1


def _distinct(keys: Iterable[str]) -> list[str]:
    return list(dict.fromkeys(keys))


def find_pivot_position(keys: Iterable[str]) -> int:
    """Return the first position at which *keys* do not all share a character.

    When every key agrees over the shortest key's length, that length itself
    is returned.
    """
    distinct = _distinct(keys)
    if not distinct:
        return 0
    shortest = min(len(key) for key in distinct)
    first = distinct[0]
    for position in range(shortest):
        if any(key[position] != first[position] for key in distinct[1:]):
            return position
    return shortest


def _pivot_order(keys: list[str]) -> list[str]:
    pivot = find_pivot_position(keys)

    def code_at_pivot(key: str) -> int:
        return ord(key[pivot]) if len(key) > pivot else _EXHAUSTED

    return sorted(keys, key=code_at_pivot, reverse=True)


def _lexicographic_order(keys: list[str]) -> list[str]:
    # Descending string order already puts "abx" before "ab".
    return sorted(keys, reverse=True)


def rank_order_keys(keys: Iterable[str], *, strategy: OrderStrategy = "pivot") -> dict[str, int]:
    """Assign each distinct key a rank, 0 meaning "comes first".

    An empty input yields an empty mapping.
    """
    distinct = _distinct(keys)
    if not distinct:
        return {}
    if len(distinct) == 1:
        return {distinct[0]: 0}

    if strategy == "pivot":
        ordered = _pivot_order(distinct)
    elif strategy == "lexicographic":
        ordered = _lexicographic_order(distinct)
    else:
        raise ValueError(f"Unknown order strategy: {strategy!r}")
    return {key: rank for rank, key in enumerate(ordered)}


def sort_by_order_key(
    items: Iterable[T],
    *,
    key: Callable[[T], str],
    strategy: OrderStrategy = "pivot",
) -> list[T]:
    """Return *items* sorted by the rank of their order key (stable)."""
    materialized = list(items)
    ranks = rank_order_keys((key(item) for item in materialized), strategy=strategy)
    return sorted(materialized, key=lambda item: ranks[key(item)])
