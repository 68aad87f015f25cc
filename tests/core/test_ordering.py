from __future__ import annotations

import pytest

from plannerclone.core.ordering import find_pivot_position, rank_order_keys, sort_by_order_key


def test_rank_order_keys_empty_input_returns_empty_mapping() -> None:
    assert rank_order_keys([]) == {}


@pytest.mark.parametrize("key", ["", "a", "8585269235419217847", " !"])
def test_rank_order_keys_singleton_is_rank_zero(key: str) -> None:
    assert rank_order_keys([key]) == {key: 0}


def test_rank_order_keys_duplicates_collapse_to_one_rank() -> None:
    assert rank_order_keys(["abc", "abc"]) == {"abc": 0}


def test_rank_order_keys_pair_ranks_higher_code_first() -> None:
    assert rank_order_keys(["abc", "abd"]) == {"abd": 0, "abc": 1}


def test_rank_order_keys_strict_prefix_sorts_after_extension() -> None:
    assert rank_order_keys(["ab", "abx"]) == {"abx": 0, "ab": 1}


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("aab", "aac"),
        ("Z", "a"),
        ("8585", "8586"),
        ("ab", "ab!"),
        ("", "x"),
        ("same-prefix-1", "same-prefix-2"),
    ],
)
def test_rank_order_keys_pair_matches_first_difference_descending(left: str, right: str) -> None:
    ranks = rank_order_keys([left, right])
    position = next(
        (i for i, (a, b) in enumerate(zip(left, right, strict=False)) if a != b),
        min(len(left), len(right)),
    )
    left_code = ord(left[position]) if len(left) > position else -1
    right_code = ord(right[position]) if len(right) > position else -1
    expected_first = left if left_code > right_code else right

    assert ranks[expected_first] == 0


def test_rank_order_keys_all_differ_at_pivot_is_exact() -> None:
    ranks = rank_order_keys(["xa", "xc", "xb", "x"])

    assert [key for key, _ in sorted(ranks.items(), key=lambda kv: kv[1])] == ["xc", "xb", "xa", "x"]


def test_pivot_strategy_keeps_input_order_for_keys_tied_at_pivot() -> None:
    # "ab1" and "ab2" share the pivot character; the heuristic does not look further.
    ranks = rank_order_keys(["ab1", "ab2", "ac"])

    assert ranks == {"ac": 0, "ab1": 1, "ab2": 2}


def test_lexicographic_strategy_orders_keys_tied_at_pivot() -> None:
    ranks = rank_order_keys(["ab1", "ab2", "ac"], strategy="lexicographic")

    assert ranks == {"ac": 0, "ab2": 1, "ab1": 2}


@pytest.mark.parametrize(("left", "right"), [("abc", "abd"), ("ab", "abx"), ("aab", "aac")])
def test_strategies_agree_on_pairs(left: str, right: str) -> None:
    assert rank_order_keys([left, right]) == rank_order_keys([left, right], strategy="lexicographic")


def test_rank_order_keys_rejects_unknown_strategy() -> None:
    with pytest.raises(ValueError, match="Unknown order strategy"):
        rank_order_keys(["a", "b"], strategy="random")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("keys", "expected"),
    [
        (["abc", "abd"], 2),
        (["ab", "abx"], 2),
        (["same", "same"], 4),
        (["a", "b"], 0),
        (["abc"], 3),
        ([], 0),
    ],
)
def test_find_pivot_position(keys: list[str], expected: int) -> None:
    assert find_pivot_position(keys) == expected


def test_sort_by_order_key_sorts_items_by_rank_and_is_stable() -> None:
    items = [("first-b", "b"), ("a", "a"), ("c", "c"), ("second-b", "b")]

    ordered = sort_by_order_key(items, key=lambda item: item[1])

    assert [name for name, _ in ordered] == ["c", "first-b", "second-b", "a"]
