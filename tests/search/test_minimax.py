from __future__ import annotations

import pytest

from src.search.errors import DepthExceeded
from src.search.minimax import SearchStats, evaluate, maximize, minimize, select_best
from src.tree.generate import generate_tree
from src.tree.lazy import from_nested
from src.tree.prune import prune


def fixed_tree():
    # root -> A(3, 5), B(6, 2)
    return from_nested((0, [(0, [3, 5]), (0, [6, 2])]))


def test_known_tree_values() -> None:
    root = fixed_tree()
    a, b = root.children()
    assert minimize(a) == 3
    assert minimize(b) == 2
    assert maximize(root) == 3


def test_known_tree_selects_first_child() -> None:
    idx, value = select_best(fixed_tree())
    assert (idx, value) == (0, 3)


def test_leaf_returns_payload_for_both_roles() -> None:
    leaf = from_nested(9)
    assert maximize(leaf) == 9
    assert minimize(leaf) == 9


def test_evaluate_alternates_roles() -> None:
    tree = from_nested((0, [(0, [(0, [1, 8]), (0, [4, 6])])]))
    # max(min(max(1, 8), max(4, 6))) = min(8, 6) = 6
    assert evaluate(tree, True) == 6
    # min(max(min(1, 8), min(4, 6))) = max(1, 4) = 4
    assert evaluate(tree, False) == 4


def test_tie_break_prefers_leftmost() -> None:
    tree = from_nested((0, [(0, [7, 9]), (0, [8, 7]), (0, [7])]))
    for _ in range(5):
        assert select_best(tree) == (0, 7)


def test_later_strictly_better_child_wins() -> None:
    tree = from_nested((0, [(0, [1]), (0, [4]), (0, [4])]))
    assert select_best(tree) == (1, 4)


def test_terminal_root_has_no_move() -> None:
    assert select_best(from_nested("done")) == (None, "done")


def test_works_with_any_ordered_value() -> None:
    tree = from_nested(("", [("", ["b", "d"]), ("", ["c", "e"])]))
    assert select_best(tree) == (1, "c")


def test_stats_count_nodes_and_leaves() -> None:
    stats = SearchStats()
    select_best(fixed_tree(), stats=stats)
    assert stats.nodes == 7
    assert stats.leaves == 4
    assert stats.seldepth == 2
    assert stats.cut_short is False


def test_should_stop_keeps_best_so_far_and_skips_rest() -> None:
    root = from_nested((0, [(0, [3, 5]), (0, [6, 2]), (0, [9])]))
    stats = SearchStats()
    idx, value = select_best(root, stats=stats, should_stop=lambda: True)
    assert (idx, value) == (0, 3)
    assert stats.cut_short is True
    assert not root.children()[1].expanded


def test_unpruned_infinite_tree_hits_ceiling() -> None:
    tree = generate_tree(0, lambda n: [n + 1])
    with pytest.raises(DepthExceeded):
        maximize(tree, max_plies=50)


def test_depth_exceeded_is_a_recursion_error() -> None:
    tree = generate_tree(0, lambda n: [n + 1])
    with pytest.raises(RecursionError):
        select_best(tree, max_plies=20)


def test_deep_pruned_chain_evaluates_without_recursion() -> None:
    tree = prune(generate_tree(2000, lambda n: [n - 1] if n > 0 else []), 2000)
    assert maximize(tree, max_plies=2000) == 0


def test_ceiling_counts_plies_below_the_start() -> None:
    tree = prune(generate_tree(0, lambda n: [n + 1]), 10)
    assert maximize(tree, max_plies=10) == 10
    with pytest.raises(DepthExceeded):
        maximize(tree, max_plies=9)
