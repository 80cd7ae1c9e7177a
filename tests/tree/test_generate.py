from __future__ import annotations

from src.tree.generate import generate_tree
from src.tree.lazy import to_nested


def countdown(n: int) -> list[int]:
    return [n - 1, n - 2] if n >= 2 else ([0] if n == 1 else [])


def test_children_follow_successor_order() -> None:
    tree = generate_tree(3, countdown)
    assert tree.payload() == 3
    assert [c.payload() for c in tree.children()] == [2, 1]


def test_terminal_board_is_leaf() -> None:
    tree = generate_tree(0, countdown)
    assert tree.children() == ()


def test_finite_game_expands_fully() -> None:
    tree = generate_tree(2, countdown)
    assert to_nested(tree) == (2, [(1, [(0, [])]), (0, [])])


def test_generation_is_lazy(counter) -> None:
    succ = counter(lambda n: [n + 1])
    tree = generate_tree(0, succ)
    assert succ.calls == []

    node = tree
    for _ in range(5):
        node = node.children()[0]
    assert node.payload() == 5
    assert succ.calls == [0, 1, 2, 3, 4]
