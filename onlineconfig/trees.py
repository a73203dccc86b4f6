"""Binary trees built level by level from values, and two ways to compare them."""

from __future__ import annotations

import argparse
import random
import time
from collections import deque
from collections.abc import Sequence
from dataclasses import dataclass

DEFAULT_SIZE = 5_000_000


@dataclass(eq=False)
class TreeNode:
    """A node of a binary tree of integers."""

    val: int = 0
    left: TreeNode | None = None
    right: TreeNode | None = None


def generate_values(count: int, rng: random.Random | None = None) -> list[int]:
    """Return ``count`` integers drawn uniformly from 1 to ``count`` inclusive."""
    if count < 0:
        raise ValueError("count must not be negative")
    if count == 0:
        return []
    rng = rng if rng is not None else random.Random()
    return [rng.randint(1, count) for _ in range(count)]


def generate_tree(values: Sequence[int]) -> TreeNode:
    """Build a tree whose root holds 0 and whose nodes take ``values`` in
    breadth-first order, two children at a time.

    When the number of values is odd, the last right child holds 0.
    """
    root = TreeNode(0)
    pending: deque[TreeNode] = deque([root])
    for start in range(0, len(values), 2):
        current = pending.popleft()
        current.left = TreeNode(values[start])
        current.right = TreeNode(values[start + 1] if start + 1 < len(values) else 0)
        pending.append(current.left)
        pending.append(current.right)
    return root


def generate_random_tree(count: int, rng: random.Random | None = None) -> TreeNode:
    """Build a tree from ``count`` random values, as :func:`generate_values` draws them."""
    return generate_tree(generate_values(count, rng))


def is_same_tree_agz(p: TreeNode | None, q: TreeNode | None) -> bool:
    """Whether two trees have the same shape and the same values."""
    if p is None and q is None:
        return True
    if (p is not None and q is None) or (p is None and q is not None):
        return False
    assert p is not None and q is not None
    if p.val != q.val:
        return False
    return is_same_tree_agz(p.left, q.left) and is_same_tree_agz(p.right, q.right)


def is_same_tree_leetcode(p: TreeNode | None, q: TreeNode | None) -> bool:
    """Whether two trees have the same shape and the same values."""
    if p is None and q is None:
        return True
    elif p is None or q is None:
        return False
    elif p.val != q.val:
        return False
    else:
        return is_same_tree_leetcode(p.left, q.left) and is_same_tree_leetcode(
            p.right, q.right
        )


def _time_comparison(name: str, compare, size: int, rng: random.Random) -> None:
    values = generate_values(size, rng)
    tree1 = generate_tree(values)
    tree2 = generate_random_tree(size, rng)
    if size >= 10:
        values[size - 10] -= 1
    tree3 = generate_tree(values)
    started = time.perf_counter()
    compare(tree1, tree1)
    compare(tree1, tree2)
    compare(tree1, tree3)
    elapsed_ms = int((time.perf_counter() - started) * 1000)
    print(f"{name}: {elapsed_ms}ms")


def main(argv: Sequence[str] | None = None) -> int:
    """Time both comparison functions on generated trees."""
    parser = argparse.ArgumentParser(description="Compare tree equality checks.")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE)
    args = parser.parse_args(argv)
    if args.size < 0:
        parser.error("size must not be negative")
    rng = random.Random()
    _time_comparison("AGZ", is_same_tree_agz, args.size, rng)
    _time_comparison("LeetCode", is_same_tree_leetcode, args.size, rng)
    return 0