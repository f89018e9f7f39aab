"""Mixed-radix enumeration of joint action spaces.

Joint actions are ordered as a mixed-radix number whose most significant digit
is agent 0, which is the order `itertools.product` yields them in. Index `k`
of a space therefore always denotes the same joint action, and "first in
enumeration order" is a well defined tie-break.
"""

from collections.abc import Iterator
from itertools import product
from math import prod

import numpy as np

from mining_bandit.src.types import Action, ActionSpace, PartialKeys


def joint_action_count(action_space: ActionSpace) -> int:
    """Number of joint actions in the space."""
    return prod(action_space)


def iter_joint_actions(action_space: ActionSpace) -> Iterator[Action]:
    """Yield every joint action in ascending mixed-radix order."""
    return product(*[range(n) for n in action_space])


def iter_local_actions(
    action_space: ActionSpace,
    agents: PartialKeys,
) -> Iterator[Action]:
    """Yield every local joint action of `agents`, in ascending order."""
    return product(*[range(action_space[agent]) for agent in agents])


def index_to_action(index: int, action_space: ActionSpace) -> Action:
    if not 0 <= index < joint_action_count(action_space):
        raise ValueError(f"Index {index} is outside the joint action space {action_space}.")
    digits = []
    for n in reversed(action_space):
        index, a = divmod(index, n)
        digits.append(a)
    return tuple(reversed(digits))


def iter_digit_blocks(
    action_space: ActionSpace,
    chunk_size: int,
) -> Iterator[tuple[int, np.ndarray]]:
    """Yield `(start, digits)` blocks covering the whole space in order.

    `digits` has shape (block_len, N_agents); row `r` is the joint action with
    mixed-radix index `start + r`.
    """
    if chunk_size < 1:
        raise ValueError("chunk_size must be positive.")
    total = joint_action_count(action_space)
    for start in range(0, total, chunk_size):
        indices = np.arange(start, min(start + chunk_size, total), dtype=np.int64)
        digits = np.unravel_index(indices, action_space)
        yield start, np.stack(digits, axis=1)
