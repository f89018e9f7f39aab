from itertools import product

import numpy as np
import pytest

from mining_bandit.src.enumeration import (
    index_to_action,
    iter_digit_blocks,
    iter_joint_actions,
    iter_local_actions,
    joint_action_count,
)


def test_joint_actions_are_in_mixed_radix_order():
    space = (2, 3, 4)
    actions = list(iter_joint_actions(space))
    assert len(actions) == joint_action_count(space) == 24
    assert actions == list(product(range(2), range(3), range(4)))
    for index, action in enumerate(actions):
        assert index_to_action(index, space) == action


def test_index_to_action_rejects_out_of_range():
    with pytest.raises(ValueError):
        index_to_action(24, (2, 3, 4))
    with pytest.raises(ValueError):
        index_to_action(-1, (2, 3, 4))


@pytest.mark.parametrize("chunk_size", [1, 5, 24, 100])
def test_digit_blocks_cover_space_in_order(chunk_size):
    space = (2, 3, 4)
    rows = []
    starts = []
    for start, digits in iter_digit_blocks(space, chunk_size):
        assert digits.shape[1] == len(space)
        starts.append(start)
        rows.extend(tuple(int(a) for a in row) for row in digits)
    assert rows == list(iter_joint_actions(space))
    assert starts == list(range(0, 24, chunk_size))


def test_digit_blocks_reject_empty_chunks():
    with pytest.raises(ValueError):
        next(iter_digit_blocks((2, 2), 0))


def test_local_actions_follow_agent_order():
    space = (2, 4, 3)
    assert list(iter_local_actions(space, (0, 2))) == list(product(range(2), range(3)))
    assert np.asarray(list(iter_local_actions(space, (1,)))).ravel().tolist() == [0, 1, 2, 3]
