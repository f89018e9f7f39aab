from dataclasses import dataclass
from typing import NamedTuple

import numpy as np

Action = tuple[int, ...]  # (N_villages,) one local action per village
ActionSpace = tuple[int, ...]  # (N_villages,) number of local actions per village
PartialKeys = tuple[int, ...]  # sorted agent indices taking part in a local factor


@dataclass(frozen=True)
class LocalRewardRule:
    """Deterministic value of one local factor for one local joint action.

    - villages: indices of the villages the factor depends on, ascending
    - action: local action of each village in `villages`, same order
    - value: unnormalized output of the factor under that local action
    """

    villages: PartialKeys
    action: Action
    value: float

    def matches(self, joint_action: Action) -> bool:
        """Whether the joint action assigns this rule's local action."""
        return all(joint_action[v] == a for v, a in zip(self.villages, self.action))


class MiningParameters(NamedTuple):
    """Constructor arguments for a mining bandit, in constructor order."""

    action_space: ActionSpace
    workers_per_village: list[int]
    productivity_per_mine: list[float]


@dataclass(frozen=True)
class StepResult:
    """One evaluation step: the action played, its sampled rewards and true regret."""

    action: Action
    rewards: np.ndarray
    regret: float
