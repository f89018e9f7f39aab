import numpy as np

from mining_bandit.src.bandit import FactoredBandit
from mining_bandit.src.policy import Policy
from mining_bandit.src.types import Action


class FixedPolicy(Policy[FactoredBandit, Action, np.ndarray]):
    """Always plays the same joint action; the bandit's optimum when none is given."""

    def __init__(self, action: list[int] | None = None):
        self.action = tuple(action) if action is not None else None

    def get_action(
        self,
        bandit: FactoredBandit,
        rng: np.random.Generator,
    ) -> Action:
        del rng
        if self.action is None:
            return bandit.get_optimal_action()
        return self.action
