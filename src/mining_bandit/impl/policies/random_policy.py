import numpy as np

from mining_bandit.src.bandit import FactoredBandit
from mining_bandit.src.policy import Policy
from mining_bandit.src.types import Action


class RandomPolicy(Policy[FactoredBandit, Action, np.ndarray]):
    """Plays a uniformly random joint action every step."""

    def get_action(
        self,
        bandit: FactoredBandit,
        rng: np.random.Generator,
    ) -> Action:
        return tuple(int(rng.integers(0, n)) for n in bandit.get_a())
