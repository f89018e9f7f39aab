from abc import ABC, abstractmethod

import numpy as np


class Policy[BANDIT, ACTION, REWARDS](ABC):
    """Interface for anything that picks a joint action each step."""

    @abstractmethod
    def get_action(
        self,
        bandit: BANDIT,
        rng: np.random.Generator,
    ) -> ACTION:
        """Choose the joint action to play."""
        ...

    def observe(self, action: ACTION, rewards: REWARDS) -> None:
        """Receive the rewards of the last action; non-learning policies ignore them."""
        del action, rewards
