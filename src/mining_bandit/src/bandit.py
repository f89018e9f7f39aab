from abc import ABC, abstractmethod

import numpy as np


class FactoredBandit[ACTION, ACTION_SPACE, REWARDS, GROUPS, RULE](ABC):
    """Interface for a multi-agent bandit whose reward factors over agent groups."""

    @abstractmethod
    def sample_r(
        self,
        action: ACTION,
        rng: np.random.Generator,
    ) -> REWARDS:
        """Sample one reward per local factor for the joint action."""
        ...

    @abstractmethod
    def get_regret(self, action: ACTION) -> float:
        """Deterministic gap between the optimal and the given joint action."""
        ...

    @abstractmethod
    def get_optimal_action(self) -> ACTION:
        """Joint action with the highest expected reward."""
        ...

    @abstractmethod
    def get_a(self) -> ACTION_SPACE:
        """Joint action space."""
        ...

    @abstractmethod
    def get_groups(self) -> GROUPS:
        """Agents each local factor depends on."""
        ...

    @abstractmethod
    def get_deterministic_rules(self) -> list[RULE]:
        """Noise-free local factors whose sum is maximized by the optimal action."""
        ...
