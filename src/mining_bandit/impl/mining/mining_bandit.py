from collections.abc import Sequence

import numpy as np
import structlog

from mining_bandit.impl.mining.production import ProductionModel
from mining_bandit.impl.mining.topology import Topology
from mining_bandit.src.bandit import FactoredBandit
from mining_bandit.src.enumeration import (
    index_to_action,
    iter_digit_blocks,
    iter_local_actions,
    joint_action_count,
)
from mining_bandit.src.types import Action, ActionSpace, LocalRewardRule, PartialKeys

log = structlog.get_logger(__name__)

SEARCH_CHUNK_SIZE = 1 << 18


class MiningBandit(
    FactoredBandit[
        Action,
        ActionSpace,
        np.ndarray,
        tuple[PartialKeys, ...],
        LocalRewardRule,
    ]
):
    """
    Villages send all their workers to one of the mines they are connected to.

    Each mine produces `productivity * 1.03**workers` minerals when it receives
    workers. Outputs are divided by the largest total output any joint action
    can produce, so each mine yields a number in [0, 1] and the optimal joint
    action yields 1 in total. That number is the success probability of an
    independent Bernoulli draw per mine, which is the reward observed by a
    learner. Sampled rewards can sum to more than 1 for any action; only
    their expectation is bounded by the optimum.

    The optimum is found at construction by evaluating every joint action; the
    first maximizer in mixed-radix order wins ties.
    """

    def __init__(
        self,
        action_space: Sequence[int],
        workers_per_village: Sequence[int],
        productivity_per_mine: Sequence[float],
        chunk_size: int = SEARCH_CHUNK_SIZE,
    ):
        if len(action_space) != len(workers_per_village):
            raise ValueError(
                f"Action space has {len(action_space)} villages but {len(workers_per_village)} worker counts were given."
            )
        self.topology = Topology.from_action_space(tuple(int(n) for n in action_space), len(productivity_per_mine))
        self.model = ProductionModel(self.topology, workers_per_village, productivity_per_mine)
        log.debug(
            "mining_bandit_initializing",
            n_villages=self.topology.village_count,
            n_mines=self.topology.mine_count,
            n_joint_actions=joint_action_count(self.topology.action_space),
        )
        self._optimal, self._reward_norm = self._find_optimum(chunk_size)
        log.info("optimum_found", optimal_action=self._optimal, reward_norm=self._reward_norm)

    def _find_optimum(self, chunk_size: int) -> tuple[Action, float]:
        action_space = self.topology.action_space
        best_value = -np.inf
        best_index = 0
        for start, digits in iter_digit_blocks(action_space, chunk_size):
            totals = self.model.batch_total_output(digits)
            idx = int(np.argmax(totals))
            if totals[idx] > best_value:
                best_value = float(totals[idx])
                best_index = start + idx
            log.debug("optimum_search_chunk", start=start, size=len(totals), best_value=best_value)

        optimal = index_to_action(best_index, action_space)
        log.debug("optimum_index", index=best_index)
        # Scalar evaluation, so that regret of the optimum is exactly zero.
        return optimal, self.model.total_output(optimal)

    @property
    def reward_norm(self) -> float:
        """Total output of the optimal joint action."""
        return self._reward_norm

    @property
    def workers_per_village(self) -> tuple[int, ...]:
        return self.model.workers_per_village

    @property
    def productivity_per_mine(self) -> tuple[float, ...]:
        return self.model.productivity_per_mine

    def get_production(self, action: Sequence[int]) -> list[float]:
        """Unnormalized output of each mine."""
        return self.model.production(action)

    def get_expected_rewards(self, action: Sequence[int]) -> np.ndarray:
        """Bernoulli success probability of each mine for the joint action."""
        production = np.asarray(self.model.production(action), dtype=np.float64)
        if self._reward_norm == 0.0:
            return np.zeros_like(production)
        return production / self._reward_norm

    def get_expected_reward(self, action: Sequence[int]) -> float:
        return float(np.sum(self.get_expected_rewards(action)))

    def sample_r(
        self,
        action: Sequence[int],
        rng: np.random.Generator,
    ) -> np.ndarray:
        """Draw one Bernoulli reward (0.0 or 1.0) per mine."""
        probs = self.get_expected_rewards(action)
        return (rng.random(probs.shape[0]) < probs).astype(np.float64)

    def get_regret(self, action: Sequence[int], normalized: bool = False) -> float:
        """Deterministic regret of the joint action, bypassing sampling noise.

        Unnormalized by default; with `normalized=True` the regret is divided
        by the reward norm, i.e. measured in expected reward units.
        """
        regret = self._reward_norm - self.model.total_output(action)
        if normalized:
            return regret / self._reward_norm if self._reward_norm > 0.0 else 0.0
        return regret

    def get_optimal_action(self) -> Action:
        return self._optimal

    def get_a(self) -> ActionSpace:
        return self.topology.action_space

    def get_groups(self) -> tuple[PartialKeys, ...]:
        """For each mine, the villages that can send workers to it."""
        return self.topology.villages_per_mine

    def get_deterministic_rules(self) -> list[LocalRewardRule]:
        """One rule per mine and local action of the villages connected to it.

        Values are the unnormalized mine outputs, without sampling noise.
        Maximizing the sum of matching rules recovers the optimal action.
        """
        action_space = self.topology.action_space
        rules: list[LocalRewardRule] = []
        for mine, villages in enumerate(self.topology.villages_per_mine):
            for local_action in iter_local_actions(action_space, villages):
                workers = sum(
                    self.model.workers_per_village[v]
                    for v, a in zip(villages, local_action)
                    if self.topology.mine_for(v, a) == mine
                )
                rules.append(
                    LocalRewardRule(
                        villages=villages,
                        action=local_action,
                        value=self.model.mine_output(mine, workers),
                    )
                )
        log.debug("deterministic_rules_built", n_rules=len(rules))
        return rules


def evaluate_rules(rules: Sequence[LocalRewardRule], action: Sequence[int]) -> float:
    """Sum of the values of every rule matching the joint action."""
    action = tuple(action)
    return sum(rule.value for rule in rules if rule.matches(action))
