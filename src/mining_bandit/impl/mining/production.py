import math
from collections.abc import Sequence

import numpy as np
import structlog

from mining_bandit.impl.mining.topology import Topology
from mining_bandit.src.types import Action

log = structlog.get_logger(__name__)

WORKER_GROWTH = 1.03


class ProductionModel:
    """Deterministic mineral output of every mine for a joint action.

    A mine that receives `w > 0` workers produces `productivity * 1.03**w`,
    and nothing otherwise. Outputs are read from a per-mine table indexed by
    worker count, so single and batched evaluations return identical floats.
    """

    def __init__(
        self,
        topology: Topology,
        workers_per_village: Sequence[int],
        productivity_per_mine: Sequence[float],
    ):
        if len(workers_per_village) != topology.village_count:
            raise ValueError(
                f"Expected {topology.village_count} worker counts, got {len(workers_per_village)}."
            )
        if len(productivity_per_mine) != topology.mine_count:
            raise ValueError(
                f"Expected {topology.mine_count} productivities, got {len(productivity_per_mine)}."
            )
        try:
            if any(int(w) != w or w < 0 for w in workers_per_village):
                raise ValueError("Worker counts must be non-negative integers.")
            if any(not math.isfinite(p) or p < 0 for p in productivity_per_mine):
                raise ValueError("Productivities must be finite and non-negative.")
        except TypeError as e:
            raise ValueError(f"Worker counts and productivities must be numbers: {e}") from e

        self.topology = topology
        self.workers_per_village = tuple(int(w) for w in workers_per_village)
        self.productivity_per_mine = tuple(float(p) for p in productivity_per_mine)

        # output_table[m][w]: output of mine m with w workers
        self.output_table: list[np.ndarray] = []
        for mine, villages in enumerate(topology.villages_per_mine):
            max_workers = sum(self.workers_per_village[v] for v in villages)
            workers = np.arange(max_workers + 1)
            with np.errstate(over="ignore", invalid="ignore"):
                table = self.productivity_per_mine[mine] * np.power(WORKER_GROWTH, workers)
            table[0] = 0.0
            if not np.all(np.isfinite(table)):
                raise ValueError(
                    f"Worker counts too large: output of mine {mine} overflows with {max_workers} workers."
                )
            self.output_table.append(table)

        # tables grow with workers, so the last entries bound every joint total
        if not math.isfinite(sum(float(table[-1]) for table in self.output_table)):
            raise ValueError("Worker counts and productivities too large: total output overflows.")

    def validate_action(self, action: Sequence[int]) -> Action:
        """Return the action as a tuple, raising ValueError if it is not in the action space."""
        action_space = self.topology.action_space
        if len(action) != len(action_space):
            raise ValueError(f"Joint action has {len(action)} components, expected {len(action_space)}.")
        validated = []
        for village, (a, n) in enumerate(zip(action, action_space)):
            if int(a) != a or not 0 <= a < n:
                raise ValueError(f"Action {a!r} of village {village} is outside [0, {n - 1}].")
            validated.append(int(a))
        return tuple(validated)

    def workers_per_mine(self, action: Sequence[int]) -> list[int]:
        action = self.validate_action(action)
        workers = [0] * self.topology.mine_count
        for village, a in enumerate(action):
            workers[self.topology.mine_for(village, a)] += self.workers_per_village[village]
        return workers

    def mine_output(self, mine: int, workers: int) -> float:
        return float(self.output_table[mine][workers])

    def production(self, action: Sequence[int]) -> list[float]:
        """Unnormalized output of each mine."""
        return [
            self.mine_output(mine, workers)
            for mine, workers in enumerate(self.workers_per_mine(action))
        ]

    def total_output(self, action: Sequence[int]) -> float:
        total = 0.0
        for output in self.production(action):
            total += output
        return total

    def batch_total_output(self, digits: np.ndarray) -> np.ndarray:
        """Total output of each row of a (N_actions, N_villages) array of joint actions.

        Rows are assumed valid; mines are accumulated in the same order as
        `total_output`.
        """
        n_actions = digits.shape[0]
        rows = np.arange(n_actions)
        workers = np.zeros((n_actions, self.topology.mine_count), dtype=np.int64)
        for village in range(self.topology.village_count):
            workers[rows, village + digits[:, village]] += self.workers_per_village[village]

        totals = np.zeros(n_actions, dtype=np.float64)
        for mine, table in enumerate(self.output_table):
            totals += table[workers[:, mine]]
        return totals
