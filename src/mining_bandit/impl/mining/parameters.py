"""Random generation of mining bandit instances.

Parameters are drawn uniformly from:

- villages:              [5, 15]
- mines:                 villages + 3
- workers per village:   [1, 5]
- mines per village:     [2, 4], capped at the mines left from the village index
- productivity per mine: [0, 0.5]

The last village always reaches 4 mines, so every mine is reachable.
"""

import numpy as np
import structlog

from mining_bandit.impl.mining.mining_bandit import MiningBandit
from mining_bandit.impl.mining.topology import MAX_MINES_PER_VILLAGE, MIN_MINES_PER_VILLAGE
from mining_bandit.src.types import MiningParameters

log = structlog.get_logger(__name__)

MIN_VILLAGES = 5
MAX_VILLAGES = 15
EXTRA_MINES = 3
MIN_WORKERS = 1
MAX_WORKERS = 5
MAX_PRODUCTIVITY = 0.5


def make_mining_parameters(seed: int) -> MiningParameters:
    """Sample the constructor arguments of a MiningBandit; the same seed gives the same parameters."""
    if seed < 0:
        raise ValueError(f"Seed must be non-negative, got {seed}.")
    rng = np.random.default_rng(seed)

    n_villages = int(rng.integers(MIN_VILLAGES, MAX_VILLAGES + 1))
    n_mines = n_villages + EXTRA_MINES

    workers_per_village: list[int] = []
    action_space: list[int] = []
    for village in range(n_villages - 1):
        workers_per_village.append(int(rng.integers(MIN_WORKERS, MAX_WORKERS + 1)))
        n_reachable = int(rng.integers(MIN_MINES_PER_VILLAGE, MAX_MINES_PER_VILLAGE + 1))
        action_space.append(min(n_reachable, n_mines - village))
    workers_per_village.append(int(rng.integers(MIN_WORKERS, MAX_WORKERS + 1)))
    action_space.append(MAX_MINES_PER_VILLAGE)

    productivity_per_mine = rng.uniform(0.0, MAX_PRODUCTIVITY, size=n_mines).tolist()

    log.debug(
        "mining_parameters_generated",
        seed=seed,
        n_villages=n_villages,
        n_mines=n_mines,
        action_space=action_space,
    )
    return MiningParameters(
        action_space=tuple(action_space),
        workers_per_village=workers_per_village,
        productivity_per_mine=productivity_per_mine,
    )


def make_mining_bandit(seed: int) -> MiningBandit:
    """Build a random MiningBandit from `make_mining_parameters(seed)`."""
    return MiningBandit(*make_mining_parameters(seed))
