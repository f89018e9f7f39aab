import numpy as np
import pytest
import structlog

from mining_bandit.impl.mining.mining_bandit import MiningBandit


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    structlog.reset_defaults()


@pytest.fixture
def two_village_bandit() -> MiningBandit:
    """Village 0 reaches mines 0-3, village 1 reaches mines 1-4."""
    return MiningBandit(
        action_space=[4, 4],
        workers_per_village=[2, 3],
        productivity_per_mine=[0.1, 0.1, 0.1, 0.1, 0.1],
    )


def make_small_parameters(seed: int, n_villages: int = 5):
    """Random valid parameters with a joint action space small enough to brute force."""
    rng = np.random.default_rng(seed)
    n_mines = n_villages + 3
    action_space = [int(rng.integers(2, 5)) for _ in range(n_villages - 1)] + [4]
    workers = [int(rng.integers(1, 6)) for _ in range(n_villages)]
    productivity = rng.uniform(0.0, 0.5, size=n_mines).tolist()
    return action_space, workers, productivity


@pytest.fixture(params=[0, 1, 2, 3])
def small_bandit(request) -> MiningBandit:
    return MiningBandit(*make_small_parameters(request.param))
