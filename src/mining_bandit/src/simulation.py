import numpy as np
import structlog

from mining_bandit.src.bandit import FactoredBandit
from mining_bandit.src.policy import Policy
from mining_bandit.src.types import StepResult
from mining_bandit.utils.loading_utils import Config, instantiate

log = structlog.get_logger(__name__)


def create_components(
    bandit_cfg: Config,
    policy_cfg: Config,
) -> tuple[FactoredBandit, Policy]:
    log.debug("creating_components", bandit_code=bandit_cfg["code"], policy_code=policy_cfg["code"])
    bandit = instantiate(bandit_cfg["code"], bandit_cfg["parameters"])
    policy = instantiate(policy_cfg["code"], policy_cfg["parameters"])
    log.debug("components_instantiated")
    return bandit, policy


def run_episodes(
    bandit: FactoredBandit,
    policy: Policy,
    steps: int,
    seed: int,
) -> list[StepResult]:
    """Play `steps` rounds of the policy against the bandit.

    Each round samples rewards with a generator seeded once from `seed`, and
    records the true regret of the played action next to them.
    """
    if steps < 0:
        raise ValueError("steps must be non-negative.")
    log.info("episodes_starting", steps=steps, seed=seed)
    rng = np.random.default_rng(seed)

    results: list[StepResult] = []
    for t in range(1, steps + 1):
        action = policy.get_action(bandit=bandit, rng=rng)
        rewards = bandit.sample_r(action, rng)
        regret = bandit.get_regret(action)
        policy.observe(action, rewards)
        results.append(StepResult(action=tuple(action), rewards=rewards, regret=regret))
        log.debug("timestep", timestep=t, action=action, reward=float(np.sum(rewards)), regret=regret)

    log.info("episodes_finished", total_steps=len(results))
    return results
