from pathlib import Path

import click
import numpy as np
import structlog

from mining_bandit.cli.common import LOG_LEVELS, resolve_components
from mining_bandit.impl.mining.mining_bandit import MiningBandit
from mining_bandit.impl.policies.fixed_policy import FixedPolicy
from mining_bandit.impl.policies.random_policy import RandomPolicy
from mining_bandit.logging_config import configure_logging
from mining_bandit.src.enumeration import iter_joint_actions, joint_action_count
from mining_bandit.src.simulation import run_episodes
from mining_bandit.utils.plots import (
    plot_cumulative_regret,
    plot_mine_rewards,
    plot_regret_distribution,
)
from mining_bandit.utils.system_measures import get_cumulative_regret

log = structlog.get_logger(__name__)


def _normalized_regrets(
    bandit: MiningBandit,
    samples: int,
    seed: int,
) -> list[float]:
    """Regret of every joint action when there are at most `samples`, else of `samples` random ones."""
    if joint_action_count(bandit.get_a()) <= samples:
        actions = iter_joint_actions(bandit.get_a())
    else:
        rng = np.random.default_rng(seed)
        policy = RandomPolicy()
        actions = (policy.get_action(bandit, rng) for _ in range(samples))
    return [bandit.get_regret(action, normalized=True) for action in actions]


@click.command()
@click.argument(
    "plot_name",
    type=click.Choice([
        "optimal_mine_rewards",
        "regret_distribution",
        "cumulative_regret",
    ]),
)
@click.option("--scenario", type=click.Path(exists=True), default=None)
@click.option("--seed", type=int, default=42)
@click.option("--steps", type=int, default=1000, help="Timesteps for cumulative_regret.")
@click.option("--samples", type=int, default=10000, help="Joint actions sampled for regret_distribution; smaller spaces are enumerated.")
@click.option("--action", type=str, default=None, help="Comma separated joint action compared with the optimum.")
@click.option("--out", "out_path", type=click.Path(), default=None)
@click.option("--log-level", type=LOG_LEVELS, default="INFO")
def vis(plot_name, scenario, seed, steps, samples, action, out_path, log_level):
    """Plot properties of a mining bandit instance."""
    configure_logging(level=log_level)
    bandit, policy, _ = resolve_components(scenario, seed)
    if not isinstance(bandit, MiningBandit):
        raise click.ClickException(f"Cannot plot bandit of type {type(bandit).__name__!r}.")

    save_path = out_path or f"data/plots/{plot_name}.png"
    Path(save_path).parent.mkdir(parents=True, exist_ok=True)

    if plot_name == "optimal_mine_rewards":
        optimal = bandit.get_optimal_action()
        if action is not None:
            try:
                expected = bandit.get_expected_rewards(tuple(int(a) for a in action.split(",")))
            except ValueError as e:
                raise click.ClickException(f"Invalid --action {action!r}: {e}") from e
        else:
            expected = bandit.get_expected_rewards(optimal)
        plot_mine_rewards(
            expected_rewards=expected.tolist(),
            optimal_rewards=bandit.get_expected_rewards(optimal).tolist(),
            save_path=save_path,
        )
    elif plot_name == "regret_distribution":
        if samples < 1:
            raise click.ClickException("--samples must be positive.")
        regrets = _normalized_regrets(bandit, samples, seed)
        plot_regret_distribution(normalized_regrets=regrets, save_path=save_path)
    else:
        curves = []
        labels = []
        for label, run_policy in (("Scenario policy", policy), ("Optimal", FixedPolicy())):
            log.info("visualization_run_start", label=label, steps=steps, seed=seed)
            results = run_episodes(bandit, run_policy, steps, seed)
            curves.append(get_cumulative_regret([r.regret for r in results]))
            labels.append(label)
        plot_cumulative_regret(cumulative_regrets=curves, labels=labels, save_path=save_path)

    log.info("plot_saved", path=save_path)


if __name__ == "__main__":
    vis()
