import click
import numpy as np
import structlog

from mining_bandit.cli.common import LOG_LEVELS, resolve_components
from mining_bandit.logging_config import configure_logging
from mining_bandit.src.simulation import run_episodes
from mining_bandit.utils.system_measures import get_cumulative_regret, get_mean_reward

log = structlog.get_logger(__name__)


@click.command()
@click.option('--scenario', type=click.Path(exists=True), default=None)
@click.option('--steps', type=int, default=None, help="Overrides the scenario's steps (default 100).")
@click.option('--seed', type=int, default=42)
@click.option('--log-level', type=LOG_LEVELS, default='INFO')
@click.option('--json-logs', is_flag=True, default=False)
def run(scenario, steps, seed, log_level, json_logs):
    """Play a policy against a mining bandit and report its regret."""
    configure_logging(level=log_level, json_logs=json_logs)
    bandit, policy, scenario_cfg = resolve_components(scenario, seed)
    if steps is None:
        steps = (scenario_cfg or {}).get("steps", 100)
    if steps < 0:
        raise click.ClickException("--steps must be non-negative.")

    results = run_episodes(bandit, policy, steps, seed)
    cumulative = get_cumulative_regret([r.regret for r in results])
    total_regret = float(cumulative[-1]) if len(cumulative) else 0.0
    mean_reward = get_mean_reward(np.asarray([r.rewards for r in results]))
    log.info("run_complete", steps=steps, cumulative_regret=total_regret, mean_reward=mean_reward)
    click.echo(f"steps: {steps}")
    click.echo(f"cumulative_regret: {total_regret}")
    click.echo(f"mean_reward: {mean_reward}")


if __name__ == "__main__":
    run()
