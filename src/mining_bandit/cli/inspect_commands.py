import click
import structlog
import yaml

from mining_bandit.cli.common import LOG_LEVELS, resolve_components
from mining_bandit.impl.mining.mining_bandit import MiningBandit
from mining_bandit.logging_config import configure_logging

log = structlog.get_logger(__name__)


def describe_bandit(bandit: MiningBandit) -> dict:
    """Plain-data summary of a mining bandit instance."""
    optimal = bandit.get_optimal_action()
    return {
        "action_space": list(bandit.get_a()),
        "workers_per_village": list(bandit.workers_per_village),
        "productivity_per_mine": list(bandit.productivity_per_mine),
        "groups": [list(group) for group in bandit.get_groups()],
        "optimal_action": list(optimal),
        "reward_norm": bandit.reward_norm,
        "optimal_mine_rewards": bandit.get_expected_rewards(optimal).tolist(),
        "n_rules": len(bandit.get_deterministic_rules()),
    }


@click.command()
@click.option('--scenario', type=click.Path(exists=True), default=None)
@click.option('--seed', type=int, default=42, help="Seed of the random instance when no scenario is given.")
@click.option('--log-level', type=LOG_LEVELS, default='WARNING')
def inspect(scenario, seed, log_level):
    """Print a mining bandit instance and its optimum as YAML."""
    configure_logging(level=log_level)
    bandit, _, _ = resolve_components(scenario, seed)
    if not isinstance(bandit, MiningBandit):
        raise click.ClickException(f"Cannot inspect bandit of type {type(bandit).__name__!r}.")
    click.echo(yaml.safe_dump(describe_bandit(bandit), sort_keys=False))


if __name__ == "__main__":
    inspect()
