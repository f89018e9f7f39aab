import click
import structlog

from mining_bandit.src.bandit import FactoredBandit
from mining_bandit.src.simulation import create_components
from mining_bandit.src.policy import Policy
from mining_bandit.utils.loading_utils import DEFAULT_POLICY, ScenarioConfig, load_scenario

log = structlog.get_logger(__name__)

RANDOM_BANDIT_CODE = "mining_bandit.impl.mining.parameters.make_mining_bandit"
LOG_LEVELS = click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"])


def resolve_components(
    scenario: str | None,
    seed: int,
) -> tuple[FactoredBandit, Policy, ScenarioConfig | None]:
    """Build the bandit and policy of a scenario file, or a random bandit from the seed."""
    if scenario is None:
        log.info("generating_bandit", seed=seed)
        try:
            bandit, policy = create_components(
                {"code": RANDOM_BANDIT_CODE, "parameters": {"seed": seed}},
                DEFAULT_POLICY,
            )
        except ValueError as e:
            raise click.ClickException(str(e)) from e
        return bandit, policy, None

    try:
        scenario_cfg = load_scenario(scenario)
        bandit, policy = create_components(scenario_cfg["bandit"], scenario_cfg["policy"])
    except ValueError as e:
        raise click.ClickException(str(e)) from e
    log.info("scenario_loaded", scenario=scenario, bandit_type=type(bandit).__name__, policy_type=type(policy).__name__)
    return bandit, policy, scenario_cfg
