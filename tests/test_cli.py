from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from mining_bandit.__main__ import cli
from mining_bandit.cli.vis_commands import _normalized_regrets

SCENARIO_DIR = Path(__file__).resolve().parent.parent / "scenarios"
TWO_VILLAGES = str(SCENARIO_DIR / "two_villages.yaml")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_inspect_scenario(runner):
    result = runner.invoke(cli, ["inspect", "--scenario", TWO_VILLAGES, "--log-level", "ERROR"])
    assert result.exit_code == 0, result.output
    summary = yaml.safe_load(result.stdout)
    assert summary["action_space"] == [4, 4]
    assert summary["optimal_action"] == [0, 0]
    assert summary["groups"] == [[0], [0, 1], [0, 1], [0, 1], [1]]
    assert summary["n_rules"] == 56
    assert sum(summary["optimal_mine_rewards"]) == pytest.approx(1.0)


def test_run_scenario(runner):
    result = runner.invoke(cli, ["run", "--scenario", TWO_VILLAGES, "--steps", "20", "--log-level", "ERROR"])
    assert result.exit_code == 0, result.output
    lines = dict(line.split(": ", 1) for line in result.stdout.strip().splitlines())
    assert lines["steps"] == "20"
    assert float(lines["cumulative_regret"]) >= 0.0


def test_run_rejects_negative_steps(runner):
    result = runner.invoke(cli, ["run", "--scenario", TWO_VILLAGES, "--steps", "-1", "--log-level", "ERROR"])
    assert result.exit_code != 0


def test_run_reports_bad_scenario(runner, tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("bandit:\n  code: mining_bandit.impl.mining.mining_bandit.Missing\n")
    result = runner.invoke(cli, ["run", "--scenario", str(path), "--log-level", "ERROR"])
    assert result.exit_code != 0
    assert "Cannot find" in result.output


@pytest.mark.parametrize("plot_name", ["optimal_mine_rewards", "regret_distribution", "cumulative_regret"])
def test_vis_writes_plot(runner, tmp_path, plot_name):
    out = tmp_path / "plots" / f"{plot_name}.png"
    result = runner.invoke(
        cli,
        [
            "vis", plot_name,
            "--scenario", TWO_VILLAGES,
            "--steps", "50",
            "--samples", "200",
            "--out", str(out),
            "--log-level", "ERROR",
        ],
    )
    assert result.exit_code == 0, result.output
    assert out.exists()


def test_vis_rejects_invalid_action(runner, tmp_path):
    result = runner.invoke(
        cli,
        [
            "vis", "optimal_mine_rewards",
            "--scenario", TWO_VILLAGES,
            "--action", "9,0",
            "--out", str(tmp_path / "x.png"),
            "--log-level", "ERROR",
        ],
    )
    assert result.exit_code != 0
    assert "Invalid --action" in result.output


@pytest.mark.parametrize("command", ["run", "inspect"])
def test_negative_seed_reports_error(runner, command):
    result = runner.invoke(cli, [command, "--seed=-3", "--log-level", "ERROR"])
    assert result.exit_code != 0
    assert isinstance(result.exception, SystemExit)
    assert "Seed must be non-negative" in result.output


def test_regret_distribution_enumerates_small_spaces(two_village_bandit):
    regrets = _normalized_regrets(two_village_bandit, samples=100, seed=0)
    assert len(regrets) == 16
    assert min(regrets) == 0.0
    assert regrets[0] == 0.0  # (0, 0) is optimal
    sampled = _normalized_regrets(two_village_bandit, samples=5, seed=0)
    assert len(sampled) == 5
