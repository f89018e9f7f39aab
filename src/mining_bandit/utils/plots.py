import numpy as np
import seaborn as sns
import matplotlib.pyplot as plt


def _set_style() -> None:
    sns.set_theme(style="whitegrid")
    sns.set_context("paper", font_scale=1.5, rc={"lines.linewidth": 2.5})


def plot_mine_rewards(
    expected_rewards: list[float],
    optimal_rewards: list[float],
    save_path: str = "data/plots/mine_rewards.png",
) -> None:
    """Per-mine expected reward of an action next to the optimal action's."""
    _set_style()
    n_mines = len(optimal_rewards)
    x = np.arange(n_mines)
    width = 0.4

    fig, ax = plt.subplots(figsize=(10, 6))
    ax.bar(x - width / 2, optimal_rewards, width, label="Optimal", color="#2ca02c", edgecolor="black")
    ax.bar(x + width / 2, expected_rewards, width, label="Played", color="#1f77b4", edgecolor="black")
    ax.set_xticks(x)
    ax.set_xticklabels([str(m) for m in range(n_mines)])
    ax.set_xlabel("Mine", fontsize=14)
    ax.set_ylabel("Expected reward", fontsize=14)
    ax.set_title("Per-mine Bernoulli parameters", fontsize=16, fontweight="bold")
    ax.legend(loc="best", fontsize=12)
    plt.tight_layout()
    plt.savefig(save_path, dpi=300, bbox_inches="tight")
    plt.close(fig)


def plot_regret_distribution(
    normalized_regrets: list[float],
    save_path: str = "data/plots/regret_distribution.png",
) -> None:
    """Histogram of normalized regret over a set of joint actions."""
    _set_style()
    fig, ax = plt.subplots(figsize=(10, 6))
    sns.histplot(np.asarray(normalized_regrets), bins=40, color="#ff7f0e", ax=ax)
    ax.set_xlabel("Normalized regret", fontsize=14)
    ax.set_ylabel("Joint actions", fontsize=14)
    ax.set_title("Regret over joint actions", fontsize=16, fontweight="bold")
    plt.tight_layout()
    plt.savefig(save_path, dpi=300, bbox_inches="tight")
    plt.close(fig)


def plot_cumulative_regret(
    cumulative_regrets: list[np.ndarray],
    labels: list[str],
    save_path: str = "data/plots/cumulative_regret.png",
) -> None:
    """Cumulative regret over time, one line per run."""
    _set_style()
    fig, ax = plt.subplots(figsize=(10, 6))
    for curve, label in zip(cumulative_regrets, labels):
        ax.plot(np.arange(1, len(curve) + 1), curve, label=label)
    ax.set_xlabel("Timestep", fontsize=14)
    ax.set_ylabel("Cumulative regret", fontsize=14)
    ax.set_title("Cumulative regret", fontsize=16, fontweight="bold")
    ax.legend(loc="best", fontsize=12)
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(save_path, dpi=300, bbox_inches="tight")
    plt.close(fig)
