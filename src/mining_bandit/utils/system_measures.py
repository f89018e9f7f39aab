import numpy as np


def get_cumulative_regret(regret_by_step):
    """
    Running sum of the deterministic regret of each played action.

    Args:
        regret_by_step: shape (num_steps,)
    """
    regret_by_step = np.asarray(regret_by_step, dtype=float)
    if regret_by_step.size == 0:
        return np.zeros(0)
    return np.cumsum(regret_by_step)


def get_mean_reward(rewards_by_step):
    """
    Mean over steps of the total sampled reward (summed over mines).

    Args:
        rewards_by_step: shape (num_steps, num_mines)
    """
    rewards_by_step = np.asarray(rewards_by_step, dtype=float)
    if rewards_by_step.size == 0:
        return 0.0
    return float(np.mean(np.sum(rewards_by_step, axis=1)))


def get_empirical_mine_means(rewards_by_step):
    """
    Empirical Bernoulli success rate of each mine.

    Args:
        rewards_by_step: shape (num_steps, num_mines)

    Returns:
        means: shape (num_mines,)
    """
    rewards_by_step = np.asarray(rewards_by_step, dtype=float)
    if rewards_by_step.shape[0] == 0:
        return np.zeros(rewards_by_step.shape[1:])
    return np.mean(rewards_by_step, axis=0)
