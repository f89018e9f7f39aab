import numpy as np
import pytest

from mining_bandit.impl.mining.production import ProductionModel
from mining_bandit.impl.mining.topology import Topology
from mining_bandit.src.enumeration import iter_digit_blocks, iter_joint_actions


@pytest.fixture
def model() -> ProductionModel:
    topology = Topology.from_action_space((4, 4), 5)
    return ProductionModel(topology, [2, 3], [0.1, 0.2, 0.3, 0.4, 0.5])


def test_production_separate_mines(model):
    # village 0 -> mine 0, village 1 -> mine 3
    assert model.workers_per_mine((0, 2)) == [2, 0, 0, 3, 0]
    assert model.production((0, 2)) == pytest.approx([0.1 * 1.03**2, 0.0, 0.0, 0.4 * 1.03**3, 0.0])


def test_production_shared_mine(model):
    # both villages -> mine 2
    assert model.workers_per_mine((2, 1)) == [0, 0, 5, 0, 0]
    assert model.production((2, 1)) == pytest.approx([0.0, 0.0, 0.3 * 1.03**5, 0.0, 0.0])
    assert model.total_output((2, 1)) == pytest.approx(0.3 * 1.03**5)


def test_zero_workers_produce_nothing():
    topology = Topology.from_action_space((4, 4), 5)
    model = ProductionModel(topology, [0, 1], [1.0] * 5)
    assert model.production((1, 3)) == pytest.approx([0.0, 0.0, 0.0, 0.0, 1.03])


def test_batch_totals_match_scalar_totals_exactly():
    topology = Topology.from_action_space((3, 2, 4, 4), 7)
    model = ProductionModel(topology, [1, 4, 2, 5], [0.05, 0.3, 0.17, 0.42, 0.11, 0.29, 0.08])
    batch = np.concatenate([model.batch_total_output(d) for _, d in iter_digit_blocks(topology.action_space, 7)])
    scalar = [model.total_output(a) for a in iter_joint_actions(topology.action_space)]
    assert batch.tolist() == scalar


@pytest.mark.parametrize("action", [(4, 0), (0, -1), (0,), (0, 0, 0), (0.5, 1)])
def test_invalid_actions_raise(model, action):
    with pytest.raises(ValueError):
        model.production(action)


def test_validate_action_normalizes_types(model):
    assert model.validate_action(np.array([1, 3])) == (1, 3)


@pytest.mark.parametrize(
    "workers,productivity",
    [
        ([2], [0.1] * 5),
        ([2, 3], [0.1] * 4),
        ([2, -1], [0.1] * 5),
        ([2, 3], [0.1, 0.1, -0.1, 0.1, 0.1]),
        ([2, 3], [0.1, 0.1, float("nan"), 0.1, 0.1]),
    ],
)
def test_invalid_parameters_raise(workers, productivity):
    topology = Topology.from_action_space((4, 4), 5)
    with pytest.raises(ValueError):
        ProductionModel(topology, workers, productivity)


@pytest.mark.parametrize("productivity", [[0.1] * 5, [0.0] * 5])
def test_overflowing_worker_counts_raise(productivity):
    # 1.03**30000 is not representable as a float
    topology = Topology.from_action_space((4, 4), 5)
    with pytest.raises(ValueError, match="overflows"):
        ProductionModel(topology, [30000, 1], productivity)


def test_overflowing_total_output_raises():
    topology = Topology.from_action_space((4, 4), 5)
    with pytest.raises(ValueError, match="overflows"):
        ProductionModel(topology, [1, 1], [1e308] * 5)


@pytest.mark.parametrize(
    "workers,productivity",
    [
        ([2, 3], [0.1, "high", 0.1, 0.1, 0.1]),
        ([2, 3], [0.1, None, 0.1, 0.1, 0.1]),
        ([None, 3], [0.1] * 5),
    ],
)
def test_non_numeric_parameters_raise_value_error(workers, productivity):
    topology = Topology.from_action_space((4, 4), 5)
    with pytest.raises(ValueError):
        ProductionModel(topology, workers, productivity)
