"""
Pytest fixtures for wheel engine tests.
"""
import pytest

from wheel_engine import AngleIndex, AnimationController, Entity, FixedTargetQueue, TrajectoryPlanner


def _entities(n):
    return [Entity(f"T{i}", f"Entry {i}") for i in range(1, n + 1)]


@pytest.fixture
def make_entities():
    """Factory for T1..Tn entity lists."""
    return _entities


@pytest.fixture
def eight_entities():
    return _entities(8)


@pytest.fixture
def eight_index(eight_entities):
    return AngleIndex.build(eight_entities)


@pytest.fixture
def controller(eight_index):
    """Controller on the T1..T8 wheel with a seeded planner."""
    return AnimationController(
        eight_index,
        FixedTargetQueue(),
        planner=TrajectoryPlanner(seed=1234),
    )


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a partial engine config YAML file."""
    import yaml

    config = {
        "timing": {
            "base_duration_ms": 4000.0,
            "min_turns": 3,
            "max_turns": 4,
        },
        "targeting": {
            "profile_selection": "random",
            "profiles": ["B", "C"],
            "unknown_key": "ignored",
        },
        "simulation": {
            "n_spins": 3,
            "seed": 11,
        },
    }

    config_file = tmp_path / "test_config.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config, f)

    return str(config_file)
