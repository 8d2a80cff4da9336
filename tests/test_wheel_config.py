"""
Tests for the configuration system.
"""

from pathlib import Path

import pytest

from wheel_config import (
    DisplayConfig,
    SpinTimingConfig,
    TargetingConfig,
    WheelEngineConfig,
    load_config,
)
from wheel_engine import AnimationController, TwoPhaseEasing
from wheel_engine.easing import linear

CONFIGS_DIR = Path(__file__).resolve().parent.parent / "configs"


class TestDefaults:
    """Tests for default and preset configurations."""

    def test_defaults(self):
        config = WheelEngineConfig()
        assert config.timing.base_duration_ms == 11000.0
        assert config.timing.min_turns == 5
        assert config.timing.max_turns == 8
        assert config.easing.crossover == 0.2
        assert config.targeting.max_queue_length == 3
        assert config.targeting.profiles == ["A", "B", "C"]
        assert config.display.auto_remove_winner is False

    def test_presets_validate_cleanly(self):
        assert WheelEngineConfig.for_reference().validate() == []
        assert WheelEngineConfig.for_fast_demo().validate() == []

    def test_fast_demo(self):
        config = WheelEngineConfig.for_fast_demo()
        assert config.timing.base_duration_ms == 3000.0
        assert config.simulation.n_spins == 5


class TestLoadSave:
    """Tests for YAML persistence."""

    def test_round_trip(self, tmp_path):
        config = WheelEngineConfig.for_fast_demo()
        config.targeting.profile_selection = "random"
        path = tmp_path / "nested" / "config.yaml"
        config.save(path)

        loaded = load_config(str(path))
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file(self, sample_config_yaml):
        config = load_config(sample_config_yaml)

        assert config.timing.base_duration_ms == 4000.0
        assert config.timing.min_turns == 3
        assert config.timing.idle_drift_deg_per_ms == 0.03
        assert config.targeting.profile_selection == "random"
        assert config.targeting.profiles == ["B", "C"]
        assert config.simulation.seed == 11
        assert config.display.palette == DisplayConfig().palette

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(str(path)).to_dict() == WheelEngineConfig().to_dict()

    def test_shipped_reference_config(self):
        config = load_config(str(CONFIGS_DIR / "reference.yaml"))
        assert config.to_dict() == WheelEngineConfig.for_reference().to_dict()

    def test_shipped_fast_demo_config(self):
        config = load_config(str(CONFIGS_DIR / "fast_demo.yaml"))
        assert config.timing.base_duration_ms == 3000.0
        assert config.targeting.profile_selection == "random"
        assert config.simulation.seed == 7
        assert config.validate() == []


class TestValidate:
    """Tests for configuration validation."""

    def test_invalid_turns(self):
        config = WheelEngineConfig(timing=SpinTimingConfig(min_turns=0))
        assert any(i.startswith("CRITICAL") and "turn range" in i for i in config.validate())

    def test_unknown_profile(self):
        config = WheelEngineConfig(targeting=TargetingConfig(profiles=["Z"]))
        assert any("Unknown trajectory profile" in i for i in config.validate())

    def test_unknown_easing(self):
        config = WheelEngineConfig()
        config.easing.name = "bounce"
        assert any(i.startswith("CRITICAL") and "easing" in i for i in config.validate())

    def test_empty_palette(self):
        config = WheelEngineConfig(display=DisplayConfig(palette=[]))
        assert any("palette" in i for i in config.validate())

    def test_warnings(self):
        config = WheelEngineConfig(targeting=TargetingConfig(micro_offset_safety_fraction=0.7))
        issues = config.validate()
        assert len(issues) == 1
        assert issues[0].startswith("WARNING")

    @pytest.mark.parametrize("length", [4, 5, -1])
    def test_queue_length_above_three_is_critical(self, length):
        config = WheelEngineConfig(targeting=TargetingConfig(max_queue_length=length))
        issues = config.validate()
        assert any(i.startswith("CRITICAL") and "max_queue_length" in i for i in issues)

    def test_oversized_queue_cannot_be_built(self, make_entities):
        config = WheelEngineConfig(targeting=TargetingConfig(max_queue_length=5))
        with pytest.raises(ValueError, match="max_length"):
            config.create_controller(make_entities(8))


class TestFactories:
    """Tests for building engine objects from config."""

    def test_create_controller(self, make_entities):
        controller = WheelEngineConfig().create_controller(make_entities(5), seed=3)

        assert isinstance(controller, AnimationController)
        assert len(controller.angle_index) == 5
        assert controller.queue.max_length == 3
        assert controller.planner.base_duration_ms == 11000.0
        assert isinstance(controller.easing, TwoPhaseEasing)

    def test_create_planner_uses_config_seed(self, sample_config_yaml, eight_index):
        from wheel_engine import Targeted

        config = load_config(sample_config_yaml)
        p1 = config.create_planner()
        p2 = config.create_planner()
        assert p1.selector.mode == "random"
        assert [p.name for p in p1.selector.profiles] == ["B", "C"]
        assert p1.plan(0.0, Targeted("T2"), eight_index) == p2.plan(0.0, Targeted("T2"), eight_index)

    def test_alternative_easing(self):
        config = WheelEngineConfig()
        config.easing.name = "linear"
        assert config.easing.to_easing() is linear

    def test_invalid_selection_mode(self):
        with pytest.raises(ValueError, match="selection mode"):
            TargetingConfig(profile_selection="shuffle").to_selector()
