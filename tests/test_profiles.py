"""
Tests for trajectory profiles and profile selection.
"""

import numpy as np
import pytest

from wheel_engine import DEFAULT_PROFILES, ProfileSelector, TrajectoryProfile


class TestTrajectoryProfile:
    """Tests for TrajectoryProfile presets."""

    def test_presets(self):
        a = TrajectoryProfile.get_preset("A")
        b = TrajectoryProfile.get_preset("B")
        c = TrajectoryProfile.get_preset("C")

        assert (a.min_turns, a.max_turns, a.micro_offset_range, a.duration_jitter_ms) == (6, 8, 3.0, 250.0)
        assert (b.min_turns, b.max_turns, b.micro_offset_range, b.duration_jitter_ms) == (6, 7, 2.5, 200.0)
        assert (c.min_turns, c.max_turns, c.micro_offset_range, c.duration_jitter_ms) == (5, 8, 3.5, 300.0)

    def test_unknown_preset(self):
        with pytest.raises(ValueError, match="Unknown trajectory profile 'Z'"):
            TrajectoryProfile.get_preset("Z")

    def test_duration_range_centered_on_base(self):
        low, high = TrajectoryProfile.profile_c().duration_range(11000.0)
        assert (low, high) == (10700.0, 11300.0)

    def test_invalid_turn_range(self):
        with pytest.raises(ValueError, match="Invalid turn range"):
            TrajectoryProfile.custom(min_turns=5, max_turns=4)

    def test_negative_ranges_rejected(self):
        with pytest.raises(ValueError, match="non-negative"):
            TrajectoryProfile.custom(min_turns=5, max_turns=6, micro_offset_range=-1.0)

    def test_custom(self):
        profile = TrajectoryProfile.custom(min_turns=2, max_turns=3, micro_offset_range=1.0)
        assert profile.name == "custom"
        assert profile.duration_jitter_ms == 0.0


class TestProfileSelector:
    """Tests for ProfileSelector."""

    def test_round_robin(self):
        selector = ProfileSelector(DEFAULT_PROFILES)
        names = [selector.select(i).name for i in range(6)]
        assert names == ["A", "B", "C", "A", "B", "C"]

    def test_random_uses_generator(self):
        selector = ProfileSelector(DEFAULT_PROFILES, mode="random")
        rng1 = np.random.default_rng(5)
        rng2 = np.random.default_rng(5)
        seq1 = [selector.select(0, rng1).name for _ in range(20)]
        seq2 = [selector.select(0, rng2).name for _ in range(20)]
        assert seq1 == seq2
        assert set(seq1) <= {"A", "B", "C"}

    def test_requires_profiles(self):
        with pytest.raises(ValueError, match="at least one profile"):
            ProfileSelector([])

    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unknown profile selection mode"):
            ProfileSelector(DEFAULT_PROFILES, mode="sticky")

    def test_by_name(self):
        assert set(ProfileSelector(DEFAULT_PROFILES).by_name) == {"A", "B", "C"}
