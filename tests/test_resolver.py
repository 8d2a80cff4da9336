"""
Tests for the winner resolver.
"""

import numpy as np
import pytest

from wheel_engine import DegenerateIndexError, Entity, WinnerResolver
from wheel_engine.geometry import in_slice, slice_center


class TestPartition:
    """Segment intervals must partition [0, 360) exactly."""

    @pytest.mark.parametrize("n", [1, 2, 3, 4, 7, 8, 360, 1001])
    def test_every_angle_in_exactly_one_interval(self, n):
        bounds = WinnerResolver.segment_bounds(n)
        for angle in np.linspace(0.0, 360.0, 2000, endpoint=False):
            hits = [i for i, (start, end) in enumerate(bounds) if in_slice(angle, start, end)]
            assert len(hits) == 1, f"angle {angle} in {hits}"

    @pytest.mark.parametrize("n", [2, 3, 8, 1001])
    def test_intervals_are_contiguous(self, n):
        bounds = WinnerResolver.segment_bounds(n)
        for (_, end), (next_start, _) in zip(bounds, bounds[1:] + bounds[:1]):
            assert end == next_start

    @pytest.mark.parametrize("n", [2, 3, 8, 1001])
    def test_widths_sum_to_full_turn(self, n):
        total = sum((end - start) % 360.0 for start, end in WinnerResolver.segment_bounds(n))
        assert np.isclose(total, 360.0)


class TestResolve:
    """Tests for WinnerResolver.resolve."""

    def test_rotation_zero_with_four_segments(self):
        # Indicator reads wheel-local 0°, the start of segment 1
        assert WinnerResolver().resolve(0.0, 4) == 1

    def test_boundary_belongs_to_later_segment(self):
        # Rotation 90 puts the indicator on 270°, the start of segment 0
        assert WinnerResolver().resolve(90.0, 4) == 0

    def test_centers_resolve_to_their_segment(self):
        resolver = WinnerResolver()
        n = 12
        for i in range(n):
            rotation = 360.0 - slice_center(i, n) + 360.0 * 7
            assert resolver.resolve(rotation, n) == i

    def test_negative_and_large_rotations(self):
        resolver = WinnerResolver()
        assert resolver.resolve(-270.0, 4) == resolver.resolve(90.0, 4)
        assert resolver.resolve(90.0 + 360.0 * 1e5, 4) == 0

    def test_single_segment_always_wins(self):
        for rotation in (0.0, 12.3, 270.0, -5.0):
            assert WinnerResolver().resolve(rotation, 1) == 0

    def test_zero_entities(self):
        with pytest.raises(DegenerateIndexError):
            WinnerResolver().resolve(10.0, 0)

    def test_non_finite_rotation(self):
        with pytest.raises(ValueError, match="non-finite"):
            WinnerResolver().resolve(float("inf"), 8)

    def test_nearest_center_fallback(self, monkeypatch):
        """When no interval matches, the closest segment center wins."""
        monkeypatch.setattr("wheel_engine.resolver.in_slice", lambda angle, start, end: False)
        n = 8
        rotation = 360.0 - (slice_center(5, n) + 3.0)
        assert WinnerResolver().resolve(rotation, n) == 5

    def test_nearest_center_fallback_across_zero(self, monkeypatch):
        monkeypatch.setattr("wheel_engine.resolver.in_slice", lambda angle, start, end: False)
        # Segment 0 of 4 is centered on 315°; pointer at 359° is 44° away
        # from it and 46° from segment 1's center at 45°
        assert WinnerResolver().resolve(1.0, 4) == 0


class TestOutcome:
    """Tests for SpinOutcome construction."""

    def test_outcome_fields(self, eight_entities):
        resolver = WinnerResolver()
        rotation = 360.0 - slice_center(2, 8)
        outcome = resolver.outcome(rotation, eight_entities)

        assert outcome.segment_index == 2
        assert outcome.winning_identifier == "T3"
        assert outcome.winning_label == "Entry 3"
        assert outcome.color == "#4d7ceb"
        assert outcome.final_rotation == rotation

    def test_custom_palette(self, eight_entities):
        resolver = WinnerResolver(palette=["#111111"])
        outcome = resolver.outcome(0.0, eight_entities)
        assert outcome.color == "#111111"

    def test_display_label_strips_ticket(self):
        entities = [Entity("T001", "John Doe - T001")]
        outcome = WinnerResolver().outcome(0.0, entities)
        assert outcome.winning_label == "John Doe - T001"
        assert outcome.display_label == "John Doe"

    def test_outcome_requires_entities(self):
        with pytest.raises(DegenerateIndexError):
            WinnerResolver().outcome(0.0, [])
