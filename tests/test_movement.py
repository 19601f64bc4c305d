"""Tests for the line movement analyzer."""

import pytest

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.movement import MovementAnalyzer, percent_change
from fightodds.engine.normalizer import implied_probability
from fightodds.models.schemas import LineMovementMetrics, MovementType


@pytest.fixture
def movement_analyzer():
    return MovementAnalyzer()


class TestMovementMetrics:
    """Tests for MovementAnalyzer.movement."""

    def test_no_snapshots(self, movement_analyzer):
        assert movement_analyzer.movement([]) == LineMovementMetrics()

    def test_single_snapshot(self, movement_analyzer, snap):
        result = movement_analyzer.movement([snap("Pinnacle", (-150, 130))])

        assert result.total_movement == 0
        assert result.movement_velocity == 0
        assert result.reversal_count == 0
        assert result.steam_move_count == 0
        assert result.closing_line_value == 0

    def test_total_movement_and_velocity(self, movement_analyzer, snap):
        opening = implied_probability((-110, -110))[0]
        closing = implied_probability((-150, 130))[0]

        result = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=2),
        ])

        assert result.total_movement == pytest.approx(abs(closing - opening))
        assert result.movement_velocity == pytest.approx(abs(closing - opening) / 2)
        assert result.closing_line_value == result.total_movement

    def test_zero_time_span_has_no_velocity(self, movement_analyzer, snap):
        result = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110)),
            snap("FanDuel", (-150, 130)),
        ])

        assert result.total_movement > 0
        assert result.movement_velocity == 0

    def test_monotonic_line_has_no_reversals(self, movement_analyzer, snap):
        snapshots = [
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-130, 110), hours=1),
            snap("Pinnacle", (-150, 130), hours=2),
            snap("Pinnacle", (-170, 150), hours=3),
        ]
        probs = [implied_probability(s.moneyline)[0] for s in snapshots]
        assert probs == sorted(probs)

        result = movement_analyzer.movement(snapshots)
        assert result.reversal_count == 0

    def test_chop_counts_reversals_and_steam(self, movement_analyzer, snap):
        """Up, down, up: two reversals, every leg a steam move."""
        result = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=1),
            snap("Pinnacle", (-110, -110), hours=2),
            snap("Pinnacle", (-150, 130), hours=3),
        ])

        assert result.reversal_count == 2
        assert result.steam_move_count == 3

    def test_flat_leg_does_not_reset_direction(self, movement_analyzer, snap):
        result = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=1),
            snap("Pinnacle", (-150, 130), hours=2),
            snap("Pinnacle", (-110, -110), hours=3),
        ])

        assert result.reversal_count == 1

    def test_same_total_movement_different_shape(self, movement_analyzer, snap):
        """Chop and a straight move can share total movement."""
        straight = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=3),
        ])
        chop = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=1),
            snap("Pinnacle", (-110, -110), hours=2),
            snap("Pinnacle", (-150, 130), hours=3),
        ])

        assert straight.total_movement == pytest.approx(chop.total_movement)
        assert straight.reversal_count == 0
        assert chop.reversal_count == 2

    def test_steam_threshold_is_inclusive(self, snap):
        """A change of exactly the threshold counts as steam."""
        snapshots = [
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-120, 100), hours=1),
        ]
        prev = implied_probability((-110, -110))[0]
        curr = implied_probability((-120, 100))[0]
        threshold = abs(percent_change(prev, curr))

        at_threshold = MovementAnalyzer(OddsFeatureConfig(steam_move_threshold=threshold))
        above_threshold = MovementAnalyzer(OddsFeatureConfig(steam_move_threshold=threshold + 1e-9))

        assert at_threshold.movement(snapshots).steam_move_count == 1
        assert above_threshold.movement(snapshots).steam_move_count == 0

    def test_small_moves_are_not_steam(self, movement_analyzer, snap):
        result = movement_analyzer.movement([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-112, -108), hours=1),
        ])

        assert result.steam_move_count == 0

    def test_unsorted_input_is_sorted(self, movement_analyzer, snap):
        ordered = [
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-130, 110), hours=1),
            snap("Pinnacle", (-150, 130), hours=2),
        ]

        assert movement_analyzer.movement(list(reversed(ordered))) == movement_analyzer.movement(ordered)

    def test_scenario(self, movement_analyzer, scenario_snapshots):
        result = movement_analyzer.movement(scenario_snapshots)

        assert result.total_movement > 0
        assert result.reversal_count == 0


class TestDetectMovements:
    """Tests for per-book movement alerts."""

    def test_steam_alert(self, movement_analyzer, snap):
        movements = movement_analyzer.detect_movements([
            snap("DraftKings", (-110, -110), hours=0),
            snap("DraftKings", (-150, 130), hours=1),
        ])

        assert len(movements) == 1
        movement = movements[0]
        assert movement.movement_type == MovementType.STEAM
        assert movement.sportsbook == "DraftKings"
        assert movement.percentage_change[0] > 0
        assert movement.percentage_change[1] < 0
        assert movement.implied_probability_change[0] == pytest.approx(
            implied_probability((-150, 130))[0] - 0.5
        )

    def test_small_move_is_ignored(self, movement_analyzer, snap):
        movements = movement_analyzer.detect_movements([
            snap("FanDuel", (-110, -110), hours=0),
            snap("FanDuel", (-112, -108), hours=1),
        ])

        assert movements == []

    def test_significant_then_reverse(self, movement_analyzer, snap):
        movements = movement_analyzer.detect_movements([
            snap("FanDuel", (-110, -110), hours=0),
            snap("FanDuel", (-118, -102), hours=1),
            snap("FanDuel", (-110, -110), hours=2),
        ])

        assert [m.movement_type for m in movements] == [
            MovementType.SIGNIFICANT,
            MovementType.REVERSE,
        ]

    def test_books_are_tracked_independently(self, movement_analyzer, snap):
        """A jump between two different books is not a movement."""
        movements = movement_analyzer.detect_movements([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("FanDuel", (-150, 130), hours=1),
        ])

        assert movements == []

    def test_sorted_by_time(self, movement_analyzer, snap):
        movements = movement_analyzer.detect_movements([
            snap("Pinnacle", (-110, -110), hours=0),
            snap("Pinnacle", (-150, 130), hours=3),
            snap("FanDuel", (-110, -110), hours=0),
            snap("FanDuel", (-150, 130), hours=1),
        ])

        assert [m.sportsbook for m in movements] == ["FanDuel", "Pinnacle"]
        assert movements[0].detected_at < movements[1].detected_at


class TestPercentChange:

    def test_zero_base(self):
        assert percent_change(0.0, 0.5) == 0.0

    def test_signed(self):
        assert percent_change(0.5, 0.55) == pytest.approx(10.0)
        assert percent_change(0.5, 0.45) == pytest.approx(-10.0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
