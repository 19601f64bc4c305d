"""
Line Movement Analyzer.

Walks a chronologically sorted snapshot sequence pair by pair. Pairwise
deltas separate volatile chop (many reversals) from a single large
directional move even when both end at the same total movement.
"""

from typing import Optional

import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import sort_by_time
from fightodds.engine.normalizer import implied_probability
from fightodds.models.schemas import (
    LineMovementMetrics,
    MovementType,
    OddsMovement,
    OddsSnapshot,
)

logger = structlog.get_logger()

SECONDS_PER_HOUR = 3600.0


def percent_change(previous: float, current: float) -> float:
    """Signed percent change; 0 when ``previous`` is 0."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous * 100


def _sign(value: float) -> int:
    if value > 0:
        return 1
    if value < 0:
        return -1
    return 0


class MovementAnalyzer:
    """
    Computes line movement metrics for one market.

    Snapshots may come from any number of books for the same fight;
    they are sorted by timestamp before processing.
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="movement")

    # =========================================================================
    # Market movement
    # =========================================================================

    def movement(self, snapshots: list[OddsSnapshot]) -> LineMovementMetrics:
        """Total movement, velocity, reversals and steam moves on side A."""
        ordered = sort_by_time(snapshots)
        if len(ordered) < 2:
            self.logger.debug("Insufficient snapshots for movement", count=len(ordered))
            return LineMovementMetrics()

        opening, closing = ordered[0], ordered[-1]
        probs = [implied_probability(s.moneyline)[0] for s in ordered]

        total_movement = abs(probs[0] - probs[-1])

        hours = (closing.timestamp - opening.timestamp).total_seconds() / SECONDS_PER_HOUR
        movement_velocity = total_movement / hours if hours > 0 else 0.0

        reversal_count = 0
        steam_move_count = 0
        last_direction = 0

        for prev_prob, curr_prob in zip(probs, probs[1:]):
            change = curr_prob - prev_prob

            if abs(percent_change(prev_prob, curr_prob)) >= self.config.steam_move_threshold:
                steam_move_count += 1

            direction = _sign(change)
            if direction != 0:
                if last_direction != 0 and direction != last_direction:
                    reversal_count += 1
                last_direction = direction

        if steam_move_count:
            self.logger.info(
                "Steam moves detected",
                fight_id=opening.fight_id,
                steam_moves=steam_move_count,
                total_movement=f"{total_movement:.2%}",
            )

        return LineMovementMetrics(
            total_movement=total_movement,
            movement_velocity=movement_velocity,
            reversal_count=reversal_count,
            steam_move_count=steam_move_count,
            closing_line_value=total_movement,
        )

    # =========================================================================
    # Per-book movement alerts
    # =========================================================================

    def detect_movements(self, snapshots: list[OddsSnapshot]) -> list[OddsMovement]:
        """
        Classify consecutive quote changes within each sportsbook.

        STEAM      - larger side change >= steam threshold
        REVERSE    - >= significant threshold, opposite to the book's last move
        SIGNIFICANT - >= significant threshold
        """
        by_book: dict[str, list[OddsSnapshot]] = {}
        for snapshot in sort_by_time(snapshots):
            by_book.setdefault(snapshot.sportsbook, []).append(snapshot)

        movements: list[OddsMovement] = []
        for book_snapshots in by_book.values():
            last_direction = 0
            for old, new in zip(book_snapshots, book_snapshots[1:]):
                old_prob = implied_probability(old.moneyline)
                new_prob = implied_probability(new.moneyline)

                pct_a = percent_change(old_prob[0], new_prob[0])
                pct_b = percent_change(old_prob[1], new_prob[1])
                max_change = max(abs(pct_a), abs(pct_b))

                direction = _sign(new_prob[0] - old_prob[0])
                reversed_direction = (
                    direction != 0 and last_direction != 0 and direction != last_direction
                )
                if direction != 0:
                    last_direction = direction

                if max_change >= self.config.steam_move_threshold:
                    movement_type = MovementType.STEAM
                elif max_change >= self.config.significant_move_threshold:
                    movement_type = (
                        MovementType.REVERSE if reversed_direction else MovementType.SIGNIFICANT
                    )
                else:
                    continue

                movements.append(OddsMovement(
                    fight_id=new.fight_id,
                    sportsbook=new.sportsbook,
                    movement_type=movement_type,
                    old_snapshot=old,
                    new_snapshot=new,
                    percentage_change=(pct_a, pct_b),
                    implied_probability_change=(
                        new_prob[0] - old_prob[0],
                        new_prob[1] - old_prob[1],
                    ),
                ))

        movements.sort(key=lambda m: m.new_snapshot.timestamp)
        return movements
