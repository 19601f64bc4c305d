"""
Consensus Analyzer for multi-bookmaker probability aggregation.

Reduces the input to the latest quote per bookmaker, de-vigs each quote
and averages them. Dispersion across books drives consensus strength.
"""

import math
from typing import Iterable, Optional

import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.normalizer import implied_probability
from fightodds.models.schemas import MarketConsensus, OddsSnapshot

logger = structlog.get_logger()


def latest_by_bookmaker(snapshots: Iterable[OddsSnapshot]) -> list[OddsSnapshot]:
    """
    Keep the most recent snapshot per sportsbook.

    Older quotes from the same book are superseded. On equal timestamps
    the first one seen wins. Order follows first appearance of each book.
    """
    latest: dict[str, OddsSnapshot] = {}
    for snapshot in snapshots:
        existing = latest.get(snapshot.sportsbook)
        if existing is None or snapshot.timestamp > existing.timestamp:
            latest[snapshot.sportsbook] = snapshot
    return list(latest.values())


def sort_by_time(snapshots: Iterable[OddsSnapshot]) -> list[OddsSnapshot]:
    """Chronological copy; ties keep input order."""
    return sorted(snapshots, key=lambda s: s.timestamp)


def average_probability(
    probabilities: list[tuple[float, float]],
) -> tuple[float, float]:
    """Mean of each side independently. Empty -> (0.5, 0.5)."""
    if not probabilities:
        return 0.5, 0.5
    avg_a = sum(p[0] for p in probabilities) / len(probabilities)
    avg_b = sum(p[1] for p in probabilities) / len(probabilities)
    return avg_a, avg_b


class ConsensusAnalyzer:
    """
    Aggregates the latest quote from each bookmaker into a market consensus.

    Logic:
    - One snapshot per book (latest wins)
    - Mean de-vigged probability per side
    - Std-dev = sqrt of the mean of both sides' population variances
    - Strength = max(0, 1 - std_dev * scale); steep so modest
      disagreement pushes confidence toward zero
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="consensus")

    def consensus(self, snapshots: list[OddsSnapshot]) -> MarketConsensus:
        """Compute market consensus from a snapshot collection."""
        latest = latest_by_bookmaker(snapshots)
        if not latest:
            self.logger.debug("No snapshots for consensus")
            return MarketConsensus.empty()

        probabilities = [implied_probability(s.moneyline) for s in latest]
        avg_a, avg_b = average_probability(probabilities)

        variance_a = sum((p[0] - avg_a) ** 2 for p in probabilities) / len(probabilities)
        variance_b = sum((p[1] - avg_b) ** 2 for p in probabilities) / len(probabilities)
        standard_deviation = math.sqrt((variance_a + variance_b) / 2)

        # A lone quote has zero dispersion and therefore full strength
        consensus_strength = max(
            0.0, 1 - standard_deviation * self.config.consensus_strength_scale
        )

        self.logger.debug(
            "Computed consensus",
            bookmakers=len(latest),
            superseded=len(snapshots) - len(latest),
            prob_a=f"{avg_a:.1%}",
            std_dev=f"{standard_deviation:.4f}",
            strength=f"{consensus_strength:.2f}",
        )

        return MarketConsensus(
            average_probability=(avg_a, avg_b),
            standard_deviation=standard_deviation,
            bookmaker_count=len(latest),
            consensus_strength=consensus_strength,
        )

    def consensus_confidence(self, snapshots: list[OddsSnapshot]) -> float:
        """
        Confidence reported with the combined market analysis.

        Uses side-A dispersion only: clamp(1 - std_dev * scale, floor, 1).
        Neutral 0.5 below two books.
        """
        latest = latest_by_bookmaker(snapshots)
        if len(latest) < 2:
            return 0.5

        probs = [implied_probability(s.moneyline)[0] for s in latest]
        mean = sum(probs) / len(probs)
        std_dev = math.sqrt(sum((p - mean) ** 2 for p in probs) / len(probs))

        return max(
            self.config.consensus_confidence_floor,
            min(1.0, 1 - std_dev * self.config.consensus_confidence_scale),
        )
