"""
Value Opportunity Scorer.

Treats the market consensus as the best estimate of true win probability
and flags book prices that pay more than that probability warrants.
"""

from typing import Optional

import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import latest_by_bookmaker
from fightodds.engine.normalizer import american_to_probability, payout_multiple
from fightodds.models.schemas import (
    MarketConsensus,
    OddsSnapshot,
    Side,
    ValueConfidence,
    ValueOpportunity,
)

logger = structlog.get_logger()


def expected_value(odds: int, true_probability: float) -> float:
    """
    Edge of a price against an estimated true probability.

    EV = p * payout - (1 - p) - implied, where payout is profit per unit
    staked and implied is the price's own raw probability.
    """
    implied = american_to_probability(odds)
    payout = payout_multiple(odds)
    return true_probability * payout - (1 - true_probability) - implied


class ValueScorer:
    """Scores each bookmaker's latest prices against the consensus."""

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="value")

    def find_value(
        self,
        snapshots: list[OddsSnapshot],
        consensus: MarketConsensus,
    ) -> list[ValueOpportunity]:
        """
        Find +EV prices.

        Returns:
            Opportunities with EV above the minimum edge, best first
        """
        opportunities: list[ValueOpportunity] = []

        for snapshot in latest_by_bookmaker(snapshots):
            for index, side in enumerate((Side.FIGHTER1, Side.FIGHTER2)):
                odds = snapshot.moneyline[index]
                ev = expected_value(odds, consensus.average_probability[index])

                if ev <= self.config.value_min_edge:
                    continue

                opportunities.append(ValueOpportunity(
                    sportsbook=snapshot.sportsbook,
                    side=side,
                    odds=odds,
                    implied_probability=american_to_probability(odds),
                    expected_value=ev,
                    confidence=self._confidence(ev),
                ))

        # Stable: equal EVs keep book order
        opportunities.sort(key=lambda o: o.expected_value, reverse=True)

        if opportunities:
            top = opportunities[0]
            self.logger.info(
                "Value opportunities found",
                count=len(opportunities),
                best_book=top.sportsbook,
                best_side=top.side.value,
                best_ev=f"{top.expected_value:.3f}",
            )

        return opportunities

    def _confidence(self, ev: float) -> ValueConfidence:
        if ev > self.config.value_high_edge:
            return ValueConfidence.HIGH
        if ev > self.config.value_medium_edge:
            return ValueConfidence.MEDIUM
        return ValueConfidence.LOW
