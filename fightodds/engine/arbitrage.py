"""
Cross-Book Arbitrage Detector.

Example:
- Book X: Fighter 1 at +120 (45.5%)
- Book Y: Fighter 2 at +120 (45.5%)
- Total implied: 90.9% < 100%

Arb:
- Stake 50% on X / fighter 1, 50% on Y / fighter 2
- Either outcome returns 1.10 per unit staked
- Profit: 10% guaranteed

The two best prices are priced independently (no cross-side vig removal):
they come from different books with different margins.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import latest_by_bookmaker
from fightodds.engine.normalizer import american_to_probability
from fightodds.models.schemas import ArbitrageOpportunity, BestOdds, OddsSnapshot, Side

logger = structlog.get_logger()


def best_odds(snapshots: list[OddsSnapshot]) -> Optional[tuple[BestOdds, BestOdds]]:
    """
    Highest moneyline per side across the given snapshots.

    The first book quoting the best price wins ties. None for empty input.
    """
    if not snapshots:
        return None

    best_a = max(snapshots, key=lambda s: s.moneyline[0])
    best_b = max(snapshots, key=lambda s: s.moneyline[1])
    return (
        BestOdds(side=Side.FIGHTER1, odds=best_a.moneyline[0], sportsbook=best_a.sportsbook),
        BestOdds(side=Side.FIGHTER2, odds=best_b.moneyline[1], sportsbook=best_b.sportsbook),
    )


class ArbitrageDetector:
    """
    Finds risk-free stake splits across bookmakers.

    Uses the latest quote per book; needs at least two books.
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="arbitrage")

    def detect_arbitrage(
        self,
        snapshots: list[OddsSnapshot],
        now: Optional[datetime] = None,
    ) -> list[ArbitrageOpportunity]:
        """
        Detect arbitrage in the current market.

        Args:
            snapshots: Snapshots for one fight
            now: Reference time for ``expires_at`` (defaults to current UTC)

        Returns:
            Zero or one opportunity
        """
        latest = latest_by_bookmaker(snapshots)
        if len(latest) < 2:
            self.logger.debug("Insufficient bookmakers for arbitrage", count=len(latest))
            return []

        best_a, best_b = best_odds(latest)
        prob_a = american_to_probability(best_a.odds)
        prob_b = american_to_probability(best_b.odds)
        total_prob = prob_a + prob_b

        if total_prob >= 1:
            return []

        profit = (1 / total_prob - 1) * 100
        if profit < self.config.arbitrage_min_profit:
            self.logger.debug(
                "Arbitrage below minimum profit",
                profit=f"{profit:.2f}%",
                min=f"{self.config.arbitrage_min_profit:.2f}%",
            )
            return []

        stake_a = prob_a / total_prob
        now = now or datetime.now(timezone.utc)

        opportunity = ArbitrageOpportunity(
            fight_id=latest[0].fight_id,
            sportsbooks=(best_a.sportsbook, best_b.sportsbook),
            odds=(best_a.odds, best_b.odds),
            profit_percent=profit,
            stake_a=stake_a,
            stake_b=1 - stake_a,
            expires_at=now + timedelta(seconds=self.config.arbitrage_ttl_seconds),
        )

        self.logger.info(
            "💰 ARBITRAGE DETECTED",
            fight_id=opportunity.fight_id,
            book_a=best_a.sportsbook,
            odds_a=best_a.odds,
            book_b=best_b.sportsbook,
            odds_b=best_b.odds,
            profit=f"{profit:.2f}%",
            same_book=best_a.sportsbook == best_b.sportsbook,
        )

        return [opportunity]
