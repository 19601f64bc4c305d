"""
Combined market analysis.

Bundles consensus, efficiency, best prices, value, per-book movements and
arbitrage for one fight. This is the shape the presentation layer renders
for its market-analysis endpoint.
"""

from datetime import datetime
from typing import Optional

import structlog

from fightodds.engine.arbitrage import ArbitrageDetector, best_odds
from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import ConsensusAnalyzer, latest_by_bookmaker
from fightodds.engine.efficiency import EfficiencyAnalyzer
from fightodds.engine.movement import MovementAnalyzer
from fightodds.engine.value import ValueScorer
from fightodds.models.schemas import MarketAnalysis, NoOddsDataError, OddsSnapshot

logger = structlog.get_logger()


class MarketAnalyzer:
    """Runs the per-fight analyzers and assembles a ``MarketAnalysis``."""

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="market_analysis")

        self.consensus_analyzer = ConsensusAnalyzer(self.config)
        self.efficiency_analyzer = EfficiencyAnalyzer(self.config)
        self.movement_analyzer = MovementAnalyzer(self.config)
        self.value_scorer = ValueScorer(self.config)
        self.arbitrage_detector = ArbitrageDetector(self.config)

    def analyze(
        self,
        fight_id: str,
        snapshots: list[OddsSnapshot],
        include_arbitrage: bool = True,
        now: Optional[datetime] = None,
    ) -> MarketAnalysis:
        """
        Analyze the market for one fight.

        Raises:
            NoOddsDataError: if no snapshots exist for the fight
        """
        snapshots = [s for s in snapshots if s.fight_id == fight_id]
        if not snapshots:
            raise NoOddsDataError(f"No odds snapshots for fight {fight_id}")

        consensus = self.consensus_analyzer.consensus(snapshots)
        arbitrage = (
            self.arbitrage_detector.detect_arbitrage(snapshots, now=now)
            if include_arbitrage else []
        )

        analysis = MarketAnalysis(
            fight_id=fight_id,
            consensus=consensus,
            consensus_confidence=self.consensus_analyzer.consensus_confidence(snapshots),
            market_efficiency=self.efficiency_analyzer.market_efficiency(snapshots),
            best_odds=best_odds(latest_by_bookmaker(snapshots)),
            value_opportunities=self.value_scorer.find_value(snapshots, consensus),
            movements=self.movement_analyzer.detect_movements(snapshots),
            arbitrage=arbitrage,
        )

        self.logger.debug(
            "Market analysis",
            fight_id=fight_id,
            bookmakers=consensus.bookmaker_count,
            efficiency=f"{analysis.market_efficiency.score:.2f}",
            value=len(analysis.value_opportunities),
            movements=len(analysis.movements),
            arbitrage=len(arbitrage),
        )

        return analysis


def analyze_market(
    fight_id: str,
    snapshots: list[OddsSnapshot],
    config: Optional[OddsFeatureConfig] = None,
    include_arbitrage: bool = True,
    now: Optional[datetime] = None,
) -> MarketAnalysis:
    """Convenience wrapper around ``MarketAnalyzer.analyze``."""
    return MarketAnalyzer(config).analyze(
        fight_id, snapshots, include_arbitrage=include_arbitrage, now=now
    )
