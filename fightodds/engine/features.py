"""
Odds Feature Extractor.

Top-level entry point of the analytics core: runs every analyzer over a
fight's snapshots and packs the results into a fixed-shape ``OddsFeatures``
record for the prediction models.
"""

from typing import Optional

import numpy as np
import structlog

from fightodds.engine.arbitrage import ArbitrageDetector
from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.confidence import ConfidenceAnalyzer
from fightodds.engine.consensus import ConsensusAnalyzer, sort_by_time
from fightodds.engine.efficiency import EfficiencyAnalyzer
from fightodds.engine.movement import MovementAnalyzer
from fightodds.engine.normalizer import implied_probability
from fightodds.engine.value import ValueScorer
from fightodds.models.schemas import (
    ArbitrageOpportunity,
    NoOddsDataError,
    OddsFeatures,
    OddsMovementData,
    OddsSnapshot,
)

logger = structlog.get_logger()


def _population_variance(values: list[float]) -> float:
    if not values:
        return 0.0
    return float(np.var(np.array(values, dtype=float)))


class OddsFeatureExtractor:
    """
    Extracts ML-ready features from odds data.

    Stateless apart from its config; safe to share across threads.
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="odds_features")

        self.consensus_analyzer = ConsensusAnalyzer(self.config)
        self.movement_analyzer = MovementAnalyzer(self.config)
        self.confidence_analyzer = ConfidenceAnalyzer(self.config)
        self.arbitrage_detector = ArbitrageDetector(self.config)
        self.value_scorer = ValueScorer(self.config)
        self.efficiency_analyzer = EfficiencyAnalyzer(self.config)

    def extract_features(self, odds_data: OddsMovementData) -> OddsFeatures:
        """
        Extract all odds-based features for a fight.

        Raises:
            NoOddsDataError: if there are no snapshots at all
        """
        if not odds_data.snapshots:
            raise NoOddsDataError(f"No odds snapshots for fight {odds_data.fight_id}")

        snapshots = sort_by_time(odds_data.snapshots)
        opening = snapshots[0]
        closing = snapshots[-1]

        consensus = self.consensus_analyzer.consensus(snapshots)
        movement = self.movement_analyzer.movement(snapshots)
        confidence = self.confidence_analyzer.confidence(snapshots)
        efficiency = self.efficiency_analyzer.market_efficiency(snapshots)
        value_opportunities = self.value_scorer.find_value(snapshots, consensus)

        arbitrage = odds_data.arbitrage_opportunities
        if arbitrage is None:
            arbitrage = self.arbitrage_detector.detect_arbitrage(snapshots)

        closing_prob = implied_probability(closing.moneyline)
        average_volume = self._average_volume(snapshots)

        features = OddsFeatures(
            # Implied probability
            opening_implied_probability=implied_probability(opening.moneyline),
            closing_implied_probability=closing_prob,
            current_implied_probability=closing_prob,

            # Market consensus
            market_consensus_strength=consensus.consensus_strength,
            bookmaker_agreement=consensus.consensus_strength,
            implied_probability_variance=consensus.standard_deviation,
            bookmaker_count=consensus.bookmaker_count,
            market_efficiency=efficiency.score,

            # Line movement
            total_line_movement=movement.total_movement,
            line_movement_velocity=movement.movement_velocity,
            line_reversal_count=movement.reversal_count,
            steam_move_count=movement.steam_move_count,

            # Market efficiency
            closing_line_value=movement.closing_line_value,
            arbitrage_opportunity_count=len(arbitrage),
            max_arbitrage_profit=self._max_arbitrage_profit(arbitrage),
            value_opportunity_count=len(value_opportunities),
            max_expected_value=max((v.expected_value for v in value_opportunities), default=0.0),

            # Bookmaker confidence
            sharp_money_percentage=confidence.sharp_consensus[0],
            public_money_percentage=confidence.public_consensus[0],
            sharp_public_divergence=confidence.sharp_public_divergence,

            # Volume and liquidity
            average_volume=average_volume,
            volume_spike=self._volume_spikes(snapshots, average_volume),
            liquidity_score=self._liquidity_score(snapshots, average_volume),

            # Method and round betting
            method_betting_variance=self._method_betting_variance(snapshots),
            round_betting_variance=self._round_betting_variance(snapshots),
            favorite_method_odds=self._favorite_method_odds(closing),
            favorite_round_odds=self._favorite_round_odds(closing),
        )

        self.logger.debug(
            "Extracted odds features",
            fight_id=odds_data.fight_id,
            snapshots=len(snapshots),
            bookmakers=consensus.bookmaker_count,
            arbitrage=len(arbitrage),
            value=len(value_opportunities),
        )

        return features

    # =========================================================================
    # Market efficiency
    # =========================================================================

    def _max_arbitrage_profit(self, opportunities: list[ArbitrageOpportunity]) -> float:
        return max((o.profit_percent for o in opportunities), default=0.0)

    # =========================================================================
    # Volume and liquidity
    # =========================================================================

    def _average_volume(self, snapshots: list[OddsSnapshot]) -> float:
        """Mean volume over snapshots that report one."""
        volumes = [s.volume for s in snapshots if s.volume is not None]
        if not volumes:
            return 0.0
        return float(np.mean(volumes))

    def _volume_spikes(self, snapshots: list[OddsSnapshot], average_volume: float) -> int:
        """Snapshots whose volume exceeds average * spike factor."""
        volumes = [s.volume for s in snapshots if s.volume is not None]
        if len(volumes) < 2:
            return 0
        threshold = average_volume * self.config.volume_spike_factor
        return sum(1 for v in volumes if v > threshold)

    def _liquidity_score(self, snapshots: list[OddsSnapshot], average_volume: float) -> float:
        """Half book coverage, half volume; each capped at 1."""
        unique_books = len({s.sportsbook for s in snapshots})
        book_score = min(1.0, unique_books / self.config.liquidity_max_bookmakers)
        volume_score = min(1.0, average_volume / self.config.liquidity_max_volume)
        return (book_score + volume_score) / 2

    # =========================================================================
    # Method and round betting
    # =========================================================================

    def _method_betting_variance(self, snapshots: list[OddsSnapshot]) -> float:
        """Mean of the KO / submission / decision odds variances."""
        methods = [s.method for s in snapshots if s.method is not None]
        if not methods:
            return 0.0
        variances = [
            _population_variance([m.ko for m in methods]),
            _population_variance([m.submission for m in methods]),
            _population_variance([m.decision for m in methods]),
        ]
        return sum(variances) / len(variances)

    def _round_betting_variance(self, snapshots: list[OddsSnapshot]) -> float:
        """Mean of the round 1-3 odds variances."""
        rounds = [s.rounds for s in snapshots if s.rounds is not None]
        if not rounds:
            return 0.0
        variances = [
            _population_variance([r.round1 for r in rounds]),
            _population_variance([r.round2 for r in rounds]),
            _population_variance([r.round3 for r in rounds]),
        ]
        return sum(variances) / len(variances)

    def _favorite_method_odds(self, snapshot: OddsSnapshot) -> float:
        """Lowest method odds at close (the favoured method); 0 if unquoted."""
        if snapshot.method is None:
            return 0.0
        return float(min(snapshot.method.values()))

    def _favorite_round_odds(self, snapshot: OddsSnapshot) -> float:
        """Lowest round odds at close; 0 if unquoted."""
        if snapshot.rounds is None:
            return 0.0
        return float(min(snapshot.rounds.values()))
