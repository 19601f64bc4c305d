"""
Odds analytics engine.

Turns bookmaker odds snapshots into market signals:
1. Normalise American odds to vig-free probabilities
2. Aggregate books into a consensus and compare sharp vs public cohorts
3. Track line movement, steam moves and arbitrage / value windows
4. Assemble everything into one feature vector for the prediction models
"""

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.normalizer import (
    american_to_probability,
    american_to_decimal,
    payout_multiple,
    implied_probability,
    closing_line_value,
)
from fightodds.engine.consensus import ConsensusAnalyzer, latest_by_bookmaker
from fightodds.engine.movement import MovementAnalyzer
from fightodds.engine.confidence import ConfidenceAnalyzer
from fightodds.engine.arbitrage import ArbitrageDetector, best_odds
from fightodds.engine.value import ValueScorer, expected_value
from fightodds.engine.efficiency import EfficiencyAnalyzer
from fightodds.engine.features import OddsFeatureExtractor
from fightodds.engine.analysis import MarketAnalyzer, analyze_market

__all__ = [
    "OddsFeatureConfig",
    "american_to_probability",
    "american_to_decimal",
    "payout_multiple",
    "implied_probability",
    "closing_line_value",
    "ConsensusAnalyzer",
    "latest_by_bookmaker",
    "MovementAnalyzer",
    "ConfidenceAnalyzer",
    "ArbitrageDetector",
    "best_odds",
    "ValueScorer",
    "expected_value",
    "EfficiencyAnalyzer",
    "OddsFeatureExtractor",
    "MarketAnalyzer",
    "analyze_market",
]
