"""Odds analytics data models and schemas."""

from fightodds.models.schemas import (
    OddsError,
    InvalidOddsError,
    NoOddsDataError,
    Side,
    ValueConfidence,
    MovementType,
    MethodOdds,
    RoundOdds,
    OddsSnapshot,
    MarketConsensus,
    LineMovementMetrics,
    BookmakerConfidence,
    ArbitrageOpportunity,
    ValueOpportunity,
    MarketEfficiency,
    BestOdds,
    OddsMovement,
    MarketAnalysis,
    OddsMovementData,
    OddsFeatures,
)

__all__ = [
    "OddsError",
    "InvalidOddsError",
    "NoOddsDataError",
    "Side",
    "ValueConfidence",
    "MovementType",
    "MethodOdds",
    "RoundOdds",
    "OddsSnapshot",
    "MarketConsensus",
    "LineMovementMetrics",
    "BookmakerConfidence",
    "ArbitrageOpportunity",
    "ValueOpportunity",
    "MarketEfficiency",
    "BestOdds",
    "OddsMovement",
    "MarketAnalysis",
    "OddsMovementData",
    "OddsFeatures",
]
