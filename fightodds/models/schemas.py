"""
Odds analytics data models and schemas.

Defines the core data structures for:
- Bookmaker odds snapshots (validated at the boundary with Pydantic)
- Market consensus, line movement and sharp/public divergence results
- Arbitrage and value opportunities
- The fixed-shape feature vector consumed by prediction models

Every result type is immutable. Nothing here is persisted by the core.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# Errors
# =============================================================================

class OddsError(ValueError):
    """Base class for odds analytics errors."""


class InvalidOddsError(OddsError):
    """American odds value that cannot be priced (zero)."""


class NoOddsDataError(OddsError):
    """No snapshots exist for the requested contest."""


# =============================================================================
# Enums
# =============================================================================

class Side(str, Enum):
    """Moneyline side."""
    FIGHTER1 = "fighter1"
    FIGHTER2 = "fighter2"


class ValueConfidence(str, Enum):
    """Confidence bucket for a value opportunity."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class MovementType(str, Enum):
    """Classification of a consecutive-pair line move."""
    SIGNIFICANT = "significant"
    REVERSE = "reverse"
    STEAM = "steam"


# =============================================================================
# Snapshot (input)
# =============================================================================

class MethodOdds(BaseModel):
    """Method-of-victory odds (American)."""
    model_config = ConfigDict(frozen=True)

    ko: int
    submission: int
    decision: int

    def values(self) -> list[int]:
        return [self.ko, self.submission, self.decision]


class RoundOdds(BaseModel):
    """Round-of-finish odds (American). Rounds 4-5 only exist for five-round bouts."""
    model_config = ConfigDict(frozen=True)

    round1: int
    round2: int
    round3: int
    round4: Optional[int] = None
    round5: Optional[int] = None

    def values(self) -> list[int]:
        """Quoted rounds only, in round order."""
        rounds = [self.round1, self.round2, self.round3, self.round4, self.round5]
        return [r for r in rounds if r is not None]


class OddsSnapshot(BaseModel):
    """
    One bookmaker's quoted prices at one instant for one contest.

    Validation rejects prices that cannot be American odds so the
    analyzers never have to coerce impossible input.
    """
    model_config = ConfigDict(frozen=True)

    fight_id: str
    sportsbook: str
    timestamp: datetime
    moneyline: tuple[int, int]  # (fighter1, fighter2)

    method: Optional[MethodOdds] = None
    rounds: Optional[RoundOdds] = None
    volume: Optional[float] = Field(default=None, ge=0)

    @field_validator("sportsbook")
    @classmethod
    def _sportsbook_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("sportsbook must not be blank")
        return value

    @field_validator("timestamp")
    @classmethod
    def _timestamp_utc(cls, value: datetime) -> datetime:
        """Naive timestamps are taken as UTC so every snapshot compares."""
        if value.tzinfo is None or value.utcoffset() is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @field_validator("moneyline")
    @classmethod
    def _valid_american_odds(cls, value: tuple[int, int]) -> tuple[int, int]:
        for odds in value:
            if odds == 0:
                raise ValueError("moneyline odds must be non-zero")
            if -100 < odds < 100:
                raise ValueError(f"moneyline odds {odds} is inside (-100, 100)")
        return value


# =============================================================================
# Analyzer results
# =============================================================================

@dataclass(frozen=True)
class MarketConsensus:
    """Aggregate of the latest quote from each bookmaker."""
    average_probability: tuple[float, float]
    standard_deviation: float
    bookmaker_count: int
    consensus_strength: float  # 0-1

    @classmethod
    def empty(cls) -> "MarketConsensus":
        return cls(
            average_probability=(0.5, 0.5),
            standard_deviation=0.0,
            bookmaker_count=0,
            consensus_strength=0.0,
        )


@dataclass(frozen=True)
class LineMovementMetrics:
    """Movement of side-A implied probability across a snapshot sequence."""
    total_movement: float = 0.0
    movement_velocity: float = 0.0  # probability points per hour
    reversal_count: int = 0
    steam_move_count: int = 0
    closing_line_value: float = 0.0


@dataclass(frozen=True)
class BookmakerConfidence:
    """Sharp vs public cohort consensus."""
    sharp_bookmakers: tuple[str, ...]
    public_bookmakers: tuple[str, ...]
    sharp_consensus: tuple[float, float]
    public_consensus: tuple[float, float]
    sharp_public_divergence: float


@dataclass(frozen=True)
class ArbitrageOpportunity:
    """
    Cross-book price pair whose implied probabilities sum below 1.

    Stakes are fractions of the total outlay; backing side A with
    ``stake_a`` and side B with ``stake_b`` pays the same either way.
    """
    fight_id: str
    sportsbooks: tuple[str, str]  # (best side A book, best side B book)
    odds: tuple[int, int]
    profit_percent: float
    stake_a: float
    stake_b: float
    expires_at: datetime

    @property
    def stakes(self) -> dict[str, float]:
        """Fraction of outlay per sportsbook (summed when one book wins both sides)."""
        stakes: dict[str, float] = {}
        for book, stake in zip(self.sportsbooks, (self.stake_a, self.stake_b)):
            stakes[book] = stakes.get(book, 0.0) + stake
        return stakes

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def to_log(self) -> dict:
        return {
            "fight_id": self.fight_id,
            "sportsbooks": list(self.sportsbooks),
            "odds": list(self.odds),
            "profit_percent": round(self.profit_percent, 4),
            "stakes": self.stakes,
            "expires_at": self.expires_at.isoformat(),
        }


@dataclass(frozen=True)
class ValueOpportunity:
    """A bookmaker price that beats the market consensus."""
    sportsbook: str
    side: Side
    odds: int
    implied_probability: float  # raw, single-price
    expected_value: float
    confidence: ValueConfidence


@dataclass(frozen=True)
class MarketEfficiency:
    """Price dispersion of side-A moneylines across bookmakers."""
    score: float = 0.5  # 0-1, higher = more efficient
    spread: float = 0.0
    volatility: float = 0.0


@dataclass(frozen=True)
class BestOdds:
    """Best available moneyline for one side."""
    side: Side
    odds: int
    sportsbook: str


@dataclass(frozen=True)
class OddsMovement:
    """A classified move between two consecutive quotes from one bookmaker."""
    fight_id: str
    sportsbook: str
    movement_type: MovementType
    old_snapshot: OddsSnapshot
    new_snapshot: OddsSnapshot
    percentage_change: tuple[float, float]
    implied_probability_change: tuple[float, float]

    @property
    def detected_at(self) -> datetime:
        return self.new_snapshot.timestamp


@dataclass(frozen=True)
class MarketAnalysis:
    """Combined market view for one contest."""
    fight_id: str
    consensus: MarketConsensus
    consensus_confidence: float  # 0.1-1 from side-A dispersion; 0.5 below two books
    market_efficiency: MarketEfficiency
    best_odds: tuple[BestOdds, BestOdds]
    value_opportunities: list[ValueOpportunity] = field(default_factory=list)
    movements: list[OddsMovement] = field(default_factory=list)
    arbitrage: list[ArbitrageOpportunity] = field(default_factory=list)


@dataclass(frozen=True)
class OddsMovementData:
    """
    Input to the feature assembler.

    ``arbitrage_opportunities`` may be supplied by the caller (e.g. from a
    store of previously detected windows); when None the assembler detects
    them from ``snapshots``.
    """
    fight_id: str
    snapshots: list[OddsSnapshot]
    arbitrage_opportunities: Optional[list[ArbitrageOpportunity]] = None


# =============================================================================
# Feature vector (output)
# =============================================================================

class OddsFeatures(BaseModel):
    """
    Odds-derived features for ML models.

    Field order is the vector order returned by ``to_vector``; adding a
    field changes the model input shape.
    """
    model_config = ConfigDict(frozen=True)

    # Implied probability
    opening_implied_probability: tuple[float, float]
    closing_implied_probability: tuple[float, float]
    current_implied_probability: tuple[float, float]

    # Market consensus
    market_consensus_strength: float
    bookmaker_agreement: float
    implied_probability_variance: float
    bookmaker_count: int
    market_efficiency: float

    # Line movement
    total_line_movement: float
    line_movement_velocity: float
    line_reversal_count: int
    steam_move_count: int

    # Market efficiency
    closing_line_value: float
    arbitrage_opportunity_count: int
    max_arbitrage_profit: float
    value_opportunity_count: int
    max_expected_value: float

    # Bookmaker confidence
    sharp_money_percentage: float
    public_money_percentage: float
    sharp_public_divergence: float

    # Volume and liquidity
    average_volume: float
    volume_spike: int
    liquidity_score: float

    # Method and round betting
    method_betting_variance: float
    round_betting_variance: float
    favorite_method_odds: float
    favorite_round_odds: float

    @classmethod
    def feature_names(cls) -> list[str]:
        """Flat column names matching ``to_vector``."""
        names = []
        for name, info in cls.model_fields.items():
            if info.annotation == tuple[float, float]:
                names.extend([f"{name}_fighter1", f"{name}_fighter2"])
            else:
                names.append(name)
        return names

    def to_vector(self) -> list[float]:
        """Flatten to a fixed-length float vector."""
        vector = []
        for name in type(self).model_fields:
            value = getattr(self, name)
            if isinstance(value, tuple):
                vector.extend(float(v) for v in value)
            else:
                vector.append(float(value))
        return vector
