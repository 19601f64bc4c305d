"""Engine configuration shared by all analyzers."""

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from config.settings import Settings


@dataclass(frozen=True)
class OddsFeatureConfig:
    """
    Configuration for odds analytics.

    Passed to each analyzer at construction; analyzers hold no other state.
    """

    # Line movement (percent change between consecutive quotes)
    steam_move_threshold: float = 5.0
    significant_move_threshold: float = 2.0

    # Bookmaker cohorts
    sharp_bookmakers: tuple[str, ...] = field(default_factory=lambda: (
        "Pinnacle",
        "Bookmaker",
        "CRIS",
    ))
    public_bookmakers: tuple[str, ...] = field(default_factory=lambda: (
        "DraftKings",
        "FanDuel",
        "BetMGM",
        "Caesars",
    ))

    # Volume / liquidity
    volume_spike_factor: float = 2.0
    liquidity_max_bookmakers: int = 20
    liquidity_max_volume: float = 1_000_000.0

    # Arbitrage
    arbitrage_min_profit: float = 1.0  # percent
    arbitrage_ttl_seconds: int = 300

    # Consensus: strength = 1 - std_dev * scale
    consensus_strength_scale: float = 10.0
    # Market analysis confidence = clamp(1 - side-A std_dev * scale, floor, 1)
    consensus_confidence_scale: float = 4.0
    consensus_confidence_floor: float = 0.1

    # Value edges
    value_min_edge: float = 0.05
    value_medium_edge: float = 0.08
    value_high_edge: float = 0.15

    # Market efficiency normalisation
    efficiency_spread_scale: float = 100.0
    efficiency_volatility_scale: float = 50.0

    @classmethod
    def from_settings(cls, settings: "Settings") -> "OddsFeatureConfig":
        """Build engine config from environment-backed settings."""
        return cls(
            steam_move_threshold=settings.movement.steam_move_threshold,
            significant_move_threshold=settings.movement.significant_move_threshold,
            sharp_bookmakers=tuple(settings.bookmakers.sharp_bookmakers),
            public_bookmakers=tuple(settings.bookmakers.public_bookmakers),
            volume_spike_factor=settings.liquidity.volume_spike_factor,
            liquidity_max_bookmakers=settings.liquidity.max_bookmakers,
            liquidity_max_volume=settings.liquidity.max_volume,
            arbitrage_min_profit=settings.arbitrage.min_profit,
            arbitrage_ttl_seconds=settings.arbitrage.ttl_seconds,
            consensus_strength_scale=settings.consensus.strength_scale,
            consensus_confidence_scale=settings.consensus.confidence_scale,
            consensus_confidence_floor=settings.consensus.confidence_floor,
            value_min_edge=settings.value.min_edge,
            value_medium_edge=settings.value.medium_edge,
            value_high_edge=settings.value.high_edge,
            efficiency_spread_scale=settings.efficiency.spread_scale,
            efficiency_volatility_scale=settings.efficiency.volatility_scale,
        )

    def replace(self, **changes) -> "OddsFeatureConfig":
        """Return a copy with ``changes`` applied."""
        for key in ("sharp_bookmakers", "public_bookmakers"):
            if key in changes:
                changes[key] = tuple(changes[key])
        return replace(self, **changes)
