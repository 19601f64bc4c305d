"""
Configuration settings for the fight odds analytics core.
Uses pydantic-settings for validation and environment variable loading.

The analyzers never read these directly; callers build an
``OddsFeatureConfig`` from them with ``OddsFeatureConfig.from_settings``.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MovementSettings(BaseSettings):
    """Line movement thresholds (percent change of side-A probability)."""

    steam_move_threshold: float = 5.0        # >= 5% between consecutive quotes
    significant_move_threshold: float = 2.0  # >= 2% = alert-worthy

    @field_validator("steam_move_threshold", "significant_move_threshold")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("movement thresholds must be positive")
        return value


class BookmakerSettings(BaseSettings):
    """Sharp and public bookmaker allow-lists."""

    # Books pricing off professional action
    sharp_bookmakers: list[str] = Field(default_factory=lambda: [
        "Pinnacle",
        "Bookmaker",
        "CRIS",
    ])

    # Books pricing off recreational volume
    public_bookmakers: list[str] = Field(default_factory=lambda: [
        "DraftKings",
        "FanDuel",
        "BetMGM",
        "Caesars",
    ])


class ArbitrageSettings(BaseSettings):
    """Arbitrage detection settings."""

    min_profit: float = 1.0      # Percent; smaller windows are not reported
    ttl_seconds: int = 300       # Books react to each other within minutes


class ValueSettings(BaseSettings):
    """Expected-value edge thresholds for value opportunities."""

    min_edge: float = 0.05       # 5-point edge to report
    medium_edge: float = 0.08
    high_edge: float = 0.15


class LiquiditySettings(BaseSettings):
    """Volume and liquidity normalisation."""

    volume_spike_factor: float = 2.0     # Spike = volume > 2x average
    max_bookmakers: int = 20             # Book count for a full score
    max_volume: float = 1_000_000.0      # Average volume for a full score


class ConsensusSettings(BaseSettings):
    """Consensus calibration."""

    # consensus_strength = 1 - std_dev * scale
    strength_scale: float = 10.0

    # Market analysis confidence, from side-A dispersion only
    confidence_scale: float = 4.0
    confidence_floor: float = 0.1


class EfficiencySettings(BaseSettings):
    """Market efficiency normalisation (American odds points)."""

    spread_scale: float = 100.0
    volatility_scale: float = 50.0


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore"
    )

    # Logging
    debug: bool = False
    log_level: str = "INFO"
    json_logs: bool = True

    # Sub-settings
    movement: MovementSettings = Field(default_factory=MovementSettings)
    bookmakers: BookmakerSettings = Field(default_factory=BookmakerSettings)
    arbitrage: ArbitrageSettings = Field(default_factory=ArbitrageSettings)
    value: ValueSettings = Field(default_factory=ValueSettings)
    liquidity: LiquiditySettings = Field(default_factory=LiquiditySettings)
    consensus: ConsensusSettings = Field(default_factory=ConsensusSettings)
    efficiency: EfficiencySettings = Field(default_factory=EfficiencySettings)


# Global settings instance
settings = Settings()
