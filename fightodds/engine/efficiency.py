"""
Market efficiency scoring.

A tight market (books quoting near-identical prices) is an efficient one:
little room for value or arbitrage.
"""

from typing import Optional

import numpy as np
import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import latest_by_bookmaker
from fightodds.models.schemas import MarketEfficiency, OddsSnapshot

logger = structlog.get_logger()


class EfficiencyAnalyzer:
    """
    Scores price dispersion of side-A moneylines.

    score = 1 - (norm(spread) + norm(volatility)) / 2, where spread is
    max - min odds and volatility their std-dev, both capped at 1 after
    scaling.
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="efficiency")

    def market_efficiency(self, snapshots: list[OddsSnapshot]) -> MarketEfficiency:
        """Efficiency over the latest quote per book. Neutral below two books."""
        latest = latest_by_bookmaker(snapshots)
        if len(latest) < 2:
            return MarketEfficiency()

        odds = np.array([s.moneyline[0] for s in latest], dtype=float)
        spread = float(odds.max() - odds.min())
        volatility = float(odds.std())

        normalized_spread = min(1.0, spread / self.config.efficiency_spread_scale)
        normalized_volatility = min(1.0, volatility / self.config.efficiency_volatility_scale)
        score = max(0.0, 1 - (normalized_spread + normalized_volatility) / 2)

        self.logger.debug(
            "Market efficiency",
            bookmakers=len(latest),
            spread=spread,
            volatility=f"{volatility:.1f}",
            score=f"{score:.2f}",
        )

        return MarketEfficiency(score=score, spread=spread, volatility=volatility)
