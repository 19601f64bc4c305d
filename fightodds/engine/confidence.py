"""
Bookmaker Confidence Divergence Analyzer.

Sharp books (Pinnacle, Bookmaker, CRIS) price off professional action,
public books (DraftKings, FanDuel, ...) off recreational volume. When the
two cohorts disagree, the side the sharp books favour is where the
informed money is.
"""

from typing import Optional

import structlog

from fightodds.engine.config import OddsFeatureConfig
from fightodds.engine.consensus import average_probability, latest_by_bookmaker
from fightodds.engine.normalizer import implied_probability
from fightodds.models.schemas import BookmakerConfidence, OddsSnapshot

logger = structlog.get_logger()


class ConfidenceAnalyzer:
    """
    Splits snapshots into sharp and public cohorts and compares their consensus.

    A book on neither list contributes to neither cohort. An empty cohort
    sits at (0.5, 0.5).
    """

    def __init__(self, config: Optional[OddsFeatureConfig] = None):
        self.config = config or OddsFeatureConfig()
        self.logger = logger.bind(component="bookmaker_confidence")

    def confidence(
        self,
        snapshots: list[OddsSnapshot],
        sharp_list: Optional[list[str]] = None,
        public_list: Optional[list[str]] = None,
    ) -> BookmakerConfidence:
        """
        Compute sharp/public consensus and their divergence on side A.

        Args:
            snapshots: Snapshots for one fight
            sharp_list: Sharp allow-list (defaults to config)
            public_list: Public allow-list (defaults to config)
        """
        sharp_books = tuple(sharp_list if sharp_list is not None else self.config.sharp_bookmakers)
        public_books = tuple(public_list if public_list is not None else self.config.public_bookmakers)

        sharp_consensus = self._group_consensus(
            [s for s in snapshots if s.sportsbook in sharp_books], "sharp"
        )
        public_consensus = self._group_consensus(
            [s for s in snapshots if s.sportsbook in public_books], "public"
        )

        divergence = abs(sharp_consensus[0] - public_consensus[0])

        self.logger.debug(
            "Sharp/public divergence",
            sharp_prob=f"{sharp_consensus[0]:.1%}",
            public_prob=f"{public_consensus[0]:.1%}",
            divergence=f"{divergence:.2%}",
        )

        return BookmakerConfidence(
            sharp_bookmakers=sharp_books,
            public_bookmakers=public_books,
            sharp_consensus=sharp_consensus,
            public_consensus=public_consensus,
            sharp_public_divergence=divergence,
        )

    def _group_consensus(
        self,
        snapshots: list[OddsSnapshot],
        cohort: str,
    ) -> tuple[float, float]:
        """Average de-vigged probability of the cohort's latest quotes."""
        latest = latest_by_bookmaker(snapshots)
        if not latest:
            self.logger.debug("Empty bookmaker cohort", cohort=cohort)
        return average_probability([implied_probability(s.moneyline) for s in latest])
