"""
American odds conversions.

All functions are pure. The de-vigged pair from ``implied_probability``
is the basis of every analyzer; the single-price helpers are used where
two prices come from different books and must not be normalised together.
"""

from fractions import Fraction

from fightodds.models.schemas import InvalidOddsError


def _exact_probability(odds: int) -> Fraction:
    if odds == 0:
        raise InvalidOddsError("American odds cannot be zero")
    if odds > 0:
        return Fraction(100, odds + 100)
    return Fraction(abs(odds), abs(odds) + 100)


def american_to_probability(odds: int) -> float:
    """
    Convert American odds to raw implied probability (includes vig).

    +150 -> 0.40, -200 -> 0.667
    """
    return float(_exact_probability(odds))


def american_to_decimal(odds: int) -> float:
    """Convert American odds to Decimal."""
    return payout_multiple(odds) + 1


def payout_multiple(odds: int) -> float:
    """Profit per unit staked: +150 -> 1.5, -200 -> 0.5."""
    if odds == 0:
        raise InvalidOddsError("American odds cannot be zero")
    if odds > 0:
        return odds / 100
    return 100 / abs(odds)


def implied_probability(moneyline: tuple[int, int]) -> tuple[float, float]:
    """
    Convert a moneyline pair to vig-free probabilities.

    Each side's raw probability is divided by the pair total, so the
    result always sums to 1. Ratios stay exact until the final conversion
    so very large odds do not underflow to a zero total.
    """
    prob_a = _exact_probability(moneyline[0])
    prob_b = _exact_probability(moneyline[1])
    total = prob_a + prob_b
    return float(prob_a / total), float(prob_b / total)


def closing_line_value(bet_odds: int, closing_odds: int) -> float:
    """
    Closing line value of a single bet.

    Positive when the bet was placed at a lower implied probability
    (better price) than the market closed at.
    """
    return american_to_probability(closing_odds) - american_to_probability(bet_odds)
