"""Shared fixtures for the odds analytics tests."""

from datetime import datetime, timedelta, timezone

import pytest

from fightodds.models.schemas import OddsSnapshot

FIGHT_ID = "ufc-319-main-event"
T0 = datetime(2026, 3, 7, 18, 0, tzinfo=timezone.utc)


def make_snapshot(
    sportsbook: str,
    moneyline: tuple[int, int],
    hours: float = 0.0,
    fight_id: str = FIGHT_ID,
    **kwargs,
) -> OddsSnapshot:
    """Snapshot ``hours`` after T0."""
    return OddsSnapshot(
        fight_id=fight_id,
        sportsbook=sportsbook,
        timestamp=T0 + timedelta(hours=hours),
        moneyline=moneyline,
        **kwargs,
    )


@pytest.fixture
def t0():
    return T0


@pytest.fixture
def scenario_snapshots():
    """DraftKings moves from -150 to -140 over an hour; FanDuel quotes once."""
    return [
        make_snapshot("DraftKings", (-150, 130), hours=0),
        make_snapshot("FanDuel", (-145, 125), hours=0),
        make_snapshot("DraftKings", (-140, 120), hours=1),
    ]


@pytest.fixture
def snap():
    """Factory fixture: ``snap("Pinnacle", (-150, 130), hours=1)``."""
    return make_snapshot
