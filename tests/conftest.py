"""Shared fixtures for engine tests"""

from datetime import datetime, timedelta, timezone

import pytest

from launchpad.models import CurveType, Token, Transaction, TradeSide


NOW = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


def make_tx(side, amount, token_id="tok", price=0.0, minutes=0):
    return Transaction(
        token_id=token_id,
        wallet="trader",
        side=side,
        amount=amount,
        price=price,
        fee=0.0,
        created_at=NOW - timedelta(days=1) + timedelta(minutes=minutes),
    )


def buy(amount, **kw):
    return make_tx(TradeSide.BUY, amount, **kw)


def sell(amount, **kw):
    return make_tx(TradeSide.SELL, amount, **kw)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def linear_token():
    return Token(id="tok", symbol="WYBE", creator_wallet="creator", curve_type=CurveType.LINEAR, launched=True)


@pytest.fixture
def make_token():
    def _make(curve_type=CurveType.LINEAR, launched=True, token_id="tok"):
        return Token(id=token_id, symbol="TEST", creator_wallet="creator", curve_type=curve_type, launched=launched)
    return _make
