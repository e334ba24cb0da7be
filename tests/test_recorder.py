"""
Unit tests for trade recording
"""

from datetime import timedelta

import pytest

from launchpad.config import ClampPolicy, EngineConfig
from launchpad.core.curves import curve_price
from launchpad.errors import InvalidAmount, PriceCalculationError, TokenNotFound, TokenNotLaunched
from launchpad.models import CurveType, TradeRequest, TradeSide
from launchpad.recorder import TransactionRecorder, record_trade

from conftest import buy, sell


def _buy_sol(amount, token_id="tok"):
    return TradeRequest(token_id, "trader", TradeSide.BUY, amount_sol=amount)


def test_first_buy_on_linear_curve(linear_token, now):
    result = record_trade(linear_token, [], _buy_sol(1.0), now=now)
    tx = result.transaction

    assert tx.side == TradeSide.BUY
    assert tx.price == 0.01
    assert tx.amount == pytest.approx(100.0)
    assert tx.fee == pytest.approx(0.05)
    assert tx.created_at == now

    # new supply 100 prices at 0.02, so market cap 2
    assert result.updated_market_cap == pytest.approx(2.0)

    assert result.fee.creator_fee == pytest.approx(0.01)
    assert result.fee.platform_fee == pytest.approx(0.04)

    dist = result.fee_distribution
    assert dist.token_id == "tok"
    assert dist.creator_wallet == "creator"
    assert dist.amount == pytest.approx(0.01)
    assert dist.distributed is False
    assert dist.eligible_timestamp == now + timedelta(days=7)


def test_large_market_cap_uses_high_tier(linear_token, now):
    result = record_trade(
        linear_token, [buy(25_000)],
        TradeRequest("tok", "trader", TradeSide.BUY, amount_tokens=1),
        now=now,
    )

    assert result.updated_market_cap > 50_000
    assert result.fee.creator_fee_percentage == 0.40
    assert result.fee_distribution.eligible_timestamp == now + timedelta(hours=48)


def test_sell_market_cap_uses_post_sell_supply(linear_token, now):
    request = TradeRequest("tok", "trader", TradeSide.SELL, amount_tokens=400)
    result = record_trade(linear_token, [buy(1_000)], request, now=now)

    post_price = curve_price(600, CurveType.LINEAR)
    assert result.transaction.price == pytest.approx(post_price)
    assert result.updated_market_cap == pytest.approx(600 * post_price)
    assert result.transaction.fee == pytest.approx(400 * post_price * 0.05)


def test_distribution_amount_bounded_by_fee(make_token, now):
    for curve in CurveType:
        token = make_token(curve)
        result = record_trade(
            token, [buy(5_000)],
            TradeRequest("tok", "trader", TradeSide.BUY, amount_tokens=750),
            now=now,
        )
        dist = result.fee_distribution
        assert 0 <= dist.amount <= result.transaction.fee
        assert dist.eligible_timestamp > dist.created_at
        assert result.transaction.fee == pytest.approx(
            result.transaction.price * result.transaction.amount * 0.05
        )


def test_records_are_immutable(linear_token, now):
    result = record_trade(linear_token, [], _buy_sol(1.0), now=now)
    with pytest.raises(AttributeError):
        result.transaction.amount = 0
    with pytest.raises(AttributeError):
        result.fee_distribution.distributed = True


def test_clamp_policy_from_config(linear_token, now):
    ledger = [sell(50), buy(100)]
    request = TradeRequest("tok", "trader", TradeSide.BUY, amount_tokens=1)

    final = record_trade(linear_token, ledger, request, now=now)
    per_step = record_trade(
        linear_token, ledger, request, now=now,
        config=EngineConfig(clamp_policy=ClampPolicy.PER_STEP),
    )

    assert final.quote.supply_before == 50.0
    assert per_step.quote.supply_before == 100.0


# =============================================================================
# FAILURES
# =============================================================================

def test_missing_token():
    with pytest.raises(TokenNotFound):
        record_trade(None, [], _buy_sol(1.0))


def test_token_id_mismatch(linear_token):
    with pytest.raises(TokenNotFound):
        record_trade(linear_token, [], _buy_sol(1.0, token_id="other"))


def test_unlaunched(make_token):
    with pytest.raises(TokenNotLaunched):
        record_trade(make_token(launched=False), [], _buy_sol(1.0))


def test_oversell(linear_token):
    request = TradeRequest("tok", "trader", TradeSide.SELL, amount_tokens=101)
    with pytest.raises(InvalidAmount):
        record_trade(linear_token, [buy(100)], request)


def test_zero_price_buy_by_sol(make_token):
    with pytest.raises(PriceCalculationError):
        record_trade(make_token(CurveType.LOGARITHMIC), [], _buy_sol(1.0))


def test_overflowing_market_cap_rejected(make_token, now):
    # entry price is finite, post-trade exponential price is not
    request = TradeRequest("tok", "trader", TradeSide.BUY, amount_tokens=1e9)
    with pytest.raises(PriceCalculationError):
        record_trade(make_token(CurveType.EXPONENTIAL), [], request, now=now)


# =============================================================================
# RECORDER
# =============================================================================

def test_recorder_logs_and_stats(linear_token, now):
    recorder = TransactionRecorder()
    assert recorder.get_stats() == {'trades': 0}

    recorder.record(linear_token, [], _buy_sol(1.0), now=now)
    with pytest.raises(InvalidAmount):
        recorder.record(linear_token, [], _buy_sol(-1), now=now)

    stats = recorder.get_stats()
    assert stats['successful_trades'] == 1
    assert stats['rejected_trades'] == 1
    assert stats['success_rate'] == 0.5
    assert stats['volume_sol'] == pytest.approx(1.0)
    assert stats['total_fees'] == pytest.approx(0.05)
    assert stats['creator_fees'] + stats['platform_fees'] == pytest.approx(0.05)
    assert recorder.failures[0]['error'] == 'InvalidAmount'

    recorder.reset()
    assert recorder.get_stats() == {'trades': 0}
