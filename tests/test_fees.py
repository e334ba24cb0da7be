"""
Unit tests for the fee model
"""

from datetime import timedelta

import pytest

from launchpad.config import FeeConfig
from launchpad.core.fees import FEES, FeeModel, compute_fee
from launchpad.errors import InvalidAmount


def test_low_tier_split(now):
    fee = compute_fee(1.0, market_cap_after_trade=2.0, now=now)

    assert fee.total_fee == pytest.approx(0.05)
    assert fee.creator_fee == pytest.approx(0.01)
    assert fee.platform_fee == pytest.approx(0.04)
    assert fee.creator_fee_percentage == 0.20
    assert fee.eligible_timestamp - now == timedelta(days=7)


def test_high_tier_split(now):
    fee = compute_fee(10.0, market_cap_after_trade=50_001, now=now)

    assert fee.total_fee == pytest.approx(0.5)
    assert fee.creator_fee == pytest.approx(0.2)
    assert fee.platform_fee == pytest.approx(0.3)
    assert fee.creator_fee_percentage == 0.40
    assert fee.eligible_timestamp - now == timedelta(hours=48)


def test_threshold_itself_is_low_tier(now):
    fee = compute_fee(1.0, market_cap_after_trade=50_000, now=now)
    assert fee.creator_fee_percentage == 0.20
    assert fee.eligible_timestamp - now == timedelta(days=7)


@pytest.mark.parametrize("value", [0.0, 1e-9, 0.3, 1.0, 7.77, 12345.6789, 1e12])
@pytest.mark.parametrize("mcap", [0.0, 49_999.99, 50_000.01, 1e9])
def test_shares_sum_to_total(now, value, mcap):
    fee = compute_fee(value, mcap, now=now)

    assert fee.total_fee == value * 0.05
    assert fee.creator_fee + fee.platform_fee == pytest.approx(fee.total_fee, rel=1e-15, abs=0)
    assert 0 <= fee.creator_fee <= fee.total_fee
    assert fee.eligible_timestamp > now


def test_zero_value_zero_fee(now):
    fee = compute_fee(0.0, 0.0, now=now)
    assert fee.total_fee == fee.creator_fee == fee.platform_fee == 0.0


@pytest.mark.parametrize("value", [-0.01, float("inf"), float("nan")])
def test_invalid_value_rejected(value):
    with pytest.raises(InvalidAmount):
        FEES.compute(value, 0.0)


def test_custom_config(now):
    model = FeeModel(FeeConfig(platform_fee_percentage=0.01, market_cap_threshold=10,
                               high_tier_delay=timedelta(hours=1)))
    fee = model.compute(100.0, 11, now=now)

    assert fee.total_fee == pytest.approx(1.0)
    assert fee.creator_fee == pytest.approx(0.4)
    assert fee.eligible_timestamp == now + timedelta(hours=1)


def test_defaults_when_now_omitted():
    fee = compute_fee(1.0, 0.0)
    assert fee.eligible_timestamp.tzinfo is not None
