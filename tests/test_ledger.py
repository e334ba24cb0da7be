"""
Unit tests for supply derivation from the transaction ledger
"""

from datetime import timedelta

import pytest

from launchpad.config import ClampPolicy
from launchpad.core.ledger import current_supply, filter_token, ledger_totals

from conftest import NOW, buy, sell


def test_empty_ledger_has_zero_supply():
    assert current_supply([]) == 0.0


def test_buys_add_sells_subtract():
    ledger = [buy(100), buy(50), sell(30)]
    assert current_supply(ledger) == 120.0


def test_sell_heavy_ledger_clamps_to_zero():
    ledger = [buy(10), sell(25), sell(5)]
    assert current_supply(ledger) == 0.0
    assert current_supply(ledger, policy=ClampPolicy.PER_STEP) == 0.0


def test_totals():
    ledger = [buy(100), sell(40), buy(5)]
    assert ledger_totals(ledger) == (105.0, 40.0)


# =============================================================================
# CLAMP POLICIES
# =============================================================================

def test_policies_agree_when_running_total_stays_non_negative():
    ledger = [buy(100), sell(60), buy(20), sell(60)]
    assert current_supply(ledger, policy=ClampPolicy.FINAL) == 0.0
    assert current_supply(ledger, policy=ClampPolicy.PER_STEP) == 0.0


def test_policies_diverge_on_out_of_order_replay():
    # sell replayed before the buy that funded it
    ledger = [sell(50), buy(100)]

    # final-only clamp nets the sell against the later buy
    assert current_supply(ledger, policy=ClampPolicy.FINAL) == 50.0
    # per-step clamp discards the early sell
    assert current_supply(ledger, policy=ClampPolicy.PER_STEP) == 100.0


def test_final_policy_is_order_independent():
    forward = [sell(50), buy(100), sell(20)]
    backward = list(reversed(forward))
    assert current_supply(forward) == current_supply(backward) == 30.0


def test_unknown_policy_rejected():
    with pytest.raises(ValueError):
        current_supply([buy(1)], policy="sometimes")


def test_policy_accepts_stored_value():
    ledger = [sell(50), buy(100)]
    assert current_supply(ledger, policy="per_step") == 100.0
    assert current_supply(ledger, policy="final") == 50.0


# =============================================================================
# WINDOW / FILTERING
# =============================================================================

def test_as_of_is_exclusive_upper_bound():
    ledger = [buy(100, minutes=0), buy(50, minutes=10), sell(30, minutes=20)]
    cutoff = ledger[1].created_at

    assert current_supply(ledger, as_of=cutoff) == 100.0
    assert current_supply(ledger, as_of=cutoff + timedelta(seconds=1)) == 150.0
    assert current_supply(ledger, as_of=NOW) == 120.0


def test_filter_token_keeps_order():
    ledger = [buy(1, token_id="a"), buy(2, token_id="b"), sell(1, token_id="a")]
    only_a = filter_token(ledger, "a")
    assert [tx.amount for tx in only_a] == [1, 1]
    assert current_supply(only_a) == 0.0
