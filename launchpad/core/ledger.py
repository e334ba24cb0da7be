"""
Supply Ledger - Circulating supply from the transaction history.

The ordered ledger of a token's transactions is the only source of
truth for supply: buys add, sells subtract.

Two clamp policies are supported:

    final     clamp the aggregate only (how the live platform computes it)
    per_step  clamp every running total, so a sell replayed before its
              buy cannot borrow against later buys

They agree on any ledger whose running total never dips below zero.
"""
from datetime import datetime
from typing import Iterable, List, Optional, Tuple

from ..config import ClampPolicy
from ..models import Transaction, TradeSide


def _in_window(transactions: Iterable[Transaction], as_of: Optional[datetime]) -> Iterable[Transaction]:
    if as_of is None:
        return transactions
    return (tx for tx in transactions if tx.created_at < as_of)


def filter_token(transactions: Iterable[Transaction], token_id: str) -> List[Transaction]:
    """Transactions for one token, insertion order preserved"""
    return [tx for tx in transactions if tx.token_id == token_id]


def ledger_totals(
    transactions: Iterable[Transaction],
    as_of: Optional[datetime] = None,
) -> Tuple[float, float]:
    """(total bought, total sold) in tokens"""
    bought = 0.0
    sold = 0.0
    for tx in _in_window(transactions, as_of):
        if tx.side == TradeSide.BUY:
            bought += tx.amount
        else:
            sold += tx.amount
    return bought, sold


def current_supply(
    transactions: Iterable[Transaction],
    as_of: Optional[datetime] = None,
    policy: ClampPolicy = ClampPolicy.FINAL,
) -> float:
    """
    Fold the ledger into circulating supply, always >= 0.

    Args:
        transactions: One token's transactions in insertion order
        as_of: Exclusive upper bound on created_at (None = whole ledger)
        policy: ClampPolicy member or its string value
    """
    policy = ClampPolicy(policy)

    supply = 0.0
    for tx in _in_window(transactions, as_of):
        if tx.side == TradeSide.BUY:
            supply += tx.amount
        else:
            supply -= tx.amount
        if policy == ClampPolicy.PER_STEP:
            supply = max(0.0, supply)

    return max(0.0, supply)
