"""
Quote Engine - Price and amounts for a proposed trade.

Buys execute at the curve price of the current supply. Sells execute
at the curve price of the post-sell supply, so on a rising curve a
seller always receives less per token than the last buyer paid.

Usage:
    from launchpad.core import quote
    from launchpad.models import TradeSide

    q = quote(token, ledger, TradeSide.BUY, amount_sol=1.0)
    print(f"{q.token_amount:.2f} tokens @ {q.price:.6f} SOL")
"""
from typing import Optional, Sequence
import math

from ..config import ClampPolicy
from ..errors import InvalidAmount, PriceCalculationError, TokenNotLaunched
from ..models import Quote, Token, Transaction, TradeSide
from .curves import curve_price
from .ledger import current_supply


def validate_amount(amount_tokens: Optional[float], amount_sol: Optional[float]) -> None:
    """Exactly one amount, positive and finite"""
    if (amount_tokens is None) == (amount_sol is None):
        raise InvalidAmount("Specify exactly one of amount_tokens or amount_sol")

    amount = amount_tokens if amount_tokens is not None else amount_sol
    if isinstance(amount, bool) or not isinstance(amount, (int, float)):
        raise InvalidAmount(f"Amount must be a number, got {amount!r}")
    if not math.isfinite(amount):
        raise InvalidAmount(f"Amount must be finite, got {amount}")
    if amount <= 0:
        raise InvalidAmount(f"Amount must be positive, got {amount}")


def _checked_price(supply: float, token: Token) -> float:
    price = curve_price(supply, token.curve_type)
    if not math.isfinite(price):
        raise PriceCalculationError(
            f"{token.curve_type.value} curve produced non-finite price at supply {supply}"
        )
    return price


def quote_at_supply(
    token: Token,
    supply: float,
    side: TradeSide,
    amount_tokens: Optional[float] = None,
    amount_sol: Optional[float] = None,
) -> Quote:
    """Quote against an already-derived circulating supply"""
    if not token.launched:
        raise TokenNotLaunched(token.id)
    validate_amount(amount_tokens, amount_sol)

    if side == TradeSide.BUY:
        price = _checked_price(supply, token)
        if amount_sol is not None:
            if price <= 0:
                raise PriceCalculationError(
                    f"Cannot buy by SOL amount at zero price "
                    f"({token.curve_type.value} curve, supply {supply})"
                )
            token_amount = amount_sol / price
            sol_amount = float(amount_sol)
        else:
            token_amount = float(amount_tokens)
            sol_amount = token_amount * price
        supply_after = supply + token_amount

    else:
        if amount_tokens is None:
            raise InvalidAmount("Sell orders must specify amount_tokens")
        if amount_tokens > supply:
            raise InvalidAmount(
                f"Cannot sell {amount_tokens} tokens, circulating supply is {supply}"
            )
        supply_after = supply - amount_tokens
        price = _checked_price(supply_after, token)
        token_amount = float(amount_tokens)
        sol_amount = token_amount * price

    if not math.isfinite(token_amount) or not math.isfinite(sol_amount):
        raise PriceCalculationError(
            f"Quote overflowed: tokens={token_amount}, sol={sol_amount}"
        )

    return Quote(
        side=side,
        price=price,
        token_amount=token_amount,
        sol_amount=sol_amount,
        supply_before=supply,
        supply_after=supply_after,
    )


def quote(
    token: Token,
    prior_transactions: Sequence[Transaction],
    side: TradeSide,
    amount_tokens: Optional[float] = None,
    amount_sol: Optional[float] = None,
    policy: ClampPolicy = ClampPolicy.FINAL,
) -> Quote:
    """
    Quote a trade against the token's ledger.

    Raises:
        TokenNotLaunched: token.launched is False
        InvalidAmount: missing / non-positive / non-finite amount,
            sell by SOL, or sell larger than supply
        PriceCalculationError: curve price unusable for this trade
    """
    supply = current_supply(prior_transactions, policy=policy)
    return quote_at_supply(token, supply, side, amount_tokens, amount_sol)
