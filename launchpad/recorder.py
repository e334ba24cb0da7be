"""
Transaction Recorder - Turns a trade request into persistable records.
=====================================================================

validate -> supply -> quote -> fee -> records

Produces either the full (transaction, fee distribution, market cap)
triple or raises. Nothing is written here; the caller persists the
TradeResult and must serialise that per token (see store.MemoryStore).
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence
import logging
import math

from .config import EngineConfig, DEFAULT_CONFIG
from .core.curves import market_cap
from .core.fees import FeeModel
from .core.ledger import current_supply
from .core.quotes import quote_at_supply
from .errors import LaunchpadError, PriceCalculationError, TokenNotFound, TokenNotLaunched
from .models import (
    FeeDistribution,
    Token,
    TradeRequest,
    TradeResult,
    Transaction,
    utcnow,
)


logger = logging.getLogger(__name__)


def record_trade(
    token: Optional[Token],
    prior_transactions: Sequence[Transaction],
    request: TradeRequest,
    now: Optional[datetime] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> TradeResult:
    """
    Price and record one trade.

    Args:
        token: Token row, or None when the lookup found nothing
        prior_transactions: The token's ledger in insertion order
        request: The trade to execute
        now: Creation time for both records (defaults to UTC now)
        config: Fee constants and ledger clamp policy

    Raises:
        TokenNotFound, TokenNotLaunched, InvalidAmount, PriceCalculationError
    """
    if token is None or token.id != request.token_id:
        raise TokenNotFound(request.token_id)
    if not token.launched:
        raise TokenNotLaunched(token.id)

    now = now or utcnow()

    supply = current_supply(prior_transactions, policy=config.clamp_policy)
    q = quote_at_supply(
        token,
        supply,
        request.side,
        amount_tokens=request.amount_tokens,
        amount_sol=request.amount_sol,
    )

    transaction_value = q.price * q.token_amount
    updated_market_cap = market_cap(q.supply_after, token.curve_type)
    if not math.isfinite(updated_market_cap):
        raise PriceCalculationError(
            f"Market cap for {token.id} at supply {q.supply_after:g} is not finite"
        )
    fee = FeeModel(config.fees).compute(transaction_value, updated_market_cap, now)

    transaction = Transaction(
        token_id=token.id,
        wallet=request.wallet,
        side=request.side,
        amount=q.token_amount,
        price=q.price,
        fee=fee.total_fee,
        created_at=now,
    )
    distribution = FeeDistribution(
        token_id=token.id,
        creator_wallet=token.creator_wallet,
        amount=fee.creator_fee,
        eligible_timestamp=fee.eligible_timestamp,
        created_at=now,
    )

    return TradeResult(
        transaction=transaction,
        updated_market_cap=updated_market_cap,
        fee_distribution=distribution,
        quote=q,
        fee=fee,
    )


class TransactionRecorder:
    """
    record_trade with an execution log.

    Keeps the same per-call semantics; the log is only for
    reporting and is never consulted when pricing.
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.execution_log: List[Dict[str, Any]] = []
        self.failures: List[Dict[str, Any]] = []

    def record(
        self,
        token: Optional[Token],
        prior_transactions: Sequence[Transaction],
        request: TradeRequest,
        now: Optional[datetime] = None,
    ) -> TradeResult:
        try:
            result = record_trade(token, prior_transactions, request, now=now, config=self.config)
        except LaunchpadError as e:
            self.failures.append({
                'request': request.to_dict(),
                'error': type(e).__name__,
                'message': str(e),
            })
            logger.warning(f"Rejected {request.side.value} on {request.token_id}: {e}")
            raise

        tx = result.transaction
        logger.info(
            f"{tx.side.value.upper()} {tx.amount:,.4f} {token.symbol} @ {tx.price:.8f} SOL | "
            f"fee {tx.fee:.6f} | mcap {result.updated_market_cap:,.4f}"
        )
        self.execution_log.append(result.to_dict())
        return result

    def get_stats(self) -> Dict[str, Any]:
        """Get execution statistics"""
        attempts = len(self.execution_log) + len(self.failures)
        if attempts == 0:
            return {'trades': 0}

        return {
            'total_attempts': attempts,
            'successful_trades': len(self.execution_log),
            'rejected_trades': len(self.failures),
            'success_rate': len(self.execution_log) / attempts,
            'volume_sol': sum(e['quote']['sol_amount'] for e in self.execution_log),
            'total_fees': sum(e['fee']['total_fee'] for e in self.execution_log),
            'creator_fees': sum(e['fee']['creator_fee'] for e in self.execution_log),
            'platform_fees': sum(e['fee']['platform_fee'] for e in self.execution_log),
        }

    def reset(self):
        """Reset execution log"""
        self.execution_log = []
        self.failures = []
