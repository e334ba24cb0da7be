"""
Launchpad Models - Shared Data Structures
=========================================

Record shapes the engine reads from and hands back to the
external token / transaction / fee-distribution stores.

Transaction and FeeDistribution are frozen: once created they
are never updated in place. A claim produces a new record.
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Optional
import logging
import uuid


logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return uuid.uuid4().hex[:16]


class CurveType(Enum):
    LINEAR = "linear"
    QUADRATIC = "quadratic"
    EXPONENTIAL = "exponential"
    LOGARITHMIC = "logarithmic"

    @classmethod
    def parse(cls, value, strict: bool = False, default: Optional['CurveType'] = None) -> 'CurveType':
        """
        Resolve a stored curve type string.

        Unknown or missing values fall back to `default` (LINEAR when
        not given) unless strict is set, in which case InvalidCurveType
        is raised.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            if strict:
                from .errors import InvalidCurveType
                raise InvalidCurveType(value)
            fallback = default or cls.LINEAR
            logger.warning(f"Unknown curve type {value!r}, falling back to {fallback.value}")
            return fallback


class TradeSide(Enum):
    BUY = "buy"
    SELL = "sell"


@dataclass
class Token:
    """Token metadata as read from the token store"""
    id: str
    symbol: str
    creator_wallet: str
    curve_type: CurveType = CurveType.LINEAR
    launched: bool = False
    market_cap: float = 0.0

    def with_market_cap(self, market_cap: float) -> 'Token':
        return replace(self, market_cap=market_cap)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'symbol': self.symbol,
            'creator_wallet': self.creator_wallet,
            'curve_type': self.curve_type.value,
            'launched': self.launched,
            'market_cap': self.market_cap,
        }

    def __repr__(self) -> str:
        return f"Token({self.symbol}, {self.curve_type.value}, mcap={self.market_cap:,.4f})"


@dataclass(frozen=True)
class Transaction:
    """Executed trade. The ordered ledger of these defines supply."""
    token_id: str
    wallet: str
    side: TradeSide
    amount: float           # tokens
    price: float            # SOL per token
    fee: float              # SOL
    created_at: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)

    @property
    def value(self) -> float:
        return self.amount * self.price

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'token_id': self.token_id,
            'wallet': self.wallet,
            'type': self.side.value,
            'amount': self.amount,
            'price': self.price,
            'fee': self.fee,
            'created_at': self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class FeeDistribution:
    """Creator's share of one trade's fee, claimable after eligible_timestamp"""
    token_id: str
    creator_wallet: str
    amount: float
    eligible_timestamp: datetime
    distributed: bool = False
    created_at: datetime = field(default_factory=utcnow)
    distributed_at: Optional[datetime] = None
    id: str = field(default_factory=new_id)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'token_id': self.token_id,
            'creator_wallet': self.creator_wallet,
            'amount': self.amount,
            'eligible_timestamp': self.eligible_timestamp.isoformat(),
            'distributed': self.distributed,
            'created_at': self.created_at.isoformat(),
            'distributed_at': self.distributed_at.isoformat() if self.distributed_at else None,
        }


@dataclass
class TradeRequest:
    """Incoming trade. Exactly one of amount_tokens / amount_sol is set."""
    token_id: str
    wallet: str
    side: TradeSide
    amount_tokens: Optional[float] = None
    amount_sol: Optional[float] = None

    def to_dict(self) -> dict:
        return {
            'token_id': self.token_id,
            'wallet': self.wallet,
            'side': self.side.value,
            'amount_tokens': self.amount_tokens,
            'amount_sol': self.amount_sol,
        }


@dataclass(frozen=True)
class Quote:
    """Execution price and amounts for a proposed trade"""
    side: TradeSide
    price: float
    token_amount: float
    sol_amount: float
    supply_before: float
    supply_after: float

    def to_dict(self) -> dict:
        return {
            'side': self.side.value,
            'price': self.price,
            'token_amount': self.token_amount,
            'sol_amount': self.sol_amount,
            'supply_before': self.supply_before,
            'supply_after': self.supply_after,
        }


@dataclass(frozen=True)
class FeeBreakdown:
    total_fee: float
    creator_fee: float
    platform_fee: float
    creator_fee_percentage: float
    eligible_timestamp: datetime

    def to_dict(self) -> dict:
        return {
            'total_fee': self.total_fee,
            'creator_fee': self.creator_fee,
            'platform_fee': self.platform_fee,
            'creator_fee_percentage': self.creator_fee_percentage,
            'eligible_timestamp': self.eligible_timestamp.isoformat(),
        }


@dataclass(frozen=True)
class TradeResult:
    """Everything the persistence layer must apply for one accepted trade"""
    transaction: Transaction
    updated_market_cap: float
    fee_distribution: FeeDistribution
    quote: Quote
    fee: FeeBreakdown

    def to_dict(self) -> dict:
        return {
            'transaction': self.transaction.to_dict(),
            'updated_market_cap': self.updated_market_cap,
            'fee_distribution': self.fee_distribution.to_dict(),
            'quote': self.quote.to_dict(),
            'fee': self.fee.to_dict(),
        }
