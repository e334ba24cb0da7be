"""
Launchpad Engine - Bonding-Curve Pricing & Fee Distribution
===========================================================

Pure, synchronous pricing for launchpad tokens.
Every call takes the full ledger and returns new records;
persistence belongs to the caller.

Usage:
    from launchpad import MemoryStore, TradeRequest, TradeSide

    store = MemoryStore()
    store.add_token("t1", "WYBE", "creator-wallet", "linear")
    result = store.execute_trade(
        TradeRequest("t1", "trader-wallet", TradeSide.BUY, amount_sol=1.0)
    )
    print(result.transaction.amount, result.fee.creator_fee)
"""

# Configuration
from .config import (
    ClampPolicy,
    EngineConfig,
    FeeConfig,
    DEFAULT_CONFIG,
)

# Data models
from .models import (
    CurveType,
    TradeSide,
    Token,
    Transaction,
    FeeDistribution,
    TradeRequest,
    Quote,
    FeeBreakdown,
    TradeResult,
)

# Errors
from .errors import (
    LaunchpadError,
    TokenNotFound,
    TokenNotLaunched,
    InvalidAmount,
    InvalidCurveType,
    PriceCalculationError,
    FeeClaimError,
    AlreadyDistributed,
    NotYetEligible,
    WalletMismatch,
)

# Engine
from .core import (
    curve_price,
    market_cap,
    sample_curve,
    current_supply,
    quote,
    compute_fee,
    FeeModel,
)
from .recorder import record_trade, TransactionRecorder
from .store import MemoryStore
from .claims import claim, is_eligible, process_distributions, summarize, ClaimSummary


__all__ = [
    # Config
    'ClampPolicy',
    'EngineConfig',
    'FeeConfig',
    'DEFAULT_CONFIG',

    # Models
    'CurveType',
    'TradeSide',
    'Token',
    'Transaction',
    'FeeDistribution',
    'TradeRequest',
    'Quote',
    'FeeBreakdown',
    'TradeResult',

    # Errors
    'LaunchpadError',
    'TokenNotFound',
    'TokenNotLaunched',
    'InvalidAmount',
    'InvalidCurveType',
    'PriceCalculationError',
    'FeeClaimError',
    'AlreadyDistributed',
    'NotYetEligible',
    'WalletMismatch',

    # Engine
    'curve_price',
    'market_cap',
    'sample_curve',
    'current_supply',
    'quote',
    'compute_fee',
    'FeeModel',
    'record_trade',
    'TransactionRecorder',
    'MemoryStore',

    # Claims
    'claim',
    'is_eligible',
    'process_distributions',
    'summarize',
    'ClaimSummary',
]
