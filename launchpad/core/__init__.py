"""
Core pricing modules.
"""
from .curves import curve_price, market_cap, sample_curve
from .ledger import current_supply, ledger_totals, filter_token
from .quotes import quote, quote_at_supply, validate_amount
from .fees import FeeModel, FEES, compute_fee

__all__ = [
    'curve_price', 'market_cap', 'sample_curve',
    'current_supply', 'ledger_totals', 'filter_token',
    'quote', 'quote_at_supply', 'validate_amount',
    'FeeModel', 'FEES', 'compute_fee',
]
