"""
Bonding Curves - Supply to price.

Four closed-form curves, priced in SOL per token:

    linear       supply / 10_000 + 0.01
    quadratic    (supply / 10_000)^2 + 0.01
    exponential  e^(supply / 1_000_000) / 100
    logarithmic  (ln(max(supply, 1) / 1000) + 0.01) * 0.3

Every curve is clamped at zero. The logarithmic curve is negative
below ~990 tokens, so early supply on that curve trades at 0.

Usage:
    from launchpad.core import curve_price
    from launchpad.models import CurveType

    curve_price(0, CurveType.LINEAR)          # 0.01
    curve_price(500, CurveType.LOGARITHMIC)   # 0.0 (clamped)
"""
from typing import Callable, Dict, Tuple
import math

import numpy as np

from ..errors import InvalidAmount
from ..models import CurveType


LINEAR_SCALE = 10_000
EXPONENTIAL_SCALE = 1_000_000
LOGARITHMIC_SCALE = 1000
BASE_PRICE = 0.01


def _linear(supply: float) -> float:
    return supply / LINEAR_SCALE + BASE_PRICE


def _quadratic(supply: float) -> float:
    return (supply / LINEAR_SCALE) ** 2 + BASE_PRICE


def _exponential(supply: float) -> float:
    try:
        return math.exp(supply / EXPONENTIAL_SCALE) / 100
    except OverflowError:
        return math.inf


def _logarithmic(supply: float) -> float:
    return (math.log(max(supply, 1) / LOGARITHMIC_SCALE) + BASE_PRICE) * 0.3


_CURVES: Dict[CurveType, Callable[[float], float]] = {
    CurveType.LINEAR: _linear,
    CurveType.QUADRATIC: _quadratic,
    CurveType.EXPONENTIAL: _exponential,
    CurveType.LOGARITHMIC: _logarithmic,
}


def curve_price(supply: float, curve_type: CurveType) -> float:
    """
    Price per token at the given circulating supply.

    Pure and total for supply >= 0. May return inf when the
    exponential curve overflows; callers decide whether that is usable.
    """
    if math.isnan(supply) or supply < 0:
        raise InvalidAmount(f"Supply must be >= 0, got {supply}")
    return max(0.0, _CURVES[curve_type](supply))


def market_cap(supply: float, curve_type: CurveType) -> float:
    """price x circulating supply"""
    return supply * curve_price(supply, curve_type)


def sample_curve(
    curve_type: CurveType,
    max_supply: float = 1_000_000,
    points: int = 100,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Evaluate a curve over [0, max_supply] for charting.

    Returns (supplies, prices). Vectorised with the same formulas
    and the same zero clamp as curve_price.
    """
    if points < 2:
        raise ValueError("points must be >= 2")
    if not math.isfinite(max_supply) or max_supply <= 0:
        raise InvalidAmount(f"max_supply must be a positive number, got {max_supply}")

    supplies = np.linspace(0.0, float(max_supply), points)

    if curve_type == CurveType.LINEAR:
        prices = supplies / LINEAR_SCALE + BASE_PRICE
    elif curve_type == CurveType.QUADRATIC:
        prices = (supplies / LINEAR_SCALE) ** 2 + BASE_PRICE
    elif curve_type == CurveType.EXPONENTIAL:
        with np.errstate(over='ignore'):
            prices = np.exp(supplies / EXPONENTIAL_SCALE) / 100
    else:
        prices = (np.log(np.maximum(supplies, 1) / LOGARITHMIC_SCALE) + BASE_PRICE) * 0.3

    return supplies, np.maximum(prices, 0.0)
