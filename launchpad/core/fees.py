"""
Fee Model - Platform fee and creator share for an executed trade.

    total_fee    = transaction_value * 5%
    creator_fee  = total_fee * (40% if market cap > 50k else 20%)
    platform_fee = total_fee - creator_fee

The creator share is claimable after 48h for tokens above the
threshold, after 7 days otherwise.

Usage:
    from launchpad.core import FEES

    fee = FEES.compute(transaction_value=1.0, market_cap_after_trade=2.0)
    print(f"creator {fee.creator_fee:.4f} / platform {fee.platform_fee:.4f}")
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Optional, Tuple
import math

from ..config import FeeConfig
from ..errors import InvalidAmount
from ..models import FeeBreakdown, utcnow


@dataclass
class FeeModel:
    """Tiered creator-fee split over a flat platform fee"""

    config: FeeConfig = field(default_factory=FeeConfig)

    def tier(self, market_cap_after_trade: float) -> Tuple[float, timedelta]:
        """(creator fee percentage, claim delay) for a market cap"""
        if market_cap_after_trade > self.config.market_cap_threshold:
            return self.config.high_tier_creator_pct, self.config.high_tier_delay
        return self.config.low_tier_creator_pct, self.config.low_tier_delay

    def compute(
        self,
        transaction_value: float,
        market_cap_after_trade: float,
        now: Optional[datetime] = None,
    ) -> FeeBreakdown:
        if not math.isfinite(transaction_value) or transaction_value < 0:
            raise InvalidAmount(f"Transaction value must be finite and >= 0, got {transaction_value}")

        now = now or utcnow()
        creator_pct, delay = self.tier(market_cap_after_trade)

        total_fee = transaction_value * self.config.platform_fee_percentage
        creator_fee = total_fee * creator_pct
        platform_fee = total_fee - creator_fee

        return FeeBreakdown(
            total_fee=total_fee,
            creator_fee=creator_fee,
            platform_fee=platform_fee,
            creator_fee_percentage=creator_pct,
            eligible_timestamp=now + delay,
        )


def compute_fee(
    transaction_value: float,
    market_cap_after_trade: float,
    now: Optional[datetime] = None,
    config: Optional[FeeConfig] = None,
) -> FeeBreakdown:
    model = FEES if config is None else FeeModel(config)
    return model.compute(transaction_value, market_cap_after_trade, now)


# Global instance
FEES = FeeModel()
