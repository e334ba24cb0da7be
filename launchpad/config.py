"""
Engine Configuration
====================

Fee constants and ledger policy in one place.
The defaults are the platform's business rules; change them
only for what-if runs.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from enum import Enum
from typing import Any, Dict, Mapping, Optional
import os

from .models import CurveType


class ClampPolicy(Enum):
    """How the ledger reducer keeps supply non-negative"""
    FINAL = "final"          # clamp the aggregate only
    PER_STEP = "per_step"    # clamp every running total


@dataclass
class FeeConfig:
    """
    Platform fee split.

    5% of every trade's value is the fee. Above the market cap
    threshold the creator gets 40% after 48h, otherwise 20% after 7d.
    """

    platform_fee_percentage: float = 0.05
    market_cap_threshold: float = 50_000.0

    high_tier_creator_pct: float = 0.40
    high_tier_delay: timedelta = timedelta(hours=48)

    low_tier_creator_pct: float = 0.20
    low_tier_delay: timedelta = timedelta(days=7)

    def to_dict(self) -> dict:
        return {
            'platform_fee_percentage': self.platform_fee_percentage,
            'market_cap_threshold': self.market_cap_threshold,
            'high_tier_creator_pct': self.high_tier_creator_pct,
            'high_tier_delay_hours': self.high_tier_delay.total_seconds() / 3600,
            'low_tier_creator_pct': self.low_tier_creator_pct,
            'low_tier_delay_hours': self.low_tier_delay.total_seconds() / 3600,
        }


def _env_flag(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class EngineConfig:
    """Master configuration"""

    fees: FeeConfig = field(default_factory=FeeConfig)

    # Ledger
    clamp_policy: ClampPolicy = ClampPolicy.FINAL

    # Curves
    strict_curve_types: bool = False        # raise instead of defaulting to linear
    default_curve: CurveType = CurveType.LINEAR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'EngineConfig':
        """
        Build config from LAUNCHPAD_* environment variables.

        LAUNCHPAD_CLAMP_POLICY   final | per_step
        LAUNCHPAD_STRICT_CURVES  1 / true to reject unknown curve types
        LAUNCHPAD_DEFAULT_CURVE  curve used when a token has none stored
        """
        env = os.environ if environ is None else environ
        config = cls()

        policy = env.get('LAUNCHPAD_CLAMP_POLICY')
        if policy:
            try:
                config.clamp_policy = ClampPolicy(policy.strip().lower())
            except ValueError:
                choices = [p.value for p in ClampPolicy]
                raise ValueError(f"LAUNCHPAD_CLAMP_POLICY must be one of {choices}, got {policy!r}") from None

        strict = env.get('LAUNCHPAD_STRICT_CURVES')
        if strict:
            config.strict_curve_types = _env_flag(strict)

        default_curve = env.get('LAUNCHPAD_DEFAULT_CURVE')
        if default_curve:
            config.default_curve = CurveType.parse(default_curve, strict=True)

        return config

    def to_dict(self) -> Dict[str, Any]:
        return {
            'fees': self.fees.to_dict(),
            'clamp_policy': self.clamp_policy.value,
            'strict_curve_types': self.strict_curve_types,
            'default_curve': self.default_curve.value,
        }


# Default configuration
DEFAULT_CONFIG = EngineConfig()
