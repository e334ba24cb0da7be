"""
Fee Claims - Paying out accrued creator fees.

A FeeDistribution becomes claimable once its eligible_timestamp has
passed. Claiming returns a new record with distributed=True; the
source record is never mutated and eligible_timestamp is never recomputed.

Usage:
    from launchpad.claims import process_distributions, summarize

    claimed, skipped = process_distributions(store.distributions(), now)
    for d in claimed:
        store.replace_distribution(d)
"""
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Iterable, List, Optional, Tuple
import logging

from .errors import AlreadyDistributed, NotYetEligible, WalletMismatch
from .models import FeeDistribution, utcnow


logger = logging.getLogger(__name__)


def is_eligible(distribution: FeeDistribution, now: Optional[datetime] = None) -> bool:
    return (now or utcnow()) >= distribution.eligible_timestamp


def claim(
    distribution: FeeDistribution,
    wallet: Optional[str] = None,
    now: Optional[datetime] = None,
) -> FeeDistribution:
    """
    Mark one distribution as paid out.

    Raises:
        AlreadyDistributed: distributed is already True
        WalletMismatch: wallet given and not the token creator
        NotYetEligible: eligible_timestamp still in the future
    """
    now = now or utcnow()
    if distribution.distributed:
        raise AlreadyDistributed(distribution.id)
    if wallet is not None and wallet != distribution.creator_wallet:
        raise WalletMismatch(distribution.id, wallet)
    if not is_eligible(distribution, now):
        raise NotYetEligible(distribution.id, distribution.eligible_timestamp)

    return replace(distribution, distributed=True, distributed_at=now)


def process_distributions(
    distributions: Iterable[FeeDistribution],
    now: Optional[datetime] = None,
    creator_wallet: Optional[str] = None,
) -> Tuple[List[FeeDistribution], List[FeeDistribution]]:
    """
    Batch payout pass.

    Returns (claimed, skipped). Already-distributed records are
    ignored entirely; pending ones land in skipped.
    """
    now = now or utcnow()
    claimed: List[FeeDistribution] = []
    skipped: List[FeeDistribution] = []

    for d in distributions:
        if d.distributed:
            continue
        if creator_wallet is not None and d.creator_wallet != creator_wallet:
            continue
        if not is_eligible(d, now):
            logger.debug(f"Distribution {d.id} pending until {d.eligible_timestamp.isoformat()}")
            skipped.append(d)
            continue
        claimed.append(claim(d, now=now))

    if claimed:
        logger.info(
            f"Distributed {len(claimed)} fee records, "
            f"{sum(d.amount for d in claimed):.6f} SOL total"
        )
    return claimed, skipped


def time_until(now: datetime, timestamp: datetime) -> Tuple[int, int]:
    """(days, hours) left until timestamp, (0, 0) if already passed"""
    remaining = timestamp - now
    if remaining <= timedelta(0):
        return 0, 0
    hours_total = int(remaining.total_seconds() // 3600)
    return hours_total // 24, hours_total % 24


@dataclass
class ClaimSummary:
    """Creator's unclaimed fee position at a point in time"""
    total_unclaimed: float
    claimable: float
    pending: float
    claimable_count: int
    pending_count: int
    next_eligible_at: Optional[datetime] = None
    next_eligible_in: Optional[Tuple[int, int]] = None

    def to_dict(self) -> dict:
        return {
            'total_unclaimed': self.total_unclaimed,
            'claimable': self.claimable,
            'pending': self.pending,
            'claimable_count': self.claimable_count,
            'pending_count': self.pending_count,
            'next_eligible_at': self.next_eligible_at.isoformat() if self.next_eligible_at else None,
            'next_eligible_in': self.next_eligible_in,
        }


def summarize(
    distributions: Iterable[FeeDistribution],
    now: Optional[datetime] = None,
) -> ClaimSummary:
    now = now or utcnow()
    open_ = [d for d in distributions if not d.distributed]
    ready = [d for d in open_ if is_eligible(d, now)]
    waiting = [d for d in open_ if not is_eligible(d, now)]

    next_at = min((d.eligible_timestamp for d in waiting), default=None)

    return ClaimSummary(
        total_unclaimed=sum(d.amount for d in open_),
        claimable=sum(d.amount for d in ready),
        pending=sum(d.amount for d in waiting),
        claimable_count=len(ready),
        pending_count=len(waiting),
        next_eligible_at=next_at,
        next_eligible_in=time_until(now, next_at) if next_at else None,
    )
