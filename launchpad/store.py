"""
Memory Store - Reference persistence layer.
==========================================

Holds tokens, per-token transaction ledgers and fee distributions,
and applies TradeResults. The "read supply -> quote -> persist"
sequence runs under a per-token lock so two concurrent trades on the
same token can never price against the same stale supply. Trades on
different tokens do not block each other.
"""

from collections import defaultdict
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Optional
import logging
import threading

from .config import EngineConfig, DEFAULT_CONFIG
from .errors import AlreadyDistributed, TokenNotFound
from .models import CurveType, FeeDistribution, Token, TradeRequest, TradeResult, Transaction
from .recorder import TransactionRecorder


logger = logging.getLogger(__name__)


class MemoryStore:
    """In-process token / transaction / fee-distribution store"""

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.recorder = TransactionRecorder(self.config)

        self._tokens: Dict[str, Token] = {}
        self._transactions: Dict[str, List[Transaction]] = defaultdict(list)
        self._distributions: Dict[str, FeeDistribution] = {}

        self._registry_lock = threading.Lock()
        self._token_locks: Dict[str, threading.Lock] = {}

    # === Tokens ===

    def add_token(
        self,
        token_id: str,
        symbol: str,
        creator_wallet: str,
        curve_type=None,
        launched: bool = True,
    ) -> Token:
        """Register a token. curve_type may be a CurveType or a stored string."""
        curve = CurveType.parse(
            curve_type if curve_type is not None else self.config.default_curve,
            strict=self.config.strict_curve_types,
            default=self.config.default_curve,
        )
        token = Token(
            id=token_id,
            symbol=symbol,
            creator_wallet=creator_wallet,
            curve_type=curve,
            launched=launched,
        )
        with self._registry_lock:
            self._tokens[token_id] = token
            self._token_locks.setdefault(token_id, threading.Lock())
        logger.debug(f"Registered {token!r}")
        return token

    def get_token(self, token_id: str) -> Optional[Token]:
        return self._tokens.get(token_id)

    def launch(self, token_id: str) -> Token:
        with self._lock_for(token_id):
            token = replace(self._require(token_id), launched=True)
            self._tokens[token_id] = token
            return token

    # === Ledger ===

    def transactions(self, token_id: str) -> List[Transaction]:
        return list(self._transactions.get(token_id, ()))

    def distributions(
        self,
        token_id: Optional[str] = None,
        creator_wallet: Optional[str] = None,
    ) -> List[FeeDistribution]:
        return [
            d for d in self._distributions.values()
            if (token_id is None or d.token_id == token_id)
            and (creator_wallet is None or d.creator_wallet == creator_wallet)
        ]

    def replace_distribution(self, distribution: FeeDistribution):
        """
        Persist a claimed copy of an existing distribution.

        Only the pending -> distributed transition is accepted; a stale
        copy can never overwrite a record that was already paid out.
        """
        with self._lock_for(distribution.token_id):
            stored = self._distributions.get(distribution.id)
            if stored is None:
                raise KeyError(distribution.id)
            if stored.distributed or not distribution.distributed:
                raise AlreadyDistributed(distribution.id)
            self._distributions[distribution.id] = distribution

    # === Trading ===

    def execute_trade(self, request: TradeRequest, now: Optional[datetime] = None) -> TradeResult:
        """
        Price, record and persist one trade atomically per token.

        Either all three writes (transaction, market cap, distribution)
        happen or none do.
        """
        with self._lock_for(request.token_id):
            token = self._tokens.get(request.token_id)
            result = self.recorder.record(
                token,
                self._transactions.get(request.token_id, ()),
                request,
                now=now,
            )
            self._transactions[token.id].append(result.transaction)
            self._tokens[token.id] = token.with_market_cap(result.updated_market_cap)
            self._distributions[result.fee_distribution.id] = result.fee_distribution
            return result

    def _lock_for(self, token_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._token_locks.get(token_id)
            if lock is None:
                if token_id not in self._tokens:
                    raise TokenNotFound(token_id)
                lock = self._token_locks[token_id] = threading.Lock()
            return lock

    def _require(self, token_id: str) -> Token:
        token = self._tokens.get(token_id)
        if token is None:
            raise TokenNotFound(token_id)
        return token
