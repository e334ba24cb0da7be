"""
Engine Errors
=============

Every failure is raised synchronously to the immediate caller.
Nothing here is retried; a caller that wants retries owns them.
"""


class LaunchpadError(Exception):
    """Base class for all engine failures"""


class TokenNotFound(LaunchpadError):
    def __init__(self, token_id: str):
        self.token_id = token_id
        super().__init__(f"Token not found: {token_id}")


class TokenNotLaunched(LaunchpadError):
    def __init__(self, token_id: str):
        self.token_id = token_id
        super().__init__(f"Token {token_id} has not launched yet")


class InvalidAmount(LaunchpadError):
    """Requested amount is missing, non-positive, non-finite or exceeds supply"""


class InvalidCurveType(LaunchpadError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"Unknown bonding curve type: {value!r}")


class PriceCalculationError(LaunchpadError):
    """Curve produced a price the downstream math cannot use"""


# === Fee claims ===

class FeeClaimError(LaunchpadError):
    """Base class for fee-distribution claim failures"""


class AlreadyDistributed(FeeClaimError):
    def __init__(self, distribution_id: str):
        self.distribution_id = distribution_id
        super().__init__(f"Fee distribution {distribution_id} was already paid out")


class NotYetEligible(FeeClaimError):
    def __init__(self, distribution_id: str, eligible_timestamp):
        self.distribution_id = distribution_id
        self.eligible_timestamp = eligible_timestamp
        super().__init__(
            f"Fee distribution {distribution_id} is not claimable until "
            f"{eligible_timestamp.isoformat()}"
        )


class WalletMismatch(FeeClaimError):
    def __init__(self, distribution_id: str, wallet: str):
        self.distribution_id = distribution_id
        self.wallet = wallet
        super().__init__(f"Wallet {wallet} is not the creator for fee distribution {distribution_id}")
