"""Exception types for the bonding-curve engine.

Every error carries a stable ``code`` (used as the rejection string by
``step()`` in ``engine.py``) plus the arguments it was raised with.
"""

from __future__ import annotations


class CurveError(Exception):
    """Base class for every rejection raised by the curve engine."""

    code: str = "CurveError"

    def __init__(self, *args: object) -> None:
        self.values = args
        if args:
            detail = ", ".join(repr(a) for a in args)
            super().__init__(f"{self.code}({detail})")
        else:
            super().__init__(self.code)


# -- Validation --------------------------------------------------------------

class CurveValidationError(CurveError):
    """Zero amounts, zero identities, out-of-range ratios, insufficient funds."""


class ZeroBuySlope(CurveValidationError):
    code = "ZeroBuySlope"


class InvalidRatio(CurveValidationError):
    code = "InvalidRatio"

    def __init__(self, value: int, maximum: int) -> None:
        self.value = value
        self.maximum = maximum
        super().__init__(value, maximum)


class ZeroAddress(CurveValidationError):
    code = "ZeroAddress"


class SinkAddress(CurveValidationError):
    """The burn sink cannot receive minted units or act as a holder."""

    code = "SinkAddress"

    def __init__(self, identity: str | None) -> None:
        self.identity = identity
        super().__init__(identity)


class ZeroValue(CurveValidationError):
    code = "ZeroValue"


class ZeroAmount(CurveValidationError):
    code = "ZeroAmount"


class InsufficientBalance(CurveValidationError):
    code = "InsufficientBalance"

    def __init__(self, balance: int, needed: int) -> None:
        self.balance = balance
        self.needed = needed
        super().__init__(balance, needed)


class InsufficientNativeBalance(InsufficientBalance):
    code = "InsufficientNativeBalance"


class ExceedsTotalSupply(CurveValidationError):
    code = "ExceedsTotalSupply"

    def __init__(self, amount: int, total_supply: int) -> None:
        self.amount = amount
        self.total_supply = total_supply
        super().__init__(amount, total_supply)


class InsufficientReserve(CurveValidationError):
    code = "InsufficientReserve"


class ZeroProceeds(CurveValidationError):
    code = "ZeroProceeds"


class InsufficientContractBalance(CurveValidationError):
    code = "InsufficientContractBalance"

    def __init__(self, balance: int, needed: int) -> None:
        self.balance = balance
        self.needed = needed
        super().__init__(balance, needed)


# -- Arithmetic --------------------------------------------------------------

class CurveArithmeticError(CurveError):
    """Boundary conditions of the integer math (amount too small / too large)."""


class ArithmeticOverflow(CurveArithmeticError):
    code = "ArithmeticOverflow"


class InvalidCalculation(CurveArithmeticError):
    code = "InvalidCalculation"


class AmountTooSmall(CurveArithmeticError):
    code = "AmountTooSmall"


# -- Authorization -----------------------------------------------------------

class CurveAuthorizationError(CurveError):
    """Caller is not allowed to invoke the action."""


class OnlyOrganization(CurveAuthorizationError):
    code = "OnlyOrganization"

    def __init__(self, caller: str | None) -> None:
        self.caller = caller
        super().__init__(caller)


# -- External transfer -------------------------------------------------------

class ExternalTransferError(CurveError):
    """An outbound native transfer was rejected by its recipient."""


class TransferFailed(ExternalTransferError):
    code = "TransferFailed"


# -- Engine ------------------------------------------------------------------

class ReentrantCall(CurveError):
    """Raised when a guarded entry point is entered while another is running."""

    code = "ReentrantCall"


class CurveInvariantError(CurveError):
    """Raised when a post-state violates one or more invariants."""

    code = "InvariantViolation"

    def __init__(self, violations: list[str]) -> None:
        self.violations = violations
        super().__init__(*violations)
