"""`bonding_curve`: continuous bonding-curve token engine.

- quadratic buy curve, reserve/supply/burn-dependent sell curve,
- integer-only, floor-rounded arithmetic on 256-bit words,
- immutable parameters and ledger-state values (frozen dataclasses),
- guarded, all-or-nothing operations with effects before external transfers.

Public API:
- `CurveToken(params, token_ledger, native_ledger)` / `CurveToken.create(...)`
- `CurveToken.buy / rebuy / pay / sell / burn`
- `CurveToken.step(caller, params) -> StepResult`
"""

from .engine import CurveToken
from .errors import (
    AmountTooSmall,
    ArithmeticOverflow,
    CurveArithmeticError,
    CurveAuthorizationError,
    CurveError,
    CurveInvariantError,
    CurveValidationError,
    ExceedsTotalSupply,
    ExternalTransferError,
    InsufficientBalance,
    InsufficientContractBalance,
    InsufficientNativeBalance,
    InsufficientReserve,
    InvalidCalculation,
    InvalidRatio,
    OnlyOrganization,
    ReentrantCall,
    SinkAddress,
    TransferFailed,
    ZeroAddress,
    ZeroAmount,
    ZeroBuySlope,
    ZeroProceeds,
    ZeroValue,
)
from .math import floor_sqrt, scaled_mul_div
from .state import initial_state, state_from_dict, state_to_dict
from .types import (
    SINK_ADDRESS,
    ZERO_ADDRESS,
    Action,
    ActionParams,
    BuyQuote,
    CurveParameters,
    Event,
    LedgerState,
    Notification,
    SellQuote,
    StepResult,
)

__all__ = [
    "CurveToken",
    "CurveParameters",
    "LedgerState",
    "Action",
    "ActionParams",
    "Event",
    "Notification",
    "BuyQuote",
    "SellQuote",
    "StepResult",
    "SINK_ADDRESS",
    "ZERO_ADDRESS",
    "initial_state",
    "state_from_dict",
    "state_to_dict",
    "floor_sqrt",
    "scaled_mul_div",
    "CurveError",
    "CurveValidationError",
    "CurveArithmeticError",
    "CurveAuthorizationError",
    "ExternalTransferError",
    "CurveInvariantError",
    "ReentrantCall",
    "ZeroBuySlope",
    "InvalidRatio",
    "ZeroAddress",
    "SinkAddress",
    "ZeroValue",
    "ZeroAmount",
    "InsufficientBalance",
    "InsufficientNativeBalance",
    "ExceedsTotalSupply",
    "InsufficientReserve",
    "ZeroProceeds",
    "InsufficientContractBalance",
    "ArithmeticOverflow",
    "InvalidCalculation",
    "AmountTooSmall",
    "OnlyOrganization",
    "TransferFailed",
]
