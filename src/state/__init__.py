"""
Ledger collaborators for the curve engine
"""

from .native_ledger import NativeLedger
from .token_ledger import TokenLedger

__all__ = [
    "NativeLedger",
    "TokenLedger",
]
