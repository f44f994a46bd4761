"""Pure arithmetic for the bonding-curve engine.

Every function is stateless and operates on plain Python ints. Values model
unsigned 256-bit words: operands and results outside ``[0, MAX_UINT256]``
raise ``ArithmeticOverflow``. Products inside ``scaled_mul_div`` are carried at
double width, so ``x * y`` may exceed the word as long as the quotient fits.

Rounding is always floor (Python ``//`` on non-negative ints), except for
``mint_cost`` which rounds up so that the returned deposit is sufficient.
"""

from __future__ import annotations

from .errors import ArithmeticOverflow, InvalidCalculation, AmountTooSmall

WORD_BITS: int = 256
MAX_UINT256: int = (1 << WORD_BITS) - 1
BPS_SCALE: int = 10_000


# -- Checked word arithmetic -------------------------------------------------

def _require_word(value: int) -> int:
    if value < 0 or value > MAX_UINT256:
        raise ArithmeticOverflow(value)
    return value


def checked_add(a: int, b: int) -> int:
    return _require_word(_require_word(a) + _require_word(b))


def checked_sub(a: int, b: int) -> int:
    """``a - b``; raises on underflow instead of wrapping."""
    return _require_word(_require_word(a) - _require_word(b))


def checked_mul(a: int, b: int) -> int:
    return _require_word(_require_word(a) * _require_word(b))


# -- Kernel ------------------------------------------------------------------

def scaled_mul_div(x: int, y: int, denom: int) -> int:
    """``floor(x * y / denom)`` with a 512-bit intermediate product.

    Raises ``ArithmeticOverflow`` if ``denom == 0``, any operand is outside the
    word, or the quotient does not fit in 256 bits.
    """
    _require_word(x)
    _require_word(y)
    _require_word(denom)
    if denom == 0:
        raise ArithmeticOverflow(x, y, denom)
    return _require_word((x * y) // denom)


def floor_sqrt(n: int) -> int:
    """Largest ``s`` with ``s * s <= n`` (integer Newton iteration).

    The seed ``2**ceil(bits/2)`` is never below the true root, so the iterates
    decrease monotonically and the first non-decreasing step is the floor root.
    """
    if n < 0:
        raise ArithmeticOverflow(n)
    if n < 2:
        return n
    x = 1 << ((n.bit_length() + 1) // 2)
    while True:
        y = (x + n // x) // 2
        if y >= x:
            return x
        x = y


# -- Buy curve ---------------------------------------------------------------

def mint_amount(deposit: int, supply: int, buy_slope: int) -> int:
    """Token units minted for ``deposit`` at current ``supply``.

    ``x = floor_sqrt(floor(2 * deposit / buy_slope) + supply**2) - supply``
    """
    scaled = scaled_mul_div(2, deposit, buy_slope)
    root = floor_sqrt(checked_add(scaled, checked_mul(supply, supply)))
    if root <= supply:
        raise InvalidCalculation(root, supply)
    minted = root - supply
    if minted == 0:
        raise AmountTooSmall(deposit)
    return minted


def mint_cost(supply: int, amount: int, buy_slope: int) -> int:
    """Smallest deposit that mints at least ``amount`` units at ``supply``.

    ``ceil(buy_slope * ((supply + amount)**2 - supply**2) / 2)``
    """
    upper = checked_add(supply, amount)
    span = checked_sub(checked_mul(upper, upper), checked_mul(supply, supply))
    scaled = checked_mul(span, buy_slope)
    return (scaled + 1) // 2


def spot_price(supply: int, buy_slope: int) -> int:
    """Marginal buy price ``B(a) = buy_slope * a`` in native units per token."""
    return checked_mul(buy_slope, supply)


def split_payment(value: int, ratio_bps: int) -> tuple[int, int]:
    """Split ``value`` into ``(reserve_share, remainder)`` at ``ratio_bps``."""
    share = scaled_mul_div(value, ratio_bps, BPS_SCALE)
    return share, value - share


# -- Sell curve --------------------------------------------------------------

def sell_main_part(amount: int, supply: int, reserve: int) -> int:
    """``2Rx/a - (Rx/a) * x/a`` with each division floored."""
    term1 = scaled_mul_div(checked_mul(2, reserve), amount, supply)
    term2 = scaled_mul_div(scaled_mul_div(reserve, amount, supply), amount, supply)
    return checked_sub(term1, term2)


def burn_bonus(burned_amount: int, amount: int) -> int:
    """``floor(burned_amount / amount)``.

    Scales as ``1/amount``: small redemptions receive a proportionally larger
    share of the burned pool.
    """
    return scaled_mul_div(burned_amount, 1, amount)


def redeem_proceeds(amount: int, supply: int, reserve: int, burned_amount: int) -> tuple[int, int, int]:
    """Return ``(proceeds, main_part, bonus)`` for redeeming ``amount`` units."""
    main = sell_main_part(amount, supply, reserve)
    bonus = burn_bonus(burned_amount, amount)
    return checked_add(main, bonus), main, bonus
