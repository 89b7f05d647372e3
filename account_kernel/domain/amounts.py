"""
Amounts -- Decimal coercion for monetary inputs.

Responsibility:
    Converts caller-supplied amounts into ``Decimal`` before they reach
    account arithmetic, so balances never accumulate binary float error.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - ValueError when the value is not a finite number.
    - TypeError when the value is not a number or numeric string.
"""

from decimal import Decimal, InvalidOperation

AmountLike = Decimal | int | str | float


def to_amount(value: AmountLike) -> Decimal:
    """
    Coerce a monetary value to ``Decimal``.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion. Sign is not checked.

    Raises:
        TypeError: for booleans and non-numeric types.
        ValueError: for non-numeric strings, NaN and infinities.
    """
    if isinstance(value, bool):
        raise TypeError("amount must be a number, got bool")
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, (int, str, float)):
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {value!r}") from e
    else:
        raise TypeError(f"amount must be Decimal, int, str or float, got {type(value)}")

    if not amount.is_finite():
        raise ValueError(f"Invalid amount: {value!r}")
    return amount
