"""Order reference numbers with the Estonian 7-3-1 check digit."""

from __future__ import annotations

from itertools import cycle
from typing import Final, Union

from ..domain.errors import InvalidFieldValueError
from .ipizza import fields as f

WEIGHTS: Final[tuple[int, ...]] = (7, 3, 1)


def reference_check_digit(base: str) -> int:
    """Compute the 7-3-1 check digit for a string of decimal digits.

    Digits are weighted 7, 3, 1, 7, 3, 1, ... starting from the rightmost one;
    the check digit brings the weighted sum up to the next multiple of ten.
    """
    weighted = zip(reversed(base), cycle(WEIGHTS))
    total = sum(int(digit) * weight for digit, weight in weighted)
    return (10 - total % 10) % 10


def generate_order_reference(order_id: Union[int, str]) -> str:
    """Append the 7-3-1 check digit to a numeric order id.

    Raises:
        InvalidFieldValueError: If the order id is not a non-negative integer.
    """
    base = str(order_id).strip()
    if not base.isdigit() or not base.isascii():
        raise InvalidFieldValueError(
            f.ORDER_ID, order_id, reason="order reference needs a numeric order id"
        )
    return f"{base}{reference_check_digit(base)}"
