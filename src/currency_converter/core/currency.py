from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation

from currency_converter.core.errors import InvalidArgumentError

_CODE_RE = re.compile(r"^[A-Za-z]{3}$")


def normalize_currency_code(raw: str | None, *, field: str = "currency") -> str:
    code = (raw or "").strip()
    if not _CODE_RE.match(code):
        raise InvalidArgumentError(f"Invalid {field} code: {raw!r} (expected 3 letters)")
    return code.upper()


def parse_amount(raw: str | int | float | Decimal) -> Decimal:
    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation as e:
        raise InvalidArgumentError(f"Invalid amount: {raw!r}") from e
    if not amount.is_finite():
        raise InvalidArgumentError(f"Invalid amount: {raw!r} (must be finite)")
    if amount < 0:
        raise InvalidArgumentError(f"Invalid amount: {raw!r} (must not be negative)")
    return amount.copy_abs()
