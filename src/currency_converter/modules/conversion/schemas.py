from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from currency_converter.core.currency import normalize_currency_code, parse_amount


@dataclass(frozen=True)
class ConversionRequest:
    from_currency: str
    to_currency: str
    amount: Decimal

    @classmethod
    def parse(
        cls, *, from_currency: str, to_currency: str, amount: str | int | float | Decimal
    ) -> ConversionRequest:
        return cls(
            from_currency=normalize_currency_code(from_currency, field="source currency"),
            to_currency=normalize_currency_code(to_currency, field="target currency"),
            amount=parse_amount(amount),
        )


@dataclass(frozen=True)
class ConversionResult:
    from_currency: str
    to_currency: str
    amount: Decimal
    rate: Decimal
    converted: Decimal

    def format(self, *, show_rate: bool = False) -> str:
        line = f"{self.amount:f} {self.from_currency} = {self.converted:f} {self.to_currency}"
        if show_rate:
            line += f" (1 {self.from_currency} = {self.rate:f} {self.to_currency})"
        return line
