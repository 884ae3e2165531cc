"""
Typesafe hbar amounts with exact conversions between denominations.

An Hbar wraps a signed 64-bit count of tinybar. Every conversion is exact:
amounts that have no integral tinybar equivalent, or do not fit in 64 bits,
raise HbarRangeError instead of being rounded or wrapped.
"""

from __future__ import annotations
from decimal import Decimal, Context, Inexact, InvalidOperation
from enum import Enum
from functools import total_ordering
from typing import Any, Union

from pydantic import GetCoreSchemaHandler
from pydantic_core import CoreSchema, core_schema

from .runtime.errors import HbarRangeError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

Amount = Union[int, Decimal, str]


class HbarUnit(Enum):
    """Denominations of hbar with their symbol and tinybar factor."""

    TINYBAR = ("tℏ", 1)
    MICROBAR = ("μℏ", 100)
    MILLIBAR = ("mℏ", 100_000)
    HBAR = ("ℏ", 100_000_000)
    KILOBAR = ("kℏ", 100_000_000_000)
    MEGABAR = ("Mℏ", 100_000_000_000_000)
    GIGABAR = ("Gℏ", 100_000_000_000_000_000)

    def __init__(self, symbol: str, tinybar: int):
        self.symbol = symbol
        self.tinybar = tinybar

    def __str__(self) -> str:
        return self.name.lower()

    @classmethod
    def from_symbol(cls, symbol: str) -> HbarUnit:
        for unit in cls:
            if unit.symbol == symbol:
                return unit
        raise HbarRangeError(f"unknown hbar unit symbol: {symbol!r}")


def _exact_context(amount: Decimal) -> Context:
    # Enough digits for amount * 10**17 without rounding; Inexact trips otherwise
    digits = len(amount.as_tuple().digits)
    return Context(prec=digits + 40, traps=[Inexact, InvalidOperation])


def _check_range(tinybar: int, description: str) -> int:
    if tinybar < INT64_MIN or tinybar > INT64_MAX:
        raise HbarRangeError(f"{description} is out of range for Hbar",
                             details={"tinybar": str(tinybar)})
    return tinybar


def _to_decimal(amount: Any) -> Decimal:
    if isinstance(amount, Decimal):
        return amount
    if isinstance(amount, float):
        # repr() is the shortest string that round-trips, so 0.1 stays 0.1
        return Decimal(repr(amount))
    try:
        return Decimal(str(amount).strip())
    except InvalidOperation as e:
        raise HbarRangeError(f"not a decimal amount: {amount!r}", cause=e)


@total_ordering
class Hbar:
    """
    An amount of hbar, stored as tinybar.

    May be positive, negative or zero. Hbar(1) is one hbar; use
    Hbar.from_tinybar for raw tinybar counts.
    """

    __slots__ = ("_tinybar",)

    ZERO: Hbar
    MIN: Hbar
    MAX: Hbar

    def __init__(self, amount: Amount = 0):
        """
        Wrap an amount of hbar.

        Args:
            amount: Whole or fractional hbar; fractional amounts must have an
                integral tinybar equivalent (1.23456789 is valid, 0.123456789 is not)

        Raises:
            HbarRangeError: If there is no exact, in-range tinybar equivalent
        """
        self._tinybar = Hbar._tinybar_of(amount, HbarUnit.HBAR)

    @classmethod
    def from_unit(cls, amount: Amount, unit: HbarUnit) -> Hbar:
        """
        Calculate an hbar amount from a value in the given unit.

        Args:
            amount: Amount in `unit`; may be negative and, as a Decimal or
                string, fractional
            unit: Unit to multiply the amount by

        Returns:
            The calculated hbar value

        Raises:
            HbarRangeError: If the tinybar equivalent is not an integer or
                does not fit in 64 bits
        """
        return cls.from_tinybar(cls._tinybar_of(amount, unit))

    @classmethod
    def from_tinybar(cls, amount: int) -> Hbar:
        """Wrap an amount of tinybar."""
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise HbarRangeError(f"tinybar amount must be an integer, got {amount!r}")
        hbar = cls.__new__(cls)
        hbar._tinybar = _check_range(amount, f"{amount} tinybar")
        return hbar

    @classmethod
    def from_string(cls, text: str, unit: HbarUnit = HbarUnit.HBAR) -> Hbar:
        """
        Parse `"<amount>"` or `"<amount> <symbol>"`, e.g. `"1.5 ℏ"` or `"-3 tℏ"`.
        """
        parts = text.strip().split(" ")
        if len(parts) == 2:
            unit = HbarUnit.from_symbol(parts[1])
        elif len(parts) != 1:
            raise HbarRangeError(f"cannot parse hbar amount: {text!r}")
        return cls.from_unit(parts[0], unit)

    @staticmethod
    def _tinybar_of(amount: Amount, unit: HbarUnit) -> int:
        if isinstance(amount, bool):
            raise HbarRangeError(f"not an hbar amount: {amount!r}")

        if isinstance(amount, int):
            return _check_range(amount * unit.tinybar, f"{amount} {unit}")

        value = _to_decimal(amount)
        if not value.is_finite():
            raise HbarRangeError(f"not a finite amount: {amount!r}")

        product = _exact_context(value).multiply(value, Decimal(unit.tinybar))
        if product != product.to_integral_value():
            if unit is HbarUnit.TINYBAR:
                raise HbarRangeError(f"tinybar amount is not an integer: {value}")
            raise HbarRangeError(
                f"tinybar equivalent of {value} {unit} ({product}) is not an integer",
                details={"amount": str(value), "unit": str(unit)},
            )
        return _check_range(int(product), f"{value} {unit}")

    def as_unit(self, unit: HbarUnit) -> Decimal:
        """
        Convert the value to a different unit; the result may be fractional.

        Args:
            unit: Unit to reinterpret the value as

        Returns:
            Exact decimal value in `unit`
        """
        if unit is HbarUnit.TINYBAR:
            return Decimal(self._tinybar)
        tinybar = Decimal(self._tinybar)
        return _exact_context(tinybar).divide(tinybar, Decimal(unit.tinybar))

    def as_tinybar(self) -> int:
        """Get the equivalent tinybar amount."""
        return self._tinybar

    def negated(self) -> Hbar:
        """Return the additive inverse."""
        return Hbar.from_tinybar(-self._tinybar)

    def __neg__(self) -> Hbar:
        return self.negated()

    def __str__(self) -> str:
        return f"{self._tinybar} {HbarUnit.TINYBAR.symbol}"

    def __repr__(self) -> str:
        return f"Hbar.from_tinybar({self._tinybar})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Hbar):
            return NotImplemented
        return self._tinybar == other._tinybar

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Hbar):
            return NotImplemented
        return self._tinybar < other._tinybar

    def __hash__(self) -> int:
        return hash(self._tinybar)

    @classmethod
    def __get_pydantic_core_schema__(
        cls,
        source_type: Any,
        handler: GetCoreSchemaHandler,
    ) -> CoreSchema:
        """Accept Hbar instances, or hbar amounts as int/Decimal/str."""
        return core_schema.no_info_before_validator_function(
            cls._validate,
            core_schema.is_instance_schema(cls),
        )

    @classmethod
    def _validate(cls, value: Any) -> Hbar:
        if isinstance(value, cls):
            return value
        return cls(value)


Hbar.ZERO = Hbar.from_tinybar(0)
Hbar.MIN = Hbar(-50_000_000_000)
Hbar.MAX = Hbar(50_000_000_000)


__all__ = ["Hbar", "HbarUnit"]
