# src/acsim_core/complex_math.py
"""
A minimal, immutable complex-number value type for phasor arithmetic.

Every operation is pure and returns a new `ComplexNumber`. Division is the only
operation that can fail: a divisor whose squared magnitude is below
`DIVISION_EPSILON` raises `ComplexDivisionError` instead of quietly producing NaN or
Inf, so that callers can classify the condition (e.g. a degenerate impedance).

The module-level functions (`add`, `sub`, `mul`, `div`, `abs_`, `conj`, `from_polar`)
mirror the methods and exist for callers that prefer a functional style.
"""
import logging
import math
from dataclasses import dataclass
from typing import Union

from .constants import DIVISION_EPSILON

logger = logging.getLogger(__name__)

Number = Union["ComplexNumber", complex, float, int]


class ComplexDivisionError(ZeroDivisionError):
    """Raised when dividing by a ComplexNumber whose magnitude is effectively zero."""

    def __init__(self, divisor: "ComplexNumber"):
        self.divisor = divisor
        super().__init__(
            f"Division by near-zero complex value {divisor} "
            f"(|b|^2 = {divisor.abs_squared():.3e} < {DIVISION_EPSILON:.0e})."
        )


@dataclass(frozen=True)
class ComplexNumber:
    """An immutable (re, im) pair."""
    re: float = 0.0
    im: float = 0.0

    # --- Construction ---

    @classmethod
    def coerce(cls, value: Number) -> "ComplexNumber":
        if isinstance(value, ComplexNumber):
            return value
        c = complex(value)
        return cls(c.real, c.imag)

    @classmethod
    def from_complex(cls, value: complex) -> "ComplexNumber":
        return cls(float(value.real), float(value.imag))

    @classmethod
    def from_polar(cls, magnitude: float, angle_radians: float) -> "ComplexNumber":
        return cls(magnitude * math.cos(angle_radians), magnitude * math.sin(angle_radians))

    @classmethod
    def zero(cls) -> "ComplexNumber":
        return cls(0.0, 0.0)

    # --- Arithmetic ---

    def add(self, other: Number) -> "ComplexNumber":
        o = ComplexNumber.coerce(other)
        return ComplexNumber(self.re + o.re, self.im + o.im)

    def sub(self, other: Number) -> "ComplexNumber":
        o = ComplexNumber.coerce(other)
        return ComplexNumber(self.re - o.re, self.im - o.im)

    def mul(self, other: Number) -> "ComplexNumber":
        o = ComplexNumber.coerce(other)
        return ComplexNumber(
            self.re * o.re - self.im * o.im,
            self.re * o.im + self.im * o.re,
        )

    def div(self, other: Number) -> "ComplexNumber":
        """
        Computes `self / other` as `(self * conj(other)) / |other|^2`.

        Raises:
            ComplexDivisionError: If `|other|^2` is below DIVISION_EPSILON.
        """
        o = ComplexNumber.coerce(other)
        denom = o.abs_squared()
        if not denom >= DIVISION_EPSILON:
            raise ComplexDivisionError(o)
        num = self.mul(o.conj())
        return ComplexNumber(num.re / denom, num.im / denom)

    def scale(self, factor: float) -> "ComplexNumber":
        return ComplexNumber(self.re * factor, self.im * factor)

    def reciprocal(self) -> "ComplexNumber":
        return ComplexNumber(1.0, 0.0).div(self)

    def conj(self) -> "ComplexNumber":
        return ComplexNumber(self.re, -self.im)

    # --- Magnitude & phase ---

    def abs(self) -> float:
        """Euclidean magnitude using hypot, which avoids intermediate overflow."""
        return math.hypot(self.re, self.im)

    def abs_squared(self) -> float:
        return self.re * self.re + self.im * self.im

    @property
    def phase(self) -> float:
        """Argument in radians, in (-pi, pi]."""
        return math.atan2(self.im, self.re)

    @property
    def phase_degrees(self) -> float:
        return math.degrees(self.phase)

    def is_finite(self) -> bool:
        return math.isfinite(self.re) and math.isfinite(self.im)

    # --- Python protocol ---

    def __complex__(self) -> complex:
        return complex(self.re, self.im)

    def __abs__(self) -> float:
        return self.abs()

    def __neg__(self) -> "ComplexNumber":
        return ComplexNumber(-self.re, -self.im)

    def __add__(self, other: Number) -> "ComplexNumber":
        return self.add(other)

    def __radd__(self, other: Number) -> "ComplexNumber":
        return ComplexNumber.coerce(other).add(self)

    def __sub__(self, other: Number) -> "ComplexNumber":
        return self.sub(other)

    def __rsub__(self, other: Number) -> "ComplexNumber":
        return ComplexNumber.coerce(other).sub(self)

    def __mul__(self, other: Number) -> "ComplexNumber":
        return self.mul(other)

    def __rmul__(self, other: Number) -> "ComplexNumber":
        return ComplexNumber.coerce(other).mul(self)

    def __truediv__(self, other: Number) -> "ComplexNumber":
        return self.div(other)

    def __rtruediv__(self, other: Number) -> "ComplexNumber":
        return ComplexNumber.coerce(other).div(self)

    def __str__(self) -> str:
        sign = "-" if self.im < 0 else "+"
        return f"({self.re:.6g} {sign} {abs(self.im):.6g}j)"


# --- Functional interface ---

def add(a: Number, b: Number) -> ComplexNumber:
    return ComplexNumber.coerce(a).add(b)

def sub(a: Number, b: Number) -> ComplexNumber:
    return ComplexNumber.coerce(a).sub(b)

def mul(a: Number, b: Number) -> ComplexNumber:
    return ComplexNumber.coerce(a).mul(b)

def div(a: Number, b: Number) -> ComplexNumber:
    return ComplexNumber.coerce(a).div(b)

def abs_(a: Number) -> float:
    return ComplexNumber.coerce(a).abs()

def conj(a: Number) -> ComplexNumber:
    return ComplexNumber.coerce(a).conj()

def from_polar(magnitude: float, angle_radians: float) -> ComplexNumber:
    return ComplexNumber.from_polar(magnitude, angle_radians)
