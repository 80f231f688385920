# tests/test_complex_math.py
import math

import pytest

from acsim_core import ComplexNumber, ComplexDivisionError
from acsim_core import complex_math as cm


class TestComplexArithmetic:

    def test_add_sub_mul(self):
        a = ComplexNumber(1.0, 2.0)
        b = ComplexNumber(3.0, -1.0)
        assert cm.add(a, b) == ComplexNumber(4.0, 1.0)
        assert cm.sub(a, b) == ComplexNumber(-2.0, 3.0)
        # (1 + 2j)(3 - j) = 3 - j + 6j + 2 = 5 + 5j
        assert cm.mul(a, b) == ComplexNumber(5.0, 5.0)

    def test_operators_match_builtin_complex(self):
        a = ComplexNumber(1.5, -0.5)
        b = ComplexNumber(-2.0, 4.0)
        for ours, ref in [
            (a + b, complex(a) + complex(b)),
            (a - b, complex(a) - complex(b)),
            (a * b, complex(a) * complex(b)),
            (a / b, complex(a) / complex(b)),
            (-a, -complex(a)),
            (2 * a, 2 * complex(a)),
            (1 - a, 1 - complex(a)),
        ]:
            assert complex(ours) == pytest.approx(ref, rel=1e-12)

    def test_values_are_immutable(self):
        a = ComplexNumber(1.0, 1.0)
        with pytest.raises(AttributeError):
            a.re = 2.0
        b = a + 1
        assert a == ComplexNumber(1.0, 1.0)
        assert b == ComplexNumber(2.0, 1.0)

    def test_div(self):
        # (1 + j) / (1 - j) = j
        result = cm.div(ComplexNumber(1.0, 1.0), ComplexNumber(1.0, -1.0))
        assert result.re == pytest.approx(0.0, abs=1e-15)
        assert result.im == pytest.approx(1.0)

    @pytest.mark.parametrize("divisor", [ComplexNumber(0.0, 0.0), ComplexNumber(1e-7, 0.0), ComplexNumber(0.0, -5e-7)])
    def test_div_by_near_zero_raises(self, divisor):
        with pytest.raises(ComplexDivisionError) as excinfo:
            ComplexNumber(1.0, 0.0) / divisor
        assert excinfo.value.divisor == divisor
        assert isinstance(excinfo.value, ZeroDivisionError)

    def test_div_just_above_threshold_is_allowed(self):
        # |b|^2 = 4e-12 >= 1e-12
        result = ComplexNumber(1.0, 0.0) / ComplexNumber(2e-6, 0.0)
        assert result.re == pytest.approx(5e5)

    def test_div_by_nan_raises(self):
        with pytest.raises(ComplexDivisionError):
            ComplexNumber(1.0, 0.0) / ComplexNumber(math.nan, 0.0)

    def test_reciprocal_and_scale(self):
        assert complex(ComplexNumber(0.0, 2.0).reciprocal()) == pytest.approx(-0.5j)
        assert ComplexNumber(1.0, -2.0).scale(3.0) == ComplexNumber(3.0, -6.0)


class TestMagnitudeAndPhase:

    def test_abs_uses_hypot(self):
        assert cm.abs_(ComplexNumber(3.0, 4.0)) == 5.0
        big = ComplexNumber(1e200, 1e200)
        assert math.isfinite(abs(big))
        assert abs(big) == pytest.approx(math.sqrt(2) * 1e200)

    def test_conj(self):
        assert cm.conj(ComplexNumber(1.0, 2.0)) == ComplexNumber(1.0, -2.0)

    def test_from_polar(self):
        z = cm.from_polar(2.0, math.pi / 2)
        assert z.re == pytest.approx(0.0, abs=1e-15)
        assert z.im == pytest.approx(2.0)
        assert z.phase_degrees == pytest.approx(90.0)

    def test_phase_range(self):
        assert ComplexNumber(-1.0, 0.0).phase == pytest.approx(math.pi)
        assert ComplexNumber(0.0, -1.0).phase_degrees == pytest.approx(-90.0)

    def test_conversions(self):
        z = ComplexNumber.from_complex(3 - 4j)
        assert z == ComplexNumber(3.0, -4.0)
        assert ComplexNumber.coerce(2) == ComplexNumber(2.0, 0.0)
        assert ComplexNumber.coerce(z) is z
        assert str(z) == "(3 - 4j)"
        assert z.is_finite()
        assert not ComplexNumber(math.inf, 0.0).is_finite()
