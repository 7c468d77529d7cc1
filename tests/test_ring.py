import dataclasses
from math import sqrt

import pytest

from quadint import InvalidConstructionError, QuadraticRing


class TestConstruction:
    """Tests for QuadraticRing.__init__"""

    @pytest.mark.parametrize("d", [-1, -2, -3, -5, -7, -163, -2147483647])
    def test_valid(self, d):
        """Negative squarefree radicands are accepted"""
        assert QuadraticRing(d).d == d

    @pytest.mark.parametrize("d", [0, 1, 5, -4, -12, -18, -25])
    def test_invalid(self, d):
        """Non-negative and non-squarefree radicands are rejected"""
        with pytest.raises(InvalidConstructionError):
            QuadraticRing(d)

    def test_invalid_type(self):
        """Only integers make radicands"""
        with pytest.raises(InvalidConstructionError):
            QuadraticRing(-1.0)

    def test_value_error(self):
        """Construction errors are ValueErrors"""
        with pytest.raises(ValueError):
            QuadraticRing(-12)

    def test_frozen(self):
        """Rings do not change after construction"""
        ring = QuadraticRing(-7)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ring.d = -3


class TestDerived:
    """Tests for the fields computed at construction"""

    def test_abs_d(self):
        """abs_d is -d"""
        assert QuadraticRing(-1).abs_d == 1
        assert QuadraticRing(-7).abs_d == 7
        assert QuadraticRing(-163).abs_d == 163

    def test_sqrt_abs_d(self):
        """sqrt_abs_d approximates sqrt(|d|)"""
        assert QuadraticRing(-1).sqrt_abs_d == 1.0
        assert QuadraticRing(-2).sqrt_abs_d == pytest.approx(sqrt(2))
        assert QuadraticRing(-7).sqrt_abs_d == pytest.approx(sqrt(7))

    def test_has_half_integers(self):
        """Only d = 1 (mod 4) gives half-integers"""
        for d in (-3, -7, -11, -15, -19, -163):
            assert QuadraticRing(d).has_half_integers

        for d in (-1, -2, -5, -6, -10, -13):
            assert not QuadraticRing(d).has_half_integers

    def test_discriminant(self):
        """d for d = 1 (mod 4), else 4d"""
        assert QuadraticRing(-1).discriminant == -4
        assert QuadraticRing(-2).discriminant == -8
        assert QuadraticRing(-3).discriminant == -3
        assert QuadraticRing(-7).discriminant == -7


class TestEq:
    """Tests for __eq__ and __hash__"""

    def test_main(self):
        """Rings are equal exactly when their radicands are"""
        assert QuadraticRing(-7) == QuadraticRing(-7)
        assert QuadraticRing(-7) != QuadraticRing(-3)
        assert hash(QuadraticRing(-7)) == hash(QuadraticRing(-7))
        assert len({QuadraticRing(-1), QuadraticRing(-1), QuadraticRing(-2)}) == 2


class TestText:
    """Tests for the text forms"""

    def test_str(self):
        """Unicode form"""
        assert str(QuadraticRing(-1)) == "Z[i]"
        assert str(QuadraticRing(-2)) == "Z[√-2]"
        assert str(QuadraticRing(-3)) == "Z[ω]"
        assert str(QuadraticRing(-7)) == "O_(Q(√-7))"

    def test_ascii(self):
        """ASCII form"""
        assert QuadraticRing(-1).to_ascii() == "Z[i]"
        assert QuadraticRing(-2).to_ascii() == "Z[sqrt(-2)]"
        assert QuadraticRing(-3).to_ascii() == "Z[omega]"
        assert QuadraticRing(-7).to_ascii() == "O_(Q(sqrt(-7)))"

    def test_tex(self):
        """TeX form with either letter style"""
        assert QuadraticRing(-1).to_tex() == r"\mathbb Z[i]"
        assert QuadraticRing(-2).to_tex() == r"\mathbb Z[\sqrt{-2}]"
        assert QuadraticRing(-2).to_tex(blackboard_bold=False) == r"\textbf Z[\sqrt{-2}]"
        assert QuadraticRing(-3).to_tex() == r"\mathbb Z[\omega]"
        assert QuadraticRing(-7).to_tex() == r"\mathcal O_{\mathbb Q(\sqrt{-7})}"
        assert QuadraticRing(-7).to_tex(blackboard_bold=False) == r"\mathcal O_{\textbf Q(\sqrt{-7})}"

    def test_html(self):
        """HTML form with either letter style"""
        assert QuadraticRing(-1).to_html() == "ℤ[<i>i</i>]"
        assert QuadraticRing(-1).to_html(blackboard_bold=False) == "<b>Z</b>[<i>i</i>]"
        assert QuadraticRing(-2).to_html() == "ℤ[&radic;-2]"
        assert QuadraticRing(-7).to_html() == "<i>O</i><sub>ℚ(&radic;(-7))</sub>"

    def test_filename(self):
        """File name form"""
        assert QuadraticRing(-1).to_filename() == "ZI"
        assert QuadraticRing(-2).to_filename() == "ZI2"
        assert QuadraticRing(-3).to_filename() == "ZW"
        assert QuadraticRing(-7).to_filename() == "OQI7"
