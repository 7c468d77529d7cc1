from math import gcd, sqrt
from operator import index
from typing import Optional, Union

from quadint.errors import (
    ArithmeticOverflowError,
    DegreeOverflowError,
    DivisionByZeroError,
    InvalidConstructionError,
    NotDivisibleError,
    UnsupportedDomainError,
)
from quadint.ring import INT32_MAX, INT32_MIN, INT64_MAX, QuadraticRing

OP_TYPES = Union["quadint", int]


def _truncate_div(a: int, b: int) -> int:
    """a/b rounded towards zero. b must be nonzero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _round_div_ties_away_from_zero(a: int, b: int) -> int:
    """Round a/b to nearest integer; ties go away from zero. b must be > 0."""
    if b <= 0:
        raise ValueError("b must be > 0")

    if a >= 0:
        return (a + (b // 2)) // b

    # a < 0
    return -((-a + (b // 2)) // b)


def _check_range(real: int, imag: int, what: str, ring: QuadraticRing) -> None:
    """Reject components that do not fit a signed 32-bit integer."""
    if real < INT32_MIN or real > INT32_MAX:
        raise ArithmeticOverflowError(f"Real part of {what} exceeds int range: {real} + {imag}*sqrt({ring.d})")
    if imag < INT32_MIN or imag > INT32_MAX:
        raise ArithmeticOverflowError(f"Imaginary part of {what} exceeds int range: {real} + {imag}*sqrt({ring.d})")


def nearest_element(real: int, imag: int, den: int, ring: QuadraticRing) -> "quadint":
    """
    The element of ring closest to (real + imag*sqrt(d))/den.

    Args:
        real: Numerator of the real coordinate.
        imag: Numerator of the sqrt(d) coordinate.
        den: Common denominator, must be > 0.
        ring: The ring to round into.

    Returns:
        quadint: The nearest element under the norm metric.
    """
    if not ring.has_half_integers:
        return quadint(_round_div_ties_away_from_zero(real, den), _round_div_ties_away_from_zero(imag, den), ring)

    # Work in halves: we want X/2 ~ real/den and Y/2 ~ imag/den with X, Y of equal parity.
    x0 = _round_div_ties_away_from_zero(2 * real, den)
    y0 = _round_div_ties_away_from_zero(2 * imag, den)

    best_x, best_y = x0, y0
    best_metric: Optional[int] = None

    # metric is the scaled norm of the rounding error: (X*den - 2*real)^2 + |d|*(Y*den - 2*imag)^2
    for x in (x0 - 1, x0, x0 + 1):
        dx = x * den - 2 * real
        for y in (y0 - 1, y0, y0 + 1):
            if (x ^ y) & 1:
                continue

            dy = y * den - 2 * imag
            metric = dx * dx + ring.abs_d * dy * dy
            if best_metric is None or metric < best_metric:
                best_metric = metric
                best_x, best_y = x, y

    return quadint(best_x, best_y, ring, 2)


class quadint:
    """
    Imaginary quadratic integer.

    Internally stored in "numerator units" as (a, b, denom) representing:
        (a + b*sqrt(d)) / denom

    with d the radicand of the owning ring.

    Normal form:
        denom == 2 only for the half-integers of rings with d = 1 (mod 4), and then a, b are both odd.
        Otherwise denom == 1.

    Notes:
      - Values are immutable.
      - A purely real value (b == 0) is the same number in every ring, so it compares equal
        across rings and adopts the other operand's ring in binary operations.
      - Components are kept within the signed 32-bit range. Arithmetic that leaves it
        raises ArithmeticOverflowError instead of wrapping.
    """

    __slots__ = ("_a", "_b", "_ring", "_denom")

    _a: int
    _b: int
    _ring: QuadraticRing
    _denom: int

    def __init__(self, a: int, b: int, ring: QuadraticRing, denom: int = 1) -> None:
        """
        Initialize a quadint.

        Args:
            a: Numerator of the real part.
            b: Numerator of the coefficient of sqrt(d).
            ring: The ring the number lives in.
            denom: 1 or 2 (or -1, -2, which flip the signs of a and b).
                So 5/2 + sqrt(-7)/2 is quadint(5, 1, QuadraticRing(-7), 2).

        Raises:
            InvalidConstructionError: If denom is not 1 or 2, the parities of a and b disagree for denom 2,
                halves are requested in a ring without half-integers, or a component is out of range.
        """
        try:
            a0, b0, k = index(a), index(b), index(denom)
        except TypeError as e:
            raise InvalidConstructionError(f"Integer components required, got {a!r}, {b!r}, {denom!r}") from e

        if not isinstance(ring, QuadraticRing):
            raise InvalidConstructionError(f"QuadraticRing required, got {ring!r}")

        if k == -1 or k == -2:
            a0, b0, k = -a0, -b0, -k

        if k != 1 and k != 2:
            raise InvalidConstructionError("Parameter denom must be 1 or 2")

        if k == 2:
            if (a0 ^ b0) & 1:
                raise InvalidConstructionError("Parity of parameter a must match parity of parameter b")

            if (a0 & 1) == 0:
                a0 //= 2
                b0 //= 2
                k = 1
            elif not ring.has_half_integers:
                raise InvalidConstructionError(
                    f"{ring.to_ascii()} has no half-integers; a and b must both be even, or denom must be 1")

        if not (INT32_MIN <= a0 <= INT32_MAX and INT32_MIN <= b0 <= INT32_MAX):
            raise InvalidConstructionError(f"Components ({a0}, {b0}) do not fit the int range")

        self._a, self._b, self._ring, self._denom = a0, b0, ring, k

    # region constructors / conversions
    @classmethod
    def _make(cls, real: int, imag: int, ring: QuadraticRing, denom: int, what: str) -> "quadint":
        """Range-check the raw result of an operation, then normalize it through the constructor."""
        _check_range(real, imag, what, ring)
        return cls(real, imag, ring, denom)

    def _from_obj(self, n: OP_TYPES) -> "quadint":
        """Convert an int to a purely real quadint in our ring"""
        if isinstance(n, int):
            if n < INT32_MIN or n > INT32_MAX:
                raise ArithmeticOverflowError(f"Operand {n} exceeds int range")
            return quadint(n, 0, self._ring)

        return n
    # endregion

    # region accessors
    @property
    def a(self) -> int:
        """Real part numerator (multiplied by denom)."""
        return self._a

    @property
    def b(self) -> int:
        """sqrt(d) coefficient numerator (multiplied by denom)."""
        return self._b

    @property
    def ring(self) -> QuadraticRing:
        return self._ring

    @property
    def denom(self) -> int:
        """2 for half-integers, 1 otherwise."""
        return self._denom

    def real_part_numeric(self) -> float:
        """The real part, e.g. -0.5 for -1/2 + sqrt(-7)/2."""
        return self._a / self._denom

    def imag_part_numeric(self) -> float:
        """The imaginary part divided by i, e.g. ~1.3229 for -1/2 + sqrt(-7)/2. Approximate."""
        return self._b * self._ring.sqrt_abs_d / self._denom

    def twice_real_part(self) -> int:
        return self._a if self._denom == 2 else 2 * self._a

    def twice_imag_part(self) -> int:
        return self._b if self._denom == 2 else 2 * self._b
    # endregion

    # region derived quantities
    def algebraic_degree(self) -> int:
        """0 for zero, 1 for other purely real numbers, 2 otherwise."""
        if self._b == 0:
            return 0 if self._a == 0 else 1
        return 2

    def trace(self) -> int:
        """The number plus its conjugate."""
        return self.twice_real_part()

    def norm(self) -> int:
        """
        The number times its conjugate:
            N((a + b*sqrt(d))/k) = (a^2 + |d|*b^2) / k^2

        Always a non-negative integer.

        Raises:
            ArithmeticOverflowError: If the norm does not fit a signed 64-bit integer.

        Returns:
            int: The norm.
        """
        n = self._a * self._a + self._ring.abs_d * self._b * self._b
        if self._denom == 2:
            # a, b odd and |d| = 3 (mod 4), so this is exact
            n //= 4

        if n > INT64_MAX:
            raise ArithmeticOverflowError(f"Overflow has occurred for the computation of the norm of {self}")

        return n

    def min_polynomial(self) -> tuple[int, int, int]:
        """
        Coefficients of the minimal polynomial, constant term first.

        For 5/2 + sqrt(-7)/2 this is (8, -5, 1), i.e. x^2 - 5x + 8. Zero gives (0, 1, 0), i.e. x.
        """
        degree = self.algebraic_degree()
        if degree == 0:
            return 0, 1, 0
        if degree == 1:
            return -self._a, 1, 0
        return self.norm(), -self.trace(), 1

    def conjugate(self) -> "quadint":
        """(a + b*sqrt(d))/k -> (a - b*sqrt(d))/k"""
        if self._b == 0:
            return self
        return quadint(self._a, -self._b, self._ring, self._denom)

    def __abs__(self) -> float:
        """
        Distance from 0.

        Exact for purely real numbers and for purely imaginary Gaussian integers,
        a floating point approximation otherwise.
        """
        if self._b == 0:
            return float(abs(self._a))

        if self._a == 0 and self._ring.d == -1:
            return float(abs(self._b))

        hypotenuse_square = float(self._a * self._a) + float(self._b * self._b) * self._ring.abs_d
        if self._denom == 2:
            hypotenuse_square /= 4
        return sqrt(hypotenuse_square)
    # endregion

    # region arithmetic
    def _common_ring(self, other: "quadint", imaginary_product: bool = False) -> QuadraticRing:
        """
        The ring an operation on self and other takes place in.

        A purely real operand carries no ring information, so the other operand's ring wins.

        Args:
            other: The other operand.
            imaginary_product: Whether two purely imaginary numbers from different rings
                produce a real quadratic integer (true for * and /).

        Raises:
            UnsupportedDomainError: For purely imaginary operands of different rings when imaginary_product is set.
            DegreeOverflowError: For any other pair of operands from different rings.

        Returns:
            QuadraticRing: The ring of the result.
        """
        if other._b == 0:
            return self._ring
        if self._b == 0:
            return other._ring

        if self._ring.d != other._ring.d:
            if imaginary_product and self._a == 0 and other._a == 0:
                raise UnsupportedDomainError(
                    f"This operation on {self} and {other} would result in a real quadratic integer, "
                    "which is not supported", self, other)

            raise DegreeOverflowError(
                f"This operation on {self} and {other} would result in an algebraic integer of degree 4",
                self, other)

        return self._ring

    def _add(self, other: "quadint", sign: int, what: str) -> "quadint":
        """self + sign*other, with both denominators brought to the larger one."""
        ring = self._common_ring(other)

        a1, b1, k1 = self._a, self._b, self._denom
        a2, b2, k2 = other._a, other._b, other._denom

        if k1 == k2:
            real, imag, denom = a1 + sign * a2, b1 + sign * b2, k1
        elif k1 == 1:
            real, imag, denom = 2 * a1 + sign * a2, 2 * b1 + sign * b2, 2
        else:
            real, imag, denom = a1 + 2 * sign * a2, b1 + 2 * sign * b2, 2

        return self._make(real, imag, ring, denom, what)

    def __add__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, int):
            other = self._from_obj(other)

        if isinstance(other, quadint):
            return self._add(other, 1, "sum")

        return NotImplemented

    def __radd__(self, other: int) -> "quadint":
        return self.__add__(other)

    def __sub__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, int):
            other = self._from_obj(other)

        if isinstance(other, quadint):
            return self._add(other, -1, "subtraction")

        return NotImplemented

    def __rsub__(self, other: int) -> "quadint":
        if isinstance(other, int):
            return self._from_obj(other)._add(self, -1, "subtraction")

        return NotImplemented

    def __neg__(self) -> "quadint":
        return self._make(-self._a, -self._b, self._ring, self._denom, "negation")

    def __pos__(self) -> "quadint":
        return self

    def __mul__(self, other: OP_TYPES) -> "quadint":
        if isinstance(other, int):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return NotImplemented

        ring = self._common_ring(other, imaginary_product=True)

        a1, b1, k1 = self._a, self._b, self._denom
        a2, b2, k2 = other._a, other._b, other._denom

        real = a1 * a2 - b1 * b2 * ring.abs_d
        imag = a1 * b2 + b1 * a2
        denom = k1 * k2

        # Only two half-integers give denominator 4, and their product numerators are always even.
        if denom == 4:
            real //= 2
            imag //= 2
            denom = 2

        return self._make(real, imag, ring, denom, "product")

    def __rmul__(self, other: int) -> "quadint":
        return self.__mul__(other)

    def __pow__(self, exp: int) -> "quadint":
        e = index(exp)
        if e < 0:
            raise ValueError("Negative powers not supported")

        result = quadint(1, 0, self._ring)  # multiplicative identity
        base: quadint = self
        while e:
            if e & 1:
                result = result * base

            e >>= 1
            if e:
                base = base * base

        return result

    # region division
    def _divide(self, divisor: "quadint") -> "quadint":
        """
        Exact division.

        Multiplying numerator and denominator by the conjugate of the divisor gives
            self / divisor = (re + im*sqrt(d)) / (N(divisor) * k1 * k2)
        which is reduced and then checked for being an element of the ring.

        Raises:
            DivisionByZeroError: If divisor is 0.
            NotDivisibleError: If the quotient is not in the ring. Carries the reduced fraction.

        Returns:
            quadint: The quotient.
        """
        if not divisor:
            raise DivisionByZeroError("Division by 0 is not allowed")

        ring = self._common_ring(divisor, imaginary_product=True)

        a1, b1, k1 = self._a, self._b, self._denom
        a2, b2, k2 = divisor._a, divisor._b, divisor._denom

        num_real = a1 * a2 + b1 * b2 * ring.abs_d
        num_imag = b1 * a2 - a1 * b2
        num_denom = divisor.norm() * k1 * k2

        cut_down = gcd(num_real, num_imag, num_denom)
        num_real //= cut_down
        num_imag //= cut_down
        num_denom //= cut_down

        if num_denom == 1:
            divisible = True
        elif num_denom == 2:
            divisible = ring.has_half_integers and ((num_real ^ num_imag) & 1) == 0
        else:
            divisible = False

        if not divisible:
            raise NotDivisibleError(f"{self} is not divisible by {divisor}",
                                    num_real, num_imag, num_denom, ring.d)

        return self._make(num_real, num_imag, ring, num_denom, "division")

    def __truediv__(self, other: OP_TYPES) -> "quadint":
        """Exact division, raising NotDivisibleError when the quotient is not in the ring."""
        if isinstance(other, int):
            other = self._from_obj(other)

        if isinstance(other, quadint):
            return self._divide(other)

        return NotImplemented

    def __rtruediv__(self, other: int) -> "quadint":
        if isinstance(other, int):
            return self._from_obj(other)._divide(self)

        return NotImplemented

    def __divmod__(self, other: OP_TYPES) -> tuple["quadint", "quadint"]:
        """
        Nearest-lattice division:
            self = q * other + r

        In the norm-Euclidean rings (d = -1, -2, -3, -7, -11) r always has a smaller norm than other.

        Returns:
            (q, r)

        Raises:
            DivisionByZeroError: if other == 0
        """
        if isinstance(other, int):
            other = self._from_obj(other)

        if not isinstance(other, quadint):
            return NotImplemented

        try:
            q = self._divide(other)
        except NotDivisibleError as nde:
            q = nde.round_to_nearest()

        return q, self - q * other

    def __floordiv__(self, other: OP_TYPES) -> "quadint":
        q, _ = divmod(self, other)
        return q

    def __mod__(self, other: OP_TYPES) -> "quadint":
        _, r = divmod(self, other)
        return r
    # endregion

    # region named forms
    def plus(self, other: OP_TYPES) -> "quadint":
        """Same as self + other"""
        return self + other

    def minus(self, other: OP_TYPES) -> "quadint":
        """Same as self - other"""
        return self - other

    def times(self, other: OP_TYPES) -> "quadint":
        """Same as self * other"""
        return self * other

    def divides(self, other: OP_TYPES) -> "quadint":
        """Same as self / other"""
        return self / other
    # endregion
    # endregion

    def __bool__(self) -> bool:
        return (self._a | self._b) != 0

    def __eq__(self, other: object) -> bool:
        if isinstance(other, int):
            return self._b == 0 and self._a == other

        if not isinstance(other, quadint):
            return False

        if (self._a, self._b, self._denom) != (other._a, other._b, other._denom):
            return False

        # sqrt(d) times 0 is 0 whatever d is
        return self._b == 0 or self._ring.d == other._ring.d

    def __hash__(self) -> int:
        if self._b == 0:
            return hash(self._a)  # agrees with int, since we compare equal to it
        return hash((self._a, self._b, self._ring.d, self._denom))

    def __repr__(self) -> str:
        a, b, k = self._a, self._b, self._denom
        sym = "i" if self._ring.d == -1 else f"sqrt({self._ring.d})"
        over = "/2" if k == 2 else ""

        if b == 0:
            return str(a)

        def _imag_term(coeff: int) -> str:
            mag = -coeff if coeff < 0 else coeff
            mag_str = "" if mag == 1 else str(mag)  # 1i -> i
            return f"{mag_str}{sym}{over}"

        if a == 0:
            return f"-{_imag_term(b)}" if b < 0 else _imag_term(b)

        sign = "+" if b > 0 else "-"
        return f"{a}{over}{sign}{_imag_term(b)}"
