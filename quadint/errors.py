from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from quadint.quad import quadint
    from quadint.ring import QuadraticRing


class InvalidConstructionError(ValueError):
    """Bad parameters for a QuadraticRing or quadint (or a number theoretic function)."""


class QuadraticArithmeticError(ArithmeticError):
    """
    Common base of every failure an arithmetic operation on quadint can signal.

    Callers that need to branch on the kind of failure catch this and dispatch on type.
    """


class DegreeOverflowError(QuadraticArithmeticError):
    """
    The result would be an algebraic integer of degree 4 (operands from two different rings).

    Attributes:
        operands: The two operands of the rejected operation.
    """

    def __init__(self, message: str, *operands: Any) -> None:
        super().__init__(message)
        self.operands: tuple[Any, ...] = operands


class UnsupportedDomainError(QuadraticArithmeticError):
    """
    The result would be a real quadratic integer, which is not represented here.

    Happens for purely imaginary operands from different rings, e.g. sqrt(-2) * sqrt(-3) = -sqrt(6).

    Attributes:
        operands: The two operands of the rejected operation.
    """

    def __init__(self, message: str, *operands: Any) -> None:
        super().__init__(message)
        self.operands: tuple[Any, ...] = operands


class NonEuclideanDomainError(QuadraticArithmeticError):
    """
    The Euclidean GCD was requested in a ring that is not norm-Euclidean.

    Attributes:
        operands: The two numbers whose GCD was declined.
    """

    def __init__(self, message: str, *operands: Any) -> None:
        super().__init__(message)
        self.operands: tuple[Any, ...] = operands


class NonUniqueFactorizationDomainError(QuadraticArithmeticError):
    """
    A prime factorization was requested in a ring without unique factorization.

    Attributes:
        number: The number that was not factored.
    """

    def __init__(self, message: str, number: Any) -> None:
        super().__init__(message)
        self.number = number


class ArithmeticOverflowError(QuadraticArithmeticError, OverflowError):
    """A component or norm left the representable integer range."""


class DivisionByZeroError(QuadraticArithmeticError, ZeroDivisionError):
    """Division by zero."""


class NotDivisibleError(QuadraticArithmeticError):
    """
    Division was inexact.

    The exact quotient is kept as the reduced fraction

        (real_part + imag_part * sqrt(d)) / denominator

    so a caller can round it back into the ring and keep going.
    """

    def __init__(self, message: str, real_part: int, imag_part: int, denominator: int, d: int) -> None:
        super().__init__(message)
        self.real_part = real_part
        self.imag_part = imag_part
        self.denominator = denominator
        self.d = d

    def _ring(self) -> "QuadraticRing":
        from quadint.ring import QuadraticRing

        return QuadraticRing(self.d)

    def round_towards_zero(self) -> "quadint":
        """
        Truncate both rational coordinates of the quotient towards zero.

        For example, (7 + 5*sqrt(-2))/3 becomes 2 + sqrt(-2).

        Returns:
            quadint: The truncated quotient in ring d.
        """
        from quadint.quad import _truncate_div, quadint

        return quadint(_truncate_div(self.real_part, self.denominator),
                       _truncate_div(self.imag_part, self.denominator),
                       self._ring())

    def round_to_nearest(self) -> "quadint":
        """
        The ring element closest to the quotient, half-integers included when the ring has them.

        In the five norm-Euclidean rings the remainder left by this quotient always has
        a smaller norm than the divisor.

        Returns:
            quadint: The nearest element of ring d.
        """
        from quadint.quad import nearest_element

        return nearest_element(self.real_part, self.imag_part, self.denominator, self._ring())
