import logging
import random
from dataclasses import dataclass
from functools import cache
from math import gcd, isqrt, prod
from typing import Union

from sympy import divisors, factorint, isprime

from quadint.errors import (
    DegreeOverflowError,
    InvalidConstructionError,
    NonEuclideanDomainError,
    NonUniqueFactorizationDomainError,
    NotDivisibleError,
)
from quadint.quad import quadint
from quadint.ring import QuadraticRing

LOG = logging.getLogger(__name__)

# The nine imaginary quadratic rings with class number 1 (unique factorization).
HEEGNER_NUMBERS = (-1, -2, -3, -7, -11, -19, -43, -67, -163)

# The only norm-Euclidean imaginary quadratic rings, OEIS A048981.
NORM_EUCLIDEAN_RADICANDS = (-1, -2, -3, -7, -11)

NUM_TYPES = Union[int, quadint]


# TODO: Once Py3.9 support has been dropped, add slots=True
# @dataclass(frozen=True, slots=True)
@dataclass(frozen=True)
class QuadraticFactorization:
    """
    Factorization in a unique factorization domain:

        x = unit * P1 * P2 * ... * Pk

    - unit has norm 1.
    - Pi are primes, sorted by the rational prime below them. An inert rational prime p
      shows up as the purely real prime p.
    """
    unit: quadint
    primes: tuple[quadint, ...]

    def prod(self) -> quadint:
        """Recreate the number"""
        return prod(self.primes, start=self.unit)


# region rational integers
def prime_factors(n: int) -> list[int]:
    """
    Prime factors of n, with multiplicity, in ascending order.

    0 factors as [0]. A negative n gets a leading -1, so -44100 gives [-1, 2, 2, 3, 3, 5, 5, 7, 7].
    """
    if n == 0:
        return [0]

    factors = [-1] if n < 0 else []
    for p, e in sorted(factorint(abs(n)).items()):
        factors.extend([p] * e)

    return factors


def _is_prime_int(n: int) -> bool:
    # -2 and 2 are prime, 0 and the units are not
    return isprime(abs(n))


def is_square_free(n: int) -> bool:
    """Whether no prime divides n twice. 1 and -1 are squarefree, 0 is not."""
    if n in (-1, 1):
        return True
    if n == 0:
        return False

    return all(e == 1 for e in factorint(abs(n)).values())


def moebius_mu(n: int) -> int:
    """
    The Möbius function: 0 unless n is squarefree, else (-1)^(number of prime factors).

    Since -1 is a unit, mu(-n) == mu(n).
    """
    if n in (-1, 1):
        return 1

    if not is_square_free(n):
        return 0

    return -1 if len(factorint(abs(n))) % 2 else 1


def legendre_symbol(a: int, p: int) -> int:
    """
    Whether a is a quadratic residue modulo the odd prime p.

    For example legendre_symbol(10, 7) == -1, legendre_symbol(10, 5) == 0 and legendre_symbol(10, 3) == 1.
    A negative p is quietly replaced by -p.

    Raises:
        InvalidConstructionError: If p is not an odd prime.

    Returns:
        int: 1 for a residue, -1 for a non-residue, 0 if p divides a.
    """
    p = abs(p)
    if not isprime(p):
        raise InvalidConstructionError(f"{p} is not a prime number. Consider using the Jacobi symbol instead.")
    if p == 2:
        raise InvalidConstructionError("2 is not an odd prime. Consider using the Kronecker symbol instead.")

    if a % p == 0:
        return 0

    # Euler's criterion
    return 1 if pow(a, (p - 1) // 2, p) == 1 else -1


def jacobi_symbol(n: int, m: int) -> int:
    """
    Product of legendre_symbol(n, p) over the prime factors p of m.

    Raises:
        InvalidConstructionError: If m is even or negative.
    """
    if m % 2 == 0:
        raise InvalidConstructionError(f"{m} is not an odd number. Consider using the Kronecker symbol instead.")
    if m < 0:
        raise InvalidConstructionError(f"{m} is not a positive number. Consider using the Kronecker symbol instead.")

    if m == 1:
        return 1
    if gcd(n, m) > 1:
        return 0

    return prod(legendre_symbol(n, p) for p in prime_factors(m))


def _kronecker_two(n: int) -> int:
    """(n/2) in the Kronecker sense."""
    n_mod_8 = n % 8
    if n_mod_8 in (1, 7):
        return 1
    if n_mod_8 in (3, 5):
        return -1
    return 0


def kronecker_symbol(n: int, m: int) -> int:
    """
    Extension of the Jacobi symbol to every m, e.g. kronecker_symbol(3, 2) == -1.

    (n/-1) is the sign of n, (n/2) depends on n mod 8, odd primes use the Legendre symbol.
    """
    if gcd(n, m) > 1:
        return 0
    if m == 1:
        return 1
    if m == 0:
        return 1 if n in (-1, 1) else 0

    symbol = 1
    for p in prime_factors(m):
        if p == -1:
            symbol *= -1 if n < 0 else 1
        elif p == 2:
            symbol *= _kronecker_two(n)
        else:
            symbol *= legendre_symbol(n, p)

    return symbol


def random_negative_squarefree(bound: int) -> int:
    """
    A pseudorandom negative squarefree integer between -|bound| and -1.

    Raises:
        ValueError: If bound is 0.
    """
    bound = abs(bound)
    if bound == 0:
        raise ValueError("bound must be nonzero")

    n = -random.randint(1, bound)
    while not is_square_free(n):
        n += 1  # terminates at -1 at the latest

    return n
# endregion


# region quadratic integers
def _is_inert(p: int, ring: QuadraticRing) -> bool:
    """Whether the rational prime p stays prime in ring."""
    d = ring.d
    if d == -1:
        return p % 4 == 3
    if d == -2:
        return p % 8 in (5, 7)
    if d == -3:
        return p % 3 == 2

    return kronecker_symbol(ring.discriminant, p) == -1


def _is_prime_quadint(num: quadint) -> bool:
    """
    A number is prime iff its norm is a rational prime, or it is an associate of an inert
    rational prime p (and then its norm is p^2).

    That covers purely real primes as well as, say, 3i in Z[i].
    """
    n = num.norm()
    if isprime(n):
        return True

    p = isqrt(n)
    if p * p != n or not isprime(p):
        return False

    return _is_inert(p, num.ring)


def is_prime(num: NUM_TYPES) -> bool:
    """
    Primality of a rational integer (negative primes count) or of an imaginary quadratic integer.

    For example 47, -2 and 1 + i are prime, while 0, 1, 91 and 5 = (2 + i)(2 - i) in Z[i] are not.

    Raises:
        ArithmeticOverflowError: If the norm of a quadint overflows.
    """
    if isinstance(num, quadint):
        return _is_prime_quadint(num)

    return _is_prime_int(num)


@cache
def elements_of_norm(ring: QuadraticRing, n: int) -> tuple[quadint, ...]:
    """
    Every element of ring with norm n, listing only one of t and -t.

    Raises:
        ValueError: If n is negative.

    Returns:
        tuple: The elements, by increasing sqrt(d) coefficient.
    """
    if n < 0:
        raise ValueError("Norms are never negative")

    # Work in numerator units: N((x + y*sqrt(d))/k) = n  <=>  x^2 + |d|*y^2 = k^2 * n
    k = 2 if ring.has_half_integers else 1
    target = k * k * n

    out: list[quadint] = []
    y = 0
    while ring.abs_d * y * y <= target:
        rest = target - ring.abs_d * y * y
        x = isqrt(rest)
        if x * x == rest and (k == 1 or ((x ^ y) & 1) == 0):
            out.append(quadint(x, y, ring, k))
            if x and y:
                out.append(quadint(x, -y, ring, k))
        y += 1

    return tuple(out)


def is_irreducible(num: quadint) -> bool:
    """
    Whether num has no factorization into two non-units.

    Units and 0 count as irreducible. In the class number 1 rings this is primality; elsewhere,
    e.g. for the famous 1 + sqrt(-5) (irreducible but not prime), the candidate divisors are
    searched by increasing norm.

    Raises:
        ArithmeticOverflowError: If the norm of num overflows.
    """
    n = num.norm()
    if isprime(n) or n < 2:
        return True

    ring = num.ring
    if ring.d in HEEGNER_NUMBERS:
        return _is_prime_quadint(num)

    LOG.debug("Searching divisors of %s in %s up to norm %d", num, ring.to_ascii(), n)

    # Any proper divisor has a norm that is a proper divisor of n, so only those norms need a visit.
    for divisor_norm in divisors(n)[1:-1]:
        for candidate in elements_of_norm(ring, divisor_norm):
            try:
                quotient = num / candidate
            except NotDivisibleError:
                continue

            if quotient.norm() > 1:
                LOG.debug("%s = (%s) * (%s)", num, candidate, quotient)
                return False

    return True


def _normalize_sign(num: quadint) -> quadint:
    """Associate choice up to -1: real part non-negative, and imaginary part too when the real part is 0."""
    return -num if num.a < 0 or (num.a == 0 and num.b < 0) else num


def _euclidean_gcd_quadint(a: quadint, b: quadint) -> quadint:
    """GCD via Euclidean algorithm."""
    if a.b != 0 and b.b != 0 and a.ring.d != b.ring.d:
        raise DegreeOverflowError("This operation would result in an algebraic integer of degree 4", a, b)

    ring = b.ring if a.b == 0 and b.b != 0 else a.ring
    if ring.d not in NORM_EUCLIDEAN_RADICANDS:
        raise NonEuclideanDomainError(f"{a} and {b} are in non-Euclidean domain {ring.to_filename()}", a, b)

    cur_a, cur_b = (b, a) if a.norm() < b.norm() else (a, b)

    while cur_b:
        try:
            quotient = cur_a / cur_b
        except NotDivisibleError as nde:
            quotient = nde.round_to_nearest()

        remainder = cur_a - quotient * cur_b
        LOG.debug("%s = (%s) * (%s) + (%s)", cur_a, quotient, cur_b, remainder)

        if remainder and remainder.norm() >= cur_b.norm():
            raise ArithmeticError("Euclidean descent failed (non-decreasing remainder norm)")

        cur_a, cur_b = cur_b, remainder

    return _normalize_sign(cur_a)


def euclidean_gcd(a: NUM_TYPES, b: NUM_TYPES) -> NUM_TYPES:
    """
    Greatest common divisor by the Euclidean algorithm.

    For two ints, the usual non-negative integer GCD (0 for gcd(0, 0)). Otherwise an int argument
    is taken as a purely real number in the ring of the other argument, and the GCD is computed in
    that ring, with the sign chosen so that the real part is non-negative.
    For example euclidean_gcd(4, 3*sqrt(-2)) is sqrt(-2).

    Raises:
        DegreeOverflowError: If a and b are both non-real and come from different rings.
        NonEuclideanDomainError: If the ring is not one of d = -1, -2, -3, -7, -11.
            No attempt is made in other rings, even though it sometimes succeeds.

    Returns:
        The GCD, an int for int arguments and a quadint otherwise.
    """
    if isinstance(a, quadint):
        if isinstance(b, quadint):
            return _euclidean_gcd_quadint(a, b)
        return _euclidean_gcd_quadint(a, quadint(b, 0, a.ring))

    if isinstance(b, quadint):
        return _euclidean_gcd_quadint(quadint(a, 0, b.ring), b)

    return gcd(a, b)


def factor(num: quadint) -> QuadraticFactorization:
    """
    Prime factorization in one of the nine unique factorization domains.

    For each rational prime p below the norm we divide out the primes of norm p
    (or p itself when p is inert) for as long as the norm stays divisible by p.

    Raises:
        NonUniqueFactorizationDomainError: If the ring of num has class number > 1.
        ValueError: If num is 0.
        ArithmeticError: If there is an unexpected problem preventing factoring, indicating a bug in the code.

    Returns:
        QuadraticFactorization: unit and primes with num == unit * prod(primes).
    """
    ring = num.ring
    if ring.d not in HEEGNER_NUMBERS:
        raise NonUniqueFactorizationDomainError(f"{ring.to_ascii()} is not a unique factorization domain", num)

    if not num:
        raise ValueError("0 has no prime factorization")

    rest = num
    primes: list[quadint] = []
    for p in sorted(factorint(num.norm())):
        candidates = elements_of_norm(ring, p) or (quadint(p, 0, ring),)
        while rest.norm() % p == 0:
            for candidate in candidates:
                try:
                    rest = rest / candidate
                except NotDivisibleError:
                    continue

                primes.append(candidate)
                break
            else:
                raise ArithmeticError(f"No prime above {p} divides {rest} (unexpected)")

        LOG.debug("Divided %s by the primes above %d, %s left", num, p, rest)

    # Remaining cofactor must be a unit if we extracted all prime norms.
    if rest.norm() != 1:
        raise ArithmeticError("remaining cofactor is not a unit; factorization incomplete")

    return QuadraticFactorization(unit=rest, primes=tuple(primes))
# endregion
