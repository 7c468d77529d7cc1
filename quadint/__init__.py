"""Exact arithmetic in imaginary quadratic integer rings."""
from quadint.errors import (
    ArithmeticOverflowError,
    DegreeOverflowError,
    DivisionByZeroError,
    InvalidConstructionError,
    NonEuclideanDomainError,
    NonUniqueFactorizationDomainError,
    NotDivisibleError,
    QuadraticArithmeticError,
    UnsupportedDomainError,
)
from quadint.number_theory import (
    HEEGNER_NUMBERS,
    NORM_EUCLIDEAN_RADICANDS,
    QuadraticFactorization,
    elements_of_norm,
    euclidean_gcd,
    factor,
    is_irreducible,
    is_prime,
    is_square_free,
    jacobi_symbol,
    kronecker_symbol,
    legendre_symbol,
    moebius_mu,
    prime_factors,
    random_negative_squarefree,
)
from quadint.quad import quadint
from quadint.ring import QuadraticRing

__all__ = [
    "ArithmeticOverflowError",
    "DegreeOverflowError",
    "DivisionByZeroError",
    "HEEGNER_NUMBERS",
    "InvalidConstructionError",
    "NORM_EUCLIDEAN_RADICANDS",
    "NonEuclideanDomainError",
    "NonUniqueFactorizationDomainError",
    "NotDivisibleError",
    "QuadraticArithmeticError",
    "QuadraticFactorization",
    "QuadraticRing",
    "UnsupportedDomainError",
    "elements_of_norm",
    "euclidean_gcd",
    "factor",
    "is_irreducible",
    "is_prime",
    "is_square_free",
    "jacobi_symbol",
    "kronecker_symbol",
    "legendre_symbol",
    "moebius_mu",
    "prime_factors",
    "quadint",
    "random_negative_squarefree",
]
