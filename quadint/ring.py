from dataclasses import dataclass, field
from math import sqrt

from sympy import factorint

from quadint.errors import InvalidConstructionError

INT32_MIN = -(1 << 31)
INT32_MAX = (1 << 31) - 1
INT64_MAX = (1 << 63) - 1


# TODO: Once Py3.9 support has been dropped, add slots=True
# @dataclass(frozen=True, slots=True)
@dataclass(frozen=True)
class QuadraticRing:
    """
    The ring of integers of Q(sqrt(d)) for a negative squarefree d.

    When d = 1 (mod 4) the ring also holds the "half-integers" (a + b*sqrt(d))/2 with a, b odd,
    e.g. the Eisenstein integers Z[omega] for d = -3.
    """
    d: int
    abs_d: int = field(init=False, repr=False, compare=False)
    sqrt_abs_d: float = field(init=False, repr=False, compare=False)  # advisory only, never used for exactness
    has_half_integers: bool = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        d = self.d
        if isinstance(d, bool) or not isinstance(d, int):
            raise InvalidConstructionError(f"Integer required for parameter d, got {d!r}")

        if d > -1:
            raise InvalidConstructionError(f"Negative integer required for parameter d, got {d}")

        if d < INT32_MIN:
            raise InvalidConstructionError(f"Parameter d={d} is out of range")

        if any(e > 1 for e in factorint(-d).values()):
            raise InvalidConstructionError(f"Squarefree integer required for parameter d, got {d}")

        object.__setattr__(self, "abs_d", -d)
        object.__setattr__(self, "sqrt_abs_d", sqrt(-d))
        # -d = 3 (mod 4) is the same as d = 1 (mod 4)
        object.__setattr__(self, "has_half_integers", -d % 4 == 3)

    @property
    def discriminant(self) -> int:
        """Field discriminant: d when d = 1 (mod 4), else 4d."""
        return self.d if self.has_half_integers else 4 * self.d

    # region text forms
    def __str__(self) -> str:
        if self.d == -1:
            return "Z[i]"
        if self.d == -3:
            return "Z[ω]"
        if self.has_half_integers:
            return f"O_(Q(√{self.d}))"
        return f"Z[√{self.d}]"

    def to_ascii(self) -> str:
        """Like str(), but spelling out omega and sqrt."""
        if self.d == -1:
            return "Z[i]"
        if self.d == -3:
            return "Z[omega]"
        if self.has_half_integers:
            return f"O_(Q(sqrt({self.d})))"
        return f"Z[sqrt({self.d})]"

    def to_tex(self, blackboard_bold: bool = True) -> str:
        """TeX form, with \\mathbb or \\textbf letters depending on blackboard_bold."""
        q_char, z_char = (r"\mathbb Q", r"\mathbb Z") if blackboard_bold else (r"\textbf Q", r"\textbf Z")
        if self.d == -1:
            return z_char + "[i]"
        if self.d == -3:
            return z_char + r"[\omega]"
        if self.has_half_integers:
            return rf"\mathcal O_{{{q_char}(\sqrt{{{self.d}}})}}"
        return rf"{z_char}[\sqrt{{{self.d}}}]"

    def to_html(self, blackboard_bold: bool = True) -> str:
        """HTML form, with double-struck or <b> letters depending on blackboard_bold."""
        q_char, z_char = ("ℚ", "ℤ") if blackboard_bold else ("<b>Q</b>", "<b>Z</b>")
        if self.d == -1:
            return z_char + "[<i>i</i>]"
        if self.d == -3:
            return z_char + "[ω]"
        if self.has_half_integers:
            return f"<i>O</i><sub>{q_char}(&radic;({self.d}))</sub>"
        return f"{z_char}[&radic;{self.d}]"

    def to_filename(self) -> str:
        """A short form safe to use in file names, e.g. ZI2 or OQI7."""
        if self.d == -1:
            return "ZI"
        if self.d == -3:
            return "ZW"
        if self.has_half_integers:
            return f"OQI{self.abs_d}"
        return f"ZI{self.abs_d}"
    # endregion
