import numbers
from dataclasses import dataclass
from typing import Any, Callable, Dict

import numpy as np


@dataclass(frozen=True)
class ScalarTraits:
    """Arithmetic helpers for one concrete numeric type.

    Curves never hard code the float width: every constant and every
    transcendental result is converted back to `kind`, so a segment built
    from numpy.float32 coordinates keeps producing numpy.float32.
    """
    kind: Callable[[Any], Any]

    @property
    def zero(self) -> Any: return self.kind(0.0)

    @property
    def one(self) -> Any: return self.kind(1.0)

    @property
    def two(self) -> Any: return self.kind(2.0)

    def constant(self, v: float) -> Any: return self.kind(v)

    def sqrt(self, v: Any) -> Any: return self.kind(np.sqrt(v))

    def hypot(self, a: Any, b: Any) -> Any: return self.kind(np.hypot(a, b))

    def abs(self, v: Any) -> Any: return abs(v)

    def min(self, a: Any, b: Any) -> Any: return a if a <= b else b

    def max(self, a: Any, b: Any) -> Any: return a if a >= b else b

    @staticmethod
    def for_value(v: Any) -> "ScalarTraits":
        kind = type(v)
        # integers (python or numpy) have no fractional part to carry t values
        if issubclass(kind, (numbers.Integral, np.bool_)):
            kind = float
        traits = _TRAITS.get(kind)
        if traits is None:
            traits = ScalarTraits(kind)
            _TRAITS[kind] = traits
        return traits


_TRAITS: Dict[Any, ScalarTraits] = {float: ScalarTraits(float)}
