from . import checks
from . import hypergeometric
from . import hypergeometric_1f1_recurrence
from . import hypergeometric_asym
from . import hypergeometric_bessel
from . import hypergeometric_pade
from . import hypergeometric_series
from . import hypergeometric_wrappers
from . import mp_mode
from . import numeric
from . import policy
from . import precision
from . import recurrence
from . import series
from . import special
from . import validation
from . import wrappers_common

from .hypergeometric import (
    hypergeometric_0f1,
    hypergeometric_1f0,
    hypergeometric_1f1,
    hypergeometric_1f1_shift_ab,
    hypergeometric_1f1_shift_b,
    hypergeometric_1f2,
    hypergeometric_2f0,
    hypergeometric_2f1,
    hypergeometric_pfq,
)
from .policy import (
    DomainError,
    EvaluationError,
    HypergeometricError,
    HypergeometricOverflowError,
    PoleError,
    Policy,
)

__all__ = [
    "checks",
    "hypergeometric",
    "hypergeometric_1f1_recurrence",
    "hypergeometric_asym",
    "hypergeometric_bessel",
    "hypergeometric_pade",
    "hypergeometric_series",
    "hypergeometric_wrappers",
    "mp_mode",
    "numeric",
    "policy",
    "precision",
    "recurrence",
    "series",
    "special",
    "validation",
    "wrappers_common",
    "hypergeometric_0f1",
    "hypergeometric_1f0",
    "hypergeometric_1f1",
    "hypergeometric_1f2",
    "hypergeometric_2f0",
    "hypergeometric_2f1",
    "hypergeometric_pfq",
    "hypergeometric_1f1_shift_b",
    "hypergeometric_1f1_shift_ab",
    "Policy",
    "HypergeometricError",
    "DomainError",
    "PoleError",
    "EvaluationError",
    "HypergeometricOverflowError",
]
