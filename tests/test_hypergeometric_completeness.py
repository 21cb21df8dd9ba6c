from hypgeomjax import hypergeometric
from hypgeomjax import hypergeometric_wrappers
from hypgeomjax import mp_mode

from tests._test_checks import _check

FAMILIES = ("0f1", "1f0", "1f1", "1f2", "2f0", "2f1", "pfq")


def test_public_families_have_prec_variants():
    missing = []
    for fam in FAMILIES:
        for suffix in ("", "_prec"):
            name = f"hypergeometric_{fam}{suffix}"
            if not callable(getattr(hypergeometric, name, None)):
                missing.append(name)
    _check(len(missing) == 0, f"missing: {missing}")


def test_public_families_have_wrappers():
    missing = []
    for fam in FAMILIES:
        for suffix in ("_batch", "_batch_jit", "_batch_prec", "_mode"):
            name = f"hypergeometric_{fam}{suffix}"
            if not callable(getattr(hypergeometric_wrappers, name, None)):
                missing.append(name)
    _check(len(missing) == 0, f"missing: {missing}")


def test_mp_mode_covers_prec_functions():
    missing = []
    for fam in FAMILIES:
        for name in (f"hypergeometric_{fam}_mp", f"hypergeometric_{fam}_batch_mp"):
            if name not in mp_mode.__all__:
                missing.append(name)
    _check(len(missing) == 0, f"missing: {missing}")


def test_exported_names_resolve():
    for module in (hypergeometric, hypergeometric_wrappers, mp_mode):
        for name in module.__all__:
            _check(hasattr(module, name), f"{module.__name__}.{name}")
