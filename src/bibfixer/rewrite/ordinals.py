"""Superscript markup for English ordinal suffixes."""

_OVERSCRIPT = r"$^{\rm %s}$"

# (digits, suffix) pairs. "th" covers every digit, the others only their own.
_ORDINALS = (
    ("1", "st"),
    ("2", "nd"),
    ("3", "rd"),
    *((str(digit), "th") for digit in range(1, 10)),
)


def replace_ordinals(line: str) -> str:
    """Put ordinal suffixes in LaTeX overscript, e.g. ``3rd`` -> ``3$^{\\rm rd}$``.

    Matching is purely textual on the last digit, so ``21st`` becomes
    ``21$^{\\rm st}$`` and ``11st`` would be rewritten the same way.
    """
    for digit, suffix in _ORDINALS:
        line = line.replace(digit + suffix, digit + _OVERSCRIPT % suffix)
    return line
