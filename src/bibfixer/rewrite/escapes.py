"""Un-escaping of the LaTeX special characters Mendeley escapes."""

# Applied in order; ``\~{}`` must stay a single unit.
_ESCAPES = (
    ("\\&", "&"),
    ("\\_", "_"),
    ("\\%", "%"),
    ("\\#", "#"),
    ("\\~{}", "~"),
)


def unescape_latex(text: str) -> str:
    """Replace escaped characters such as ``\\&`` with their literal form."""
    for escaped, literal in _ESCAPES:
        text = text.replace(escaped, literal)
    return text
