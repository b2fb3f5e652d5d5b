"""Tests for output verification."""

from pathlib import Path

import pytest

from bibfixer.exceptions import InvalidBibliographyError
from bibfixer.verify import check_bibliography


def _write_bib(tmp_path: Path, content: str) -> Path:
    bib_path = tmp_path / "library.bib"
    bib_path.write_text(content, encoding="utf-8")
    return bib_path


def test_returns_citekeys_in_order(tmp_path: Path) -> None:
    bib_path = _write_bib(
        tmp_path,
        """% Source: http://example.com/a
@article{beta,
 title = {B},
 year = {2020}
}

@book{alpha,
 title = {A}
}
""",
    )

    assert check_bibliography(bib_path) == ["beta", "alpha"]


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError, match="Bibliography file not found"):
        check_bibliography(tmp_path / "missing.bib")


def test_duplicate_keys_are_reported(tmp_path: Path) -> None:
    bib_path = _write_bib(
        tmp_path,
        """@misc{same,
 title = {One}
}

@misc{same,
 title = {Two}
}
""",
    )

    with pytest.raises(InvalidBibliographyError, match="Failed to parse 1 blocks"):
        check_bibliography(bib_path)
