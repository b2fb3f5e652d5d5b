"""Tests for configuration loading."""

import dataclasses
from pathlib import Path

import pytest

from bibfixer.config import DEFAULT_BLACKLIST, FixerConfig, load_config


def _write_properties(tmp_path: Path, content: str) -> Path:
    config_path = tmp_path / "bibfixer.properties"
    config_path.write_text(content, encoding="utf-8")
    return config_path


def test_defaults_when_file_is_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.properties")

    assert config == FixerConfig()
    assert config.input_path == Path("mendeley.bib")
    assert config.output_path == Path("mendeley-fix.bib")
    assert config.blacklist == DEFAULT_BLACKLIST
    assert config.do_overscript is True
    assert config.collapse_authors_count == 7


def test_all_properties(tmp_path: Path) -> None:
    config_path = _write_properties(
        tmp_path,
        """# Settings for the fixer
input-file = refs.bib
output-file = refs-fixed.bib
blacklist = abstract , file,keywords
do-overscript = false
collapse-authors-count = 3
""",
    )

    config = load_config(config_path)

    assert config.input_path == Path("refs.bib")
    assert config.output_path == Path("refs-fixed.bib")
    assert config.blacklist == ("abstract", "file", "keywords")
    assert config.do_overscript is False
    assert config.collapse_authors_count == 3


def test_empty_values_keep_defaults(tmp_path: Path) -> None:
    config_path = _write_properties(
        tmp_path,
        """input-file =
blacklist =
do-overscript =
""",
    )

    assert load_config(config_path) == FixerConfig()


def test_percent_signs_are_not_interpolated(tmp_path: Path) -> None:
    config_path = _write_properties(tmp_path, "output-file = 100%-fixed.bib\n")

    assert load_config(config_path).output_path == Path("100%-fixed.bib")


@pytest.mark.parametrize("value", ["lots", "0", "-2"])
def test_invalid_collapse_count_warns_and_keeps_default(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, value: str
) -> None:
    config_path = _write_properties(tmp_path, f"collapse-authors-count = {value}\n")

    config = load_config(config_path)

    assert config.collapse_authors_count == 7
    assert (
        f"Invalid value for collapse-authors-count property ({value}). Using default value: 7"
        in caplog.text
    )


def test_invalid_overscript_warns_and_keeps_default(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    config_path = _write_properties(tmp_path, "do-overscript = maybe\n")

    config = load_config(config_path)

    assert config.do_overscript is True
    assert "Invalid value for do-overscript property (maybe)" in caplog.text


def test_default_path_in_working_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write_properties(tmp_path, "collapse-authors-count = 4\n")
    monkeypatch.chdir(tmp_path)

    assert load_config().collapse_authors_count == 4


@pytest.mark.parametrize(
    "content",
    [
        "collapse-authors-count = 3\ncollapse-authors-count = 4\n",
        "do-overscript = false\ninput-file refs.bib\n",
    ],
)
def test_unreadable_file_warns_and_uses_defaults(
    tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str
) -> None:
    config_path = _write_properties(tmp_path, content)

    config = load_config(config_path)

    assert config == FixerConfig()
    assert f"Unable to read configuration file {config_path}" in caplog.text


def test_config_is_immutable() -> None:
    config = FixerConfig()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.collapse_authors_count = 3  # type: ignore[misc]
