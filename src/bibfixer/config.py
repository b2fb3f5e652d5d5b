"""Run configuration for the Mendeley BibTeX fixer."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Any

import msgspec
from configobj import ConfigObj, ConfigObjError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("bibfixer.properties")

DEFAULT_BLACKLIST = (
    "annote",
    "abstract",
    "doi",
    "file",
    "issn",
    "keywords",
    "mendeley-tags",
    "month",
    "isbn",
    "address",
)

_LIST_SEPARATOR = re.compile(r"\s*,\s*")

PositiveInt = Annotated[int, msgspec.Meta(gt=0)]


@dataclass(frozen=True)
class FixerConfig:
    """Settings for a single reformatting run."""

    input_path: Path = Path("mendeley.bib")
    output_path: Path = Path("mendeley-fix.bib")
    blacklist: tuple[str, ...] = DEFAULT_BLACKLIST
    do_overscript: bool = True
    collapse_authors_count: int = 7


def load_config(config_path: Path | None = None) -> FixerConfig:
    """Build a :class:`FixerConfig` from a properties file.

    Recognized keys are ``input-file``, ``output-file``, ``blacklist``,
    ``do-overscript`` and ``collapse-authors-count``. Missing or empty values
    keep their defaults, and values that cannot be converted are reported with
    a warning before falling back to the default. A file that cannot be read
    at all is reported the same way and every setting keeps its default.

    Args:
        config_path: Properties file to read. Defaults to ``bibfixer.properties``
            in the current directory.

    Returns:
        The resolved configuration. All defaults when the file does not exist
        or is not a valid key = value file.
    """
    path = config_path if config_path is not None else DEFAULT_CONFIG_PATH
    defaults = FixerConfig()

    if not path.exists():
        logger.debug("No configuration file at %s, using defaults", path)
        return defaults

    logger.debug("Reading configuration from %s", path)
    try:
        properties = _read_properties(path)
    except ConfigObjError as e:
        logger.warning(
            "Unable to read configuration file %s: %s. Using default values", path, e
        )
        return defaults

    input_path = defaults.input_path
    output_path = defaults.output_path
    blacklist = defaults.blacklist

    if value := properties.get("input-file"):
        input_path = Path(value)
    if value := properties.get("output-file"):
        output_path = Path(value)
    if value := properties.get("blacklist"):
        blacklist = tuple(item for item in _LIST_SEPARATOR.split(value) if item)

    do_overscript = _convert_property(
        properties, "do-overscript", bool, defaults.do_overscript
    )
    collapse_authors_count = _convert_property(
        properties, "collapse-authors-count", PositiveInt, defaults.collapse_authors_count
    )

    return FixerConfig(
        input_path=input_path,
        output_path=output_path,
        blacklist=blacklist,
        do_overscript=do_overscript,
        collapse_authors_count=collapse_authors_count,
    )


def _read_properties(path: Path) -> dict[str, str]:
    config_obj = ConfigObj(
        str(path),
        interpolation=False,
        list_values=False,
        file_error=True,
        default_encoding="utf8",
    )
    return {key: value.strip() for key, value in config_obj.items() if isinstance(value, str)}


def _convert_property(
    properties: dict[str, str], key: str, target_type: Any, default: Any
) -> Any:
    raw = properties.get(key)
    if not raw:
        return default

    try:
        return msgspec.convert(raw, type=target_type, strict=False)
    except msgspec.ValidationError:
        logger.warning(
            "Invalid value for %s property (%s). Using default value: %s", key, raw, default
        )
        return default
