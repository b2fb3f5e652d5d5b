"""Streaming reformatter for Mendeley BibTeX exports.

The input is handled line by line. Each line is classified by its leading
text and dispatched to a handler; field lines accumulate in an :class:`Entry`
until the closing ``}`` line, at which point the entry is rendered with its
title moved to the front and its URL turned into a ``% Source:`` comment.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field

from .config import FixerConfig
from .rewrite import collapse_authors, count_authors, replace_ordinals, unescape_latex, wrap_urls

logger = logging.getLogger(__name__)

TITLE_KEY = "title"
URL_KEY = "url"
CREATOR_KEYS = ("author", "editor")
SOURCE_PREFIX = "% Source: "


class LineKind(enum.Enum):
    """Role of a single input line."""

    ENTRY_START = "entry-start"
    ENTRY_END = "entry-end"
    TITLE = "title"
    CREATORS = "creators"
    URL = "url"
    BLACKLISTED = "blacklisted"
    FIELD = "field"


def classify_line(line: str, blacklist: Iterable[str]) -> LineKind:
    """Classify ``line`` by its leading text. The first matching rule wins."""
    if line.startswith("@"):
        return LineKind.ENTRY_START
    if line.startswith("}"):
        return LineKind.ENTRY_END
    if line.startswith(TITLE_KEY):
        return LineKind.TITLE
    if line.startswith(CREATOR_KEYS):
        return LineKind.CREATORS
    if line.startswith(URL_KEY):
        return LineKind.URL
    if any(line.startswith(prefix) for prefix in blacklist):
        return LineKind.BLACKLISTED
    return LineKind.FIELD


def extract_citekey(line: str) -> str | None:
    """Return the text between the first ``{`` and the first ``,`` of an entry start."""
    open_idx = line.find("{")
    comma_idx = line.find(",")
    if open_idx == -1 or comma_idx <= open_idx:
        return None
    return line[open_idx + 1 : comma_idx]


def extract_source(line: str) -> str | None:
    """Return the un-escaped value of a ``url`` field line, or ``None``."""
    open_idx = line.find("{")
    if open_idx == -1:
        return None
    close_idx = line.find("}", open_idx + 1)
    if close_idx == -1:
        return None
    return unescape_latex(line[open_idx + 1 : close_idx])


@dataclass(slots=True)
class Entry:
    """A bibliography entry being assembled from its field lines."""

    start_line: str
    key: str | None = None
    body: list[str] = field(default_factory=list)
    title_line: str | None = None
    source_line: str | None = None

    def render(self) -> list[str]:
        """Return the output lines for the finished entry.

        The title becomes the first field, the source comment (if any) goes
        above the entry, and the comma after the last field is dropped.
        """
        lines = [self.start_line]
        if self.title_line is not None:
            # The title may have been the last field of the source entry.
            title = self.title_line.rstrip()
            if not title.endswith(","):
                title += ","
            lines.append(title)
        lines.extend(self.body)

        if len(lines) > 1 and lines[-1].endswith(","):
            lines[-1] = lines[-1][:-1]
        lines.append("}")

        if self.source_line is not None:
            lines.insert(0, self.source_line)
        return lines


@dataclass(slots=True)
class ReformatReport:
    """Summary of a reformatting run."""

    processed: list[str] = field(default_factory=list)
    dropped: list[str] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.processed)


class EntryReformatter:
    """Line transducer that rewrites Mendeley entries one at a time."""

    def __init__(self, config: FixerConfig) -> None:
        self.config = config
        self.report = ReformatReport()
        self._entry: Entry | None = None
        self._handlers: dict[LineKind, Callable[[str], list[str]]] = {
            LineKind.ENTRY_START: self._start_entry,
            LineKind.ENTRY_END: self._end_entry,
            LineKind.TITLE: self._set_title,
            LineKind.CREATORS: self._add_creators,
            LineKind.URL: self._set_source,
            LineKind.BLACKLISTED: self._drop,
            LineKind.FIELD: self._add_field,
        }

    def process(self, lines: Iterable[str]) -> Iterator[str]:
        """Consume input lines and yield output lines, without line terminators."""
        for raw_line in lines:
            yield from self.feed(raw_line.rstrip("\r\n"))
        self.finish()

    def feed(self, line: str) -> list[str]:
        """Handle one input line and return any output it completes."""
        kind = classify_line(line, self.config.blacklist)

        if self._entry is None and kind is not LineKind.ENTRY_START:
            return self._outside_entry(line, kind)

        return self._handlers[kind](line)

    def finish(self) -> None:
        """Close the stream, dropping an entry that was never terminated."""
        if self._entry is not None:
            self._drop_open_entry("end of input")

    def _outside_entry(self, line: str, kind: LineKind) -> list[str]:
        if kind is LineKind.ENTRY_END:
            logger.warning("Ignoring closing line outside of any entry: %r", line)
            return []
        if kind is LineKind.BLACKLISTED or not line.strip():
            return []
        if kind is LineKind.URL:
            logger.warning("Ignoring url field outside of any entry: %r", line)
            return []
        return [wrap_urls(self._ordinals(line))]

    def _drop_open_entry(self, reason: str) -> None:
        assert self._entry is not None
        key = self._entry.key or self._entry.start_line
        logger.warning("Dropping unterminated entry %s (%s)", key, reason)
        self.report.dropped.append(key)
        self._entry = None

    def _ordinals(self, line: str) -> str:
        if self.config.do_overscript:
            return replace_ordinals(line)
        return line

    def _start_entry(self, line: str) -> list[str]:
        if self._entry is not None:
            self._drop_open_entry("new entry started")

        key = extract_citekey(line)
        if key is not None:
            logger.info("Processing: %s", key)
        self._entry = Entry(start_line=line, key=key)
        return []

    def _end_entry(self, line: str) -> list[str]:
        assert self._entry is not None
        entry, self._entry = self._entry, None
        self.report.processed.append(entry.key or entry.start_line)
        return [*entry.render(), ""]

    def _set_title(self, line: str) -> list[str]:
        assert self._entry is not None
        self._entry.title_line = " " + wrap_urls(self._ordinals(line))
        return []

    def _add_creators(self, line: str) -> list[str]:
        assert self._entry is not None
        if count_authors(line) > self.config.collapse_authors_count:
            line = collapse_authors(line)
        self._entry.body.append(" " + self._ordinals(line))
        return []

    def _set_source(self, line: str) -> list[str]:
        assert self._entry is not None
        source = extract_source(line)
        if source is not None:
            self._entry.source_line = SOURCE_PREFIX + source
        return []

    def _drop(self, line: str) -> list[str]:
        return []

    def _add_field(self, line: str) -> list[str]:
        assert self._entry is not None
        self._entry.body.append(" " + wrap_urls(self._ordinals(line)))
        return []


def reformat_lines(lines: Iterable[str], config: FixerConfig) -> list[str]:
    """Reformat an in-memory sequence of lines."""
    return list(EntryReformatter(config).process(lines))


def reformat_file(config: FixerConfig) -> ReformatReport:
    """Reformat ``config.input_path`` into ``config.output_path``.

    Returns:
        :class:`ReformatReport` listing the written and dropped entries

    Raises:
        FileNotFoundError: If the input file does not exist
        ValueError: If the output path is the input file
        OSError: If reading or writing fails
    """
    input_path = config.input_path
    output_path = config.output_path

    if not input_path.exists():
        raise FileNotFoundError(f"Bibliography file not found: {input_path}")
    if input_path.resolve() == output_path.resolve():
        raise ValueError(f"Output file must differ from the input file: {output_path}")

    logger.debug("Reformatting %s -> %s", input_path, output_path)

    reformatter = EntryReformatter(config)
    with open(input_path, encoding="utf-8") as source, open(
        output_path, "w", encoding="utf-8", newline="\n"
    ) as target:
        for out_line in reformatter.process(source):
            target.write(out_line + "\n")

    report = reformatter.report
    logger.info("Done: %d entries written to %s", report.entry_count, output_path)
    return report
