"""
Block Scanner — groups trimmed lines into declaration blocks.

A small explicit state machine:

    SCANNING ──fn──────────► COLLECTING_METHOD ──line ending in ';'──► SCANNING
    SCANNING ──pub struct──► COLLECTING_STRUCT ──'}'────────────────► SCANNING
    SCANNING ──pub enum────► COLLECTING_ENUM   ──'}'────────────────► SCANNING

A start line seen while collecting flushes the open block (unterminated) and
opens a new one. Attribute lines (`#[...]`) directly above a start line are
attached to the block they annotate; comment lines between them are skipped.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from scit.dialect.models import Dialect
from scit.ir.enums import BlockKind

# Line and doc comment marker
LINE_COMMENT = "//"


class ScanState(str, Enum):
    """Scanner states."""

    SCANNING = "scanning"
    COLLECTING_METHOD = "collecting_method"
    COLLECTING_STRUCT = "collecting_struct"
    COLLECTING_ENUM = "collecting_enum"


_COLLECTING = {
    BlockKind.METHOD: ScanState.COLLECTING_METHOD,
    BlockKind.STRUCT: ScanState.COLLECTING_STRUCT,
    BlockKind.ENUM: ScanState.COLLECTING_ENUM,
}


@dataclass
class Block:
    """A run of lines belonging to one declaration."""

    kind: BlockKind
    start_line: int                                   # 1-based
    lines: list[str] = field(default_factory=list)
    attributes: list[str] = field(default_factory=list)
    terminated: bool = False

    @property
    def text(self) -> str:
        """Declaration text, without attached attributes."""
        return "\n".join(self.lines)

    @property
    def full_text(self) -> str:
        """Attached attributes followed by the declaration text."""
        return "\n".join(self.attributes + self.lines)


class BlockScanner:
    """
    Feed trimmed lines one at a time; collect completed blocks.

    Usage:
        scanner = BlockScanner(dialect)
        for line in lines:
            scanner.feed(line)
        blocks = scanner.finish()
    """

    def __init__(self, dialect: Dialect):
        self._dialect = dialect
        self._starts = [
            (BlockKind.METHOD, _keyword_pattern(dialect.function_keyword)),
            (BlockKind.STRUCT, _keyword_pattern(dialect.struct_keyword)),
            (BlockKind.ENUM, _keyword_pattern(dialect.enum_keyword)),
        ]
        self.state = ScanState.SCANNING
        self._current: Optional[Block] = None
        self._pending_attributes: list[str] = []
        self._blocks: list[Block] = []
        self._lineno = 0

    def feed(self, line: str) -> None:
        """Advance the state machine by one line."""
        self._lineno += 1

        kind = self._start_kind(line)
        if kind is not None:
            self._open(kind, line)
            return

        if self.state is ScanState.SCANNING:
            self._track_attributes(line)
            return

        self._current.lines.append(line)
        if self._is_terminator(self._current.kind, line):
            self._close(terminated=True)

    def finish(self) -> list[Block]:
        """Flush any open block and return all blocks in source order."""
        if self._current is not None:
            self._close(terminated=False)
        return self._blocks

    # -- transitions ---------------------------------------------------------

    def _open(self, kind: BlockKind, line: str) -> None:
        if self._current is not None:
            self._close(terminated=False)

        self._current = Block(
            kind=kind,
            start_line=self._lineno,
            lines=[line],
            attributes=self._pending_attributes,
        )
        self._pending_attributes = []
        self.state = _COLLECTING[kind]

        if self._is_single_line(kind, line):
            self._close(terminated=True)

    def _close(self, terminated: bool) -> None:
        self._current.terminated = terminated
        self._blocks.append(self._current)
        self._current = None
        self.state = ScanState.SCANNING

    # -- line classification -------------------------------------------------

    def _start_kind(self, line: str) -> Optional[BlockKind]:
        for kind, pattern in self._starts:
            if pattern.match(line):
                return kind
        return None

    def _track_attributes(self, line: str) -> None:
        if line.startswith(self._dialect.attribute_prefix):
            self._pending_attributes.append(line)
        elif line and not line.startswith(LINE_COMMENT):
            self._pending_attributes = []

    def _is_terminator(self, kind: BlockKind, line: str) -> bool:
        if kind is BlockKind.METHOD:
            return line.endswith(self._dialect.statement_terminator)
        return line == self._dialect.block_close

    def _is_single_line(self, kind: BlockKind, line: str) -> bool:
        if kind is BlockKind.METHOD:
            return line.endswith(self._dialect.statement_terminator)
        # `pub struct Marker;` or `pub struct Empty {}`
        return line.endswith(self._dialect.block_close) or line.endswith(
            self._dialect.statement_terminator
        )


def scan_blocks(lines: list[str], dialect: Dialect) -> list[Block]:
    """Group trimmed lines into declaration blocks."""
    scanner = BlockScanner(dialect)
    for line in lines:
        scanner.feed(line)
    return scanner.finish()


def _keyword_pattern(keyword: str) -> re.Pattern:
    return re.compile(rf"^{re.escape(keyword)}(?:\s|$)")
