# -----------------------------------------------------------------------------
# linestage - Dual Licensed Software
# Copyright (c) 2025 Adem Can
#
# This file is part of linestage.
#
# linestage is available under a dual-license:
#   1. AGPLv3 (Affero General Public License v3)
#      - See LICENSE.txt and LICENSE-AGPL.txt
#      - Online: https://www.gnu.org/licenses/agpl-3.0.html
#
#   2. Commercial License
#      - For proprietary or revenue-generating use,
#        including SaaS, embedding in closed-source software,
#        or avoiding AGPL obligations.
#      - See LICENSE.txt and COMMERCIAL-LICENSE.txt
#      - Contact: ademfcan@gmail.com
#
# By using this file, you agree to the terms of one of the two licenses above.
# -----------------------------------------------------------------------------


from dataclasses import dataclass, field
from typing import Iterator

from .diff_line import DiffLine, DiffLineKind


@dataclass(frozen=True)
class DiffRange:
    """The four integers of a `@@ -a,b +c,d @@` hunk header."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int


@dataclass(frozen=True)
class DiffSection:
    """
    A single hunk of a file diff.

    `lines[0]` is always the hunk header. `span_start` and `span_end` are the
    inclusive file-wide indices occupied by the section, so the line at local
    position i has the absolute index `span_start + i`.
    """

    lines: tuple[DiffLine, ...]
    range: DiffRange
    span_start: int
    span_end: int

    def __post_init__(self):
        object.__setattr__(self, "lines", tuple(self.lines))
        if not self.lines or self.lines[0].kind != DiffLineKind.HUNK:
            raise ValueError("A diff section must start with its hunk header")

    @property
    def header(self) -> DiffLine:
        return self.lines[0]

    def absolute_index(self, local_index: int) -> int:
        return self.span_start + local_index

    def body(self) -> Iterator[tuple[int, DiffLine]]:
        """Yields (local_index, line) for every line after the header."""
        for index, line in enumerate(self.lines):
            if index == 0:
                continue
            yield index, line

    def selectable_lines(self) -> Iterator[tuple[int, DiffLine]]:
        for index, line in self.body():
            if line.is_selectable:
                yield index, line


@dataclass(frozen=True)
class Diff:
    """Sections in file order, non overlapping and increasing in span_start."""

    sections: tuple[DiffSection, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "sections", tuple(self.sections))
        previous_end = None
        for section in self.sections:
            if previous_end is not None and section.span_start <= previous_end:
                raise ValueError(
                    f"Diff sections overlap or are out of order at span {section.span_start}"
                )
            previous_end = section.span_end

    def __iter__(self) -> Iterator[DiffSection]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)
