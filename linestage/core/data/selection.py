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


from collections.abc import Iterable, Iterator, Mapping
from enum import Enum
from types import MappingProxyType

from .diff_section import Diff, DiffSection


class SelectionState(Enum):
    INCLUDED = "included"
    EXCLUDED = "excluded"
    UNDECIDED = "undecided"


class IndexScheme(Enum):
    """How selection indices address the lines of a diff."""

    # index shared by every line of the file diff, see DiffSection.span_start
    ABSOLUTE = "absolute"
    # index relative to the section, the hunk header being 0
    SECTION_LOCAL = "local"

    def index_of(self, section: DiffSection, local_index: int) -> int:
        if self == IndexScheme.ABSOLUTE:
            return section.absolute_index(local_index)
        return local_index


class DiffSelection:
    """
    Sparse, immutable mapping of line index -> include flag.

    Indices without an entry are undecided. Every builder returns a new
    selection; the original is never modified.
    """

    __slots__ = ("_lines",)

    def __init__(self, lines: Mapping[int, bool] | None = None):
        self._lines = MappingProxyType(
            {int(k): bool(v) for k, v in (lines or {}).items()}
        )

    def state(self, index: int) -> SelectionState:
        include = self._lines.get(index)
        if include is None:
            return SelectionState.UNDECIDED
        return SelectionState.INCLUDED if include else SelectionState.EXCLUDED

    def entries_in(self, start: int, end: int) -> list[tuple[int, bool]]:
        """Entries whose index lies in the inclusive interval [start, end]."""
        return [(i, v) for i, v in sorted(self._lines.items()) if start <= i <= end]

    def with_line(self, index: int, include: bool) -> "DiffSelection":
        lines = dict(self._lines)
        lines[index] = include
        return DiffSelection(lines)

    def with_lines(self, indices: Iterable[int], include: bool) -> "DiffSelection":
        lines = dict(self._lines)
        for index in indices:
            lines[index] = include
        return DiffSelection(lines)

    def with_range(self, start: int, end: int, include: bool) -> "DiffSelection":
        return self.with_lines(range(start, end + 1), include)

    def without_line(self, index: int) -> "DiffSelection":
        lines = dict(self._lines)
        lines.pop(index, None)
        return DiffSelection(lines)

    @staticmethod
    def select_all(
        diff: Diff, scheme: IndexScheme = IndexScheme.ABSOLUTE
    ) -> "DiffSelection":
        return DiffSelection._for_every_selectable(diff, scheme, True)

    @staticmethod
    def select_none(
        diff: Diff, scheme: IndexScheme = IndexScheme.ABSOLUTE
    ) -> "DiffSelection":
        return DiffSelection._for_every_selectable(diff, scheme, False)

    @staticmethod
    def _for_every_selectable(
        diff: Diff, scheme: IndexScheme, include: bool
    ) -> "DiffSelection":
        lines = {}
        for section in diff:
            for local_index, _ in section.selectable_lines():
                lines[scheme.index_of(section, local_index)] = include
        return DiffSelection(lines)

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def included_count(self) -> int:
        return sum(1 for v in self._lines.values() if v)

    def to_dict(self) -> dict[int, bool]:
        return dict(self._lines)

    def __iter__(self) -> Iterator[int]:
        return iter(sorted(self._lines))

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, index: object) -> bool:
        return index in self._lines

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiffSelection):
            return NotImplemented
        return dict(self._lines) == dict(other._lines)

    def __hash__(self) -> int:
        return hash(frozenset(self._lines.items()))

    def __repr__(self) -> str:
        return f"DiffSelection({dict(self._lines)!r})"
