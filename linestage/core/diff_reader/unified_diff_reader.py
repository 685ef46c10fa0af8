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


import re
from dataclasses import dataclass

from loguru import logger

from ..data.diff_line import DiffLine, DiffLineKind
from ..data.diff_section import Diff, DiffRange, DiffSection
from ..data.file_change import FileChange, FileStatus
from ..data.selection import DiffSelection
from ..exceptions import DiffParseError, invalid_hunk_header
from ..patch.header import DEVNULL

RE_DIFF_GIT = re.compile(r"^diff --git (.+?) (.+?)\s*$")
RE_HUNK = re.compile(r"^@@\s+-(\d+)(?:,(\d+))?\s+\+(\d+)(?:,(\d+))?\s+@@(.*)$")

NO_NEWLINE_MARKER = "\\"

_LINE_KINDS = {
    " ": DiffLineKind.CONTEXT,
    "+": DiffLineKind.ADD,
    "-": DiffLineKind.DELETE,
}


@dataclass(frozen=True)
class ParsedFileDiff:
    old_path: str | None
    new_path: str | None
    status: FileStatus
    diff: Diff

    @property
    def path(self) -> str | None:
        return self.new_path if self.new_path is not None else self.old_path

    def to_file_change(self, selection: DiffSelection | None = None) -> FileChange:
        return FileChange(
            path=self.path,
            status=self.status,
            selection=selection or DiffSelection(),
        )


def _strip_prefix_ab(path: str) -> str | None:
    path = path.strip()
    if path == DEVNULL:
        return None
    if (path.startswith("a/") or path.startswith("b/")) and len(path) > 2:
        return path[2:]
    return path


def _parse_path_from_header_line(line: str, prefix: str) -> str | None:
    rest = line[len(prefix) :]
    # path ends at the first tab, anything after it is a timestamp
    if "\t" in rest:
        rest = rest.split("\t", 1)[0]
    return _strip_prefix_ab(rest)


def _infer_status(
    old_path: str | None, new_path: str | None, metadata: dict[str, str]
) -> FileStatus:
    if "new_file_mode" in metadata or (old_path is None and new_path is not None):
        return FileStatus.NEW
    if "deleted_file_mode" in metadata or (new_path is None and old_path is not None):
        return FileStatus.DELETED
    return FileStatus.MODIFIED


class _SectionBuilder:
    """Collects the lines of one hunk until its declared counts are consumed."""

    def __init__(self, header: str, hunk_range: DiffRange, span_start: int):
        self.lines = [DiffLine(DiffLineKind.HUNK, header)]
        self.range = hunk_range
        self.span_start = span_start
        self.old_remaining = hunk_range.old_count
        self.new_remaining = hunk_range.new_count

    @property
    def complete(self) -> bool:
        return self.old_remaining <= 0 and self.new_remaining <= 0

    def add(self, kind: DiffLineKind, text: str) -> None:
        self.lines.append(DiffLine(kind, text))
        if kind != DiffLineKind.ADD:
            self.old_remaining -= 1
        if kind != DiffLineKind.DELETE:
            self.new_remaining -= 1

    def build(self) -> DiffSection:
        return DiffSection(
            lines=tuple(self.lines),
            range=self.range,
            span_start=self.span_start,
            span_end=self.span_start + len(self.lines) - 1,
        )


def _parse_hunk_header(line: str, line_number: int) -> DiffRange:
    match = RE_HUNK.match(line)
    if not match:
        raise invalid_hunk_header(line, line_number)

    old_count = match.group(2)
    new_count = match.group(4)
    return DiffRange(
        old_start=int(match.group(1)),
        old_count=int(old_count) if old_count is not None else 1,
        new_start=int(match.group(3)),
        new_count=int(new_count) if new_count is not None else 1,
    )


def parse_unified_diff(text: str) -> ParsedFileDiff:
    """
    Read the unified diff of a single file into a Diff.

    Every hunk line, headers included, gets an index in one file-wide
    numbering that starts at 0 with the first hunk header. A hunk ends once
    the line counts of its header are used up.

    Lines are split on "\\n" only. A "\\r" before it stays part of a hunk
    line so that patches for CRLF files keep their line endings.
    """
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    metadata: dict[str, str] = {}
    old_path: str | None = None
    new_path: str | None = None
    seen_file_header = False

    sections: list[DiffSection] = []
    current: _SectionBuilder | None = None
    next_index = 0

    for line_number, line in enumerate(lines, start=1):
        if current is not None:
            if line.startswith(NO_NEWLINE_MARKER):
                continue

            if line in ("", "\r"):
                # some tools strip the trailing space of empty context lines
                current.add(DiffLineKind.CONTEXT, " " + line)
            else:
                kind = _LINE_KINDS.get(line[0])
                if kind is None:
                    raise DiffParseError(
                        f"Unexpected line {line_number} inside hunk: {line!r}",
                        "Hunk lines must start with ' ', '+' or '-'",
                    )
                current.add(kind, line)

            if current.complete:
                section = current.build()
                sections.append(section)
                next_index = section.span_end + 1
                current = None
            continue

        # outside hunks a trailing "\r" is line ending noise
        line = line.rstrip("\r")

        if line.startswith("@@"):
            current = _SectionBuilder(
                line, _parse_hunk_header(line, line_number), next_index
            )
            if current.complete:
                # an empty hunk, e.g. @@ -0,0 +0,0 @@
                section = current.build()
                sections.append(section)
                next_index = section.span_end + 1
                current = None
            continue

        if line.startswith(NO_NEWLINE_MARKER) or not line.strip():
            continue

        if line.startswith("Binary files ") or line.startswith("GIT binary patch"):
            raise DiffParseError(
                "Binary diffs are not supported",
                "Only textual unified diffs can be partially selected",
            )

        if sections and (line.startswith("diff --git ") or line.startswith("--- ")):
            raise DiffParseError(
                f"More than one file found at line {line_number}",
                "Pass the diff of a single file",
            )

        if sections and line[0] in _LINE_KINDS and not line.startswith("+++ "):
            raise DiffParseError(
                f"Unexpected hunk line {line_number} after the hunk ended: {line!r}",
                "The previous hunk header declares fewer lines than follow it",
            )

        match = RE_DIFF_GIT.match(line)
        if match:
            if "diff_git" in metadata:
                raise DiffParseError(
                    f"More than one file found at line {line_number}",
                    "Pass the diff of a single file",
                )
            metadata["diff_git"] = line
            old_path = _strip_prefix_ab(match.group(1))
            new_path = _strip_prefix_ab(match.group(2))
        elif line.startswith("new file mode "):
            metadata["new_file_mode"] = line.strip()
        elif line.startswith("deleted file mode "):
            metadata["deleted_file_mode"] = line.strip()
        elif line.startswith("--- "):
            if seen_file_header:
                raise DiffParseError(
                    f"More than one file found at line {line_number}",
                    "Pass the diff of a single file",
                )
            old_path = _parse_path_from_header_line(line, "--- ")
        elif line.startswith("+++ "):
            seen_file_header = True
            new_path = _parse_path_from_header_line(line, "+++ ")
        else:
            logger.debug(f"Ignoring header line {line_number}: {line}")

    if current is not None:
        raise DiffParseError(
            f"Hunk starting with {current.lines[0].text!r} is truncated",
            f"{current.old_remaining} old and {current.new_remaining} new lines are missing",
        )

    # new files in git diffs name themselves on both sides of `diff --git`
    if "new_file_mode" in metadata:
        old_path = None
    if "deleted_file_mode" in metadata:
        new_path = None

    status = _infer_status(old_path, new_path, metadata)
    logger.debug(
        "Parsed diff for {path}: status={status} sections={count}",
        path=new_path or old_path,
        status=status.value,
        count=len(sections),
    )
    return ParsedFileDiff(
        old_path=old_path, new_path=new_path, status=status, diff=Diff(tuple(sections))
    )
