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

from loguru import logger

from ..data.diff_line import DiffLineKind
from ..data.diff_section import Diff, DiffRange, DiffSection
from ..data.file_change import FileChange, FileStatus
from ..data.selection import DiffSelection, IndexScheme, SelectionState
from .header import extract_additional_text, format_file_header, format_hunk_header

DEFAULT_INDEX_SCHEMES = {
    FileStatus.MODIFIED: IndexScheme.ABSOLUTE,
    FileStatus.NEW: IndexScheme.SECTION_LOCAL,
    FileStatus.DELETED: IndexScheme.SECTION_LOCAL,
}


@dataclass(frozen=True)
class SectionPatch:
    """A rebuilt hunk: its recomputed range, trailing header text and body lines."""

    range: DiffRange
    additional_text: str
    body: tuple[str, ...]

    def render(self) -> str:
        header = format_hunk_header(self.range, self.additional_text)
        return header + "".join(line + "\n" for line in self.body)


@dataclass(frozen=True)
class PatchResult:
    text: str
    hunk_count: int
    # fold value carried across the sections of the file, in order
    lines_skipped: int = 0
    hunks: tuple[SectionPatch, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return self.hunk_count == 0


class PatchSynthesizer:
    """
    Rebuilds the hunks of a single file diff so that only the selected
    additions and deletions are applied.

    Each entry point walks the sections once and threads a running
    "lines skipped" total through them; nothing is shared between calls.
    """

    @staticmethod
    def _section_entries(
        section: DiffSection, selection: DiffSelection, scheme: IndexScheme
    ) -> list[tuple[int, bool]]:
        if scheme == IndexScheme.ABSOLUTE:
            return selection.entries_in(section.span_start, section.span_end)
        return selection.entries_in(0, len(section.lines) - 1)

    @staticmethod
    def _state(
        section: DiffSection,
        local_index: int,
        selection: DiffSelection,
        scheme: IndexScheme,
    ) -> SelectionState:
        return selection.state(scheme.index_of(section, local_index))

    @staticmethod
    def modified_section(
        section: DiffSection, selection: DiffSelection, scheme: IndexScheme
    ) -> tuple[SectionPatch | None, int]:
        """
        Returns the rebuilt section (None when it is skipped) and its
        contribution to the file-wide skipped lines total.
        """
        entries = PatchSynthesizer._section_entries(section, selection, scheme)

        # nothing picked in this hunk, emit nothing for it
        if entries and not any(include for _, include in entries):
            logger.debug(
                "Skipping section at span {start}-{end}: {count} lines excluded",
                start=section.span_start,
                end=section.span_end,
                count=len(entries),
            )
            return None, len(entries)

        body: list[str] = []
        lines_skipped = 0
        additions = 0
        deletions = 0

        for local_index, line in section.body():
            if line.kind == DiffLineKind.HUNK:
                continue

            if line.kind == DiffLineKind.CONTEXT:
                body.append(line.text)
                continue

            state = PatchSynthesizer._state(section, local_index, selection, scheme)

            if state == SelectionState.INCLUDED:
                body.append(line.text)
                if line.kind == DiffLineKind.ADD:
                    additions += 1
                else:
                    deletions += 1
            elif line.kind == DiffLineKind.DELETE:
                # the line stays in the new image
                body.append(line.as_context())
                lines_skipped -= 1
            else:
                # the addition never reaches the new image
                lines_skipped += 1

        new_range = DiffRange(
            old_start=section.range.old_start,
            old_count=section.range.old_count,
            new_start=section.range.new_start,
            new_count=section.range.new_count - lines_skipped,
        )

        logger.debug(
            "Section at span {start}-{end}: +{additions} -{deletions} skipped={skipped}",
            start=section.span_start,
            end=section.span_end,
            additions=additions,
            deletions=deletions,
            skipped=lines_skipped,
        )

        patch = SectionPatch(
            range=new_range,
            additional_text=extract_additional_text(section.header.text),
            body=tuple(body),
        )
        return patch, lines_skipped

    @staticmethod
    def new_file_section(
        section: DiffSection, selection: DiffSelection, scheme: IndexScheme
    ) -> SectionPatch:
        body: list[str] = []
        lines_counted = 0

        for local_index, line in section.body():
            if line.kind == DiffLineKind.HUNK:
                continue

            if line.kind == DiffLineKind.CONTEXT:
                body.append(line.text)
                continue

            state = PatchSynthesizer._state(section, local_index, selection, scheme)
            if state == SelectionState.INCLUDED:
                body.append(line.text)
                lines_counted += 1

        new_range = DiffRange(
            old_start=section.range.old_start,
            old_count=section.range.old_count,
            new_start=section.range.new_start,
            new_count=lines_counted,
        )
        return SectionPatch(
            range=new_range,
            additional_text=extract_additional_text(section.header.text),
            body=tuple(body),
        )

    @staticmethod
    def deleted_file_section(
        section: DiffSection, selection: DiffSelection, scheme: IndexScheme
    ) -> SectionPatch:
        body: list[str] = []
        lines_included = 0

        for local_index, line in section.body():
            if line.kind == DiffLineKind.HUNK:
                continue

            if line.kind == DiffLineKind.CONTEXT:
                body.append(line.text)
                continue

            state = PatchSynthesizer._state(section, local_index, selection, scheme)
            if state == SelectionState.INCLUDED:
                body.append(line.text)
                lines_included += 1
            else:
                body.append(line.as_context())

        new_range = DiffRange(
            old_start=section.range.old_start,
            old_count=section.range.old_count,
            new_start=1,
            new_count=section.range.old_count - lines_included,
        )
        return SectionPatch(
            range=new_range,
            additional_text=extract_additional_text(section.header.text),
            body=tuple(body),
        )

    @staticmethod
    def assemble(
        old_path: str | None,
        new_path: str | None,
        hunks: list[SectionPatch],
        lines_skipped: int = 0,
    ) -> PatchResult:
        """Joins the rebuilt hunks under a single file header."""
        if not hunks:
            return PatchResult(text="", hunk_count=0, lines_skipped=lines_skipped)

        text = format_file_header(old_path, new_path) + "".join(
            hunk.render() for hunk in hunks
        )
        return PatchResult(
            text=text,
            hunk_count=len(hunks),
            lines_skipped=lines_skipped,
            hunks=tuple(hunks),
        )


def synthesize_modified_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.ABSOLUTE,
) -> PatchResult:
    hunks: list[SectionPatch] = []
    lines_skipped = 0

    for section in diff:
        patch, skipped = PatchSynthesizer.modified_section(
            section, file_change.selection, index_scheme
        )
        lines_skipped += skipped
        if patch is not None:
            hunks.append(patch)

    return PatchSynthesizer.assemble(
        file_change.path, file_change.path, hunks, lines_skipped
    )


def synthesize_new_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.SECTION_LOCAL,
) -> PatchResult:
    hunks = [
        PatchSynthesizer.new_file_section(section, file_change.selection, index_scheme)
        for section in diff
    ]
    return PatchSynthesizer.assemble(None, file_change.path, hunks)


def synthesize_deleted_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.SECTION_LOCAL,
) -> PatchResult:
    hunks = [
        PatchSynthesizer.deleted_file_section(
            section, file_change.selection, index_scheme
        )
        for section in diff
    ]
    return PatchSynthesizer.assemble(file_change.path, file_change.path, hunks)


_SYNTHESIZERS = {
    FileStatus.MODIFIED: synthesize_modified_file,
    FileStatus.NEW: synthesize_new_file,
    FileStatus.DELETED: synthesize_deleted_file,
}


def synthesize(
    file_change: FileChange, diff: Diff, index_scheme: IndexScheme | None = None
) -> PatchResult:
    """
    Builds the patch for `file_change` using the variant matching its status.

    When `index_scheme` is None the variant's default addressing is used:
    absolute indices for modified files, section-local ones otherwise.
    """
    scheme = index_scheme or DEFAULT_INDEX_SCHEMES[file_change.status]
    logger.debug(
        "Synthesizing patch for {path} status={status} scheme={scheme} sections={sections}",
        path=file_change.display_path,
        status=file_change.status.value,
        scheme=scheme.value,
        sections=len(diff),
    )
    return _SYNTHESIZERS[file_change.status](file_change, diff, scheme)


def create_patch_for_modified_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.ABSOLUTE,
) -> str:
    return synthesize_modified_file(file_change, diff, index_scheme).text


def create_patch_for_new_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.SECTION_LOCAL,
) -> str:
    return synthesize_new_file(file_change, diff, index_scheme).text


def create_patch_for_deleted_file(
    file_change: FileChange,
    diff: Diff,
    index_scheme: IndexScheme = IndexScheme.SECTION_LOCAL,
) -> str:
    return synthesize_deleted_file(file_change, diff, index_scheme).text


def create_patch(
    file_change: FileChange, diff: Diff, index_scheme: IndexScheme | None = None
) -> str:
    return synthesize(file_change, diff, index_scheme).text
