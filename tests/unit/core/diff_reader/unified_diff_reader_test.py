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


import pytest
from linestage.core.data.diff_line import DiffLineKind
from linestage.core.data.diff_section import DiffRange
from linestage.core.data.file_change import FileStatus
from linestage.core.data.selection import DiffSelection
from linestage.core.diff_reader.unified_diff_reader import parse_unified_diff
from linestage.core.exceptions import DiffParseError
from linestage.core.patch.synthesizer import create_patch

MODIFIED_DIFF = """diff --git a/src/app.py b/src/app.py
index 83db48f..bf269f4 100644
--- a/src/app.py
+++ b/src/app.py
@@ -1,3 +1,3 @@ import os
 a
-b
+B
 c
@@ -10,2 +10,3 @@
 x
+y
 z
"""

NEW_FILE_DIFF = """diff --git a/new.txt b/new.txt
new file mode 100644
index 0000000..e69de29
--- /dev/null
+++ b/new.txt
@@ -0,0 +1,2 @@
+hello
+world
"""

DELETED_FILE_DIFF = """--- a/gone.txt\t2025-01-01 10:00:00
+++ /dev/null
@@ -1,2 +0,0 @@
-x
-y
"""


# -----------------------------------------------------------------------------
# Structure
# -----------------------------------------------------------------------------


def test_parse_modified_diff():
    parsed = parse_unified_diff(MODIFIED_DIFF)

    assert parsed.status == FileStatus.MODIFIED
    assert parsed.old_path == "src/app.py"
    assert parsed.new_path == "src/app.py"
    assert len(parsed.diff) == 2

    first, second = parsed.diff.sections
    assert first.header.text == "@@ -1,3 +1,3 @@ import os"
    assert first.range == DiffRange(1, 3, 1, 3)
    assert (first.span_start, first.span_end) == (0, 4)
    assert second.range == DiffRange(10, 2, 10, 3)
    assert (second.span_start, second.span_end) == (5, 8)


def test_line_kinds_keep_their_markers():
    parsed = parse_unified_diff(MODIFIED_DIFF)
    lines = parsed.diff.sections[0].lines

    assert [line.kind for line in lines] == [
        DiffLineKind.HUNK,
        DiffLineKind.CONTEXT,
        DiffLineKind.DELETE,
        DiffLineKind.ADD,
        DiffLineKind.CONTEXT,
    ]
    assert [line.text for line in lines[1:]] == [" a", "-b", "+B", " c"]


def test_parse_new_file():
    parsed = parse_unified_diff(NEW_FILE_DIFF)

    assert parsed.status == FileStatus.NEW
    assert parsed.old_path is None
    assert parsed.new_path == "new.txt"
    assert parsed.path == "new.txt"


def test_parse_deleted_file_strips_timestamp():
    parsed = parse_unified_diff(DELETED_FILE_DIFF)

    assert parsed.status == FileStatus.DELETED
    assert parsed.old_path == "gone.txt"
    assert parsed.new_path is None
    assert parsed.path == "gone.txt"


def test_to_file_change_carries_selection():
    parsed = parse_unified_diff(NEW_FILE_DIFF)

    change = parsed.to_file_change(DiffSelection({1: True}))

    assert change.path == "new.txt"
    assert change.status == FileStatus.NEW
    assert change.selection.to_dict() == {1: True}


# -----------------------------------------------------------------------------
# Lenient input
# -----------------------------------------------------------------------------


def test_missing_counts_default_to_one():
    parsed = parse_unified_diff("@@ -3 +3 @@\n-a\n+b\n")

    assert parsed.diff.sections[0].range == DiffRange(3, 1, 3, 1)


def test_no_newline_markers_are_dropped():
    text = "@@ -1 +1 @@\n-a\n\\ No newline at end of file\n+b\n\\ No newline at end of file\n"

    section = parse_unified_diff(text).diff.sections[0]

    assert [line.text for line in section.lines[1:]] == ["-a", "+b"]
    assert section.span_end == 2


def test_blank_line_is_empty_context():
    section = parse_unified_diff("@@ -1,3 +1,3 @@\n a\n\n c\n").diff.sections[0]

    assert section.lines[2].kind == DiffLineKind.CONTEXT
    assert section.lines[2].text == " "


def test_deletion_that_looks_like_a_header_stays_in_hunk():
    section = parse_unified_diff("@@ -1,2 +1,1 @@\n--- not a header\n keep\n").diff.sections[0]

    assert section.lines[1].kind == DiffLineKind.DELETE
    assert section.lines[1].text == "--- not a header"


# -----------------------------------------------------------------------------
# Line endings
# -----------------------------------------------------------------------------


def test_form_feed_stays_inside_its_line():
    text = "--- a/f.c\n+++ b/f.c\n@@ -1,2 +1,2 @@\n a\x0cb\n-x\n+y\n"

    section = parse_unified_diff(text).diff.sections[0]

    assert [line.text for line in section.lines[1:]] == [" a\x0cb", "-x", "+y"]
    assert section.span_end == 3


def test_crlf_hunk_lines_keep_carriage_return():
    text = "--- a/f.txt\r\n+++ b/f.txt\r\n@@ -1,2 +1,2 @@\r\n a\r\n-b\r\n+c\r\n"

    parsed = parse_unified_diff(text)
    section = parsed.diff.sections[0]

    assert parsed.path == "f.txt"
    assert section.header.text == "@@ -1,2 +1,2 @@"
    assert [line.text for line in section.lines[1:]] == [" a\r", "-b\r", "+c\r"]


def test_crlf_patch_round_trip():
    text = "--- a/f.txt\n+++ b/f.txt\n@@ -1,2 +1,2 @@\n a\r\n-b\r\n+c\r\n"
    parsed = parse_unified_diff(text)

    patch = create_patch(
        parsed.to_file_change(DiffSelection({2: True, 3: True})), parsed.diff
    )

    assert patch == text


def test_crlf_unselected_deletion_keeps_carriage_return():
    text = "--- a/f.txt\n+++ b/f.txt\n@@ -1,2 +1,2 @@\n a\r\n-b\r\n+c\r\n"
    parsed = parse_unified_diff(text)

    patch = create_patch(parsed.to_file_change(DiffSelection({3: True})), parsed.diff)

    assert patch.endswith("@@ -1,2 +1,3 @@\n a\r\n b\r\n+c\r\n")


def test_blank_crlf_context_line():
    section = parse_unified_diff("@@ -1,2 +1,2 @@\n a\r\n\r\n").diff.sections[0]

    assert section.lines[2].kind == DiffLineKind.CONTEXT
    assert section.lines[2].text == " \r"


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------


@pytest.mark.parametrize(
    "text",
    [
        "@@ -x +1 @@\n+a\n",
        "@@ -1,2 +1,2 @@\n a\n*b\n",
        "@@ -1,3 +1,3 @@\n a\n",
        "Binary files a/img.png and b/img.png differ\n",
        MODIFIED_DIFF + MODIFIED_DIFF,
        "@@ -1,1 +1,1 @@\n-a\n+b\n c\n",
        "@@ -1,1 +1,1 @@\n-a\n+b\n+c\n",
    ],
    ids=[
        "bad-range",
        "unknown-marker",
        "truncated",
        "binary",
        "two-files",
        "undercounted-context",
        "undercounted-addition",
    ],
)
def test_invalid_diffs_raise(text):
    with pytest.raises(DiffParseError):
        parse_unified_diff(text)


def test_empty_input_has_no_sections():
    parsed = parse_unified_diff("")

    assert len(parsed.diff) == 0
    assert parsed.status == FileStatus.MODIFIED
