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


from ..data.diff_section import DiffRange

DEVNULL = "/dev/null"
HUNK_MARKER = "@@"


def extract_additional_text(hunk_header: str) -> str:
    """
    Return whatever follows the closing `@@` of a hunk header, verbatim.

    Diff producers often append the enclosing function signature there, e.g.
    `@@ -1,2 +1,3 @@ def foo():` -> ` def foo():`. A header with at most one
    marker yields an empty string.
    """
    index = hunk_header.rfind(HUNK_MARKER)

    # -1: no marker, 0: the only marker is the opening one
    if index <= 0:
        return ""

    return hunk_header[index + len(HUNK_MARKER) :]


def format_file_header(old_path: str | None, new_path: str | None) -> str:
    old_text = f"a/{old_path}" if old_path else DEVNULL
    new_text = f"b/{new_path}" if new_path else DEVNULL
    return f"--- {old_text}\n+++ {new_text}\n"


def format_hunk_header(hunk_range: DiffRange, additional_text: str = "") -> str:
    # additional_text already carries its own leading space, if any
    return (
        f"@@ -{hunk_range.old_start},{hunk_range.old_count} "
        f"+{hunk_range.new_start},{hunk_range.new_count} @@{additional_text}\n"
    )


def format_patch_header(
    old_path: str | None,
    new_path: str | None,
    hunk_range: DiffRange,
    additional_text: str = "",
) -> str:
    """File header followed by a single hunk header, each line newline-terminated."""
    return format_file_header(old_path, new_path) + format_hunk_header(
        hunk_range, additional_text
    )
