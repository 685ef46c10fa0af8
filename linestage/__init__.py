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


"""Build partial unified-diff patches from a diff and a line selection."""

from .core.data import (
    Diff,
    DiffLine,
    DiffLineKind,
    DiffRange,
    DiffSection,
    DiffSelection,
    FileChange,
    FileStatus,
    IndexScheme,
    SelectionState,
)
from .core.patch import (
    PatchResult,
    create_patch,
    create_patch_for_deleted_file,
    create_patch_for_modified_file,
    create_patch_for_new_file,
    extract_additional_text,
    format_patch_header,
    synthesize,
)

__all__ = [
    "Diff",
    "DiffLine",
    "DiffLineKind",
    "DiffRange",
    "DiffSection",
    "DiffSelection",
    "FileChange",
    "FileStatus",
    "IndexScheme",
    "SelectionState",
    "PatchResult",
    "create_patch",
    "create_patch_for_deleted_file",
    "create_patch_for_modified_file",
    "create_patch_for_new_file",
    "extract_additional_text",
    "format_patch_header",
    "synthesize",
]
