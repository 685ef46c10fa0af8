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


from dataclasses import dataclass
from enum import Enum


class DiffLineKind(Enum):
    HUNK = "hunk"
    CONTEXT = "context"
    ADD = "add"
    DELETE = "delete"


@dataclass(frozen=True)
class DiffLine:
    """
    One physical line of a diff hunk.

    For HUNK lines `text` is the literal `@@ ... @@` header. For every other
    kind `text` keeps its leading marker character (' ', '+' or '-').
    """

    kind: DiffLineKind
    text: str

    @property
    def is_selectable(self) -> bool:
        return self.kind in (DiffLineKind.ADD, DiffLineKind.DELETE)

    def as_context(self) -> str:
        # the marker is replaced, the rest of the line is kept byte for byte
        return " " + self.text[1:]
