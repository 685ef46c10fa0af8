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
from enum import Enum

from .selection import DiffSelection


class FileStatus(Enum):
    MODIFIED = "modified"
    NEW = "new"
    DELETED = "deleted"


@dataclass(frozen=True)
class FileChange:
    # None when the file does not exist in one of the images
    path: str | None
    status: FileStatus = FileStatus.MODIFIED
    selection: DiffSelection = field(default_factory=DiffSelection)

    @property
    def display_path(self) -> str:
        return self.path if self.path is not None else "/dev/null"

    def with_selection(self, selection: DiffSelection) -> "FileChange":
        return FileChange(self.path, self.status, selection)
