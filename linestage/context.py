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
from pathlib import Path
from typing import Literal

from pydantic import BaseModel

from linestage.core.data.file_change import FileStatus
from linestage.core.data.selection import IndexScheme

CONFIG_FILE_NAME = "linestageconfig.toml"
ENV_PREFIX = "linestage_"

_INDEX_SCHEMES = {
    "default": None,
    "absolute": IndexScheme.ABSOLUTE,
    "local": IndexScheme.SECTION_LOCAL,
}


class GlobalConfig(BaseModel):
    verbose: bool = False
    silent: bool = False
    index_scheme: Literal["default", "absolute", "local"] = "default"
    fail_on_empty: bool = False


@dataclass(frozen=True)
class GlobalContext:
    verbose: bool
    silent: bool
    index_scheme: IndexScheme | None
    fail_on_empty: bool

    @classmethod
    def from_global_config(cls, config: GlobalConfig):
        return GlobalContext(
            config.verbose,
            config.silent,
            _INDEX_SCHEMES[config.index_scheme],
            config.fail_on_empty,
        )


@dataclass(frozen=True)
class PatchContext:
    diff_file: Path
    selection_file: Path | None = None
    include: tuple[int, ...] = ()
    exclude: tuple[int, ...] = ()
    status: FileStatus | None = None
    output: Path | None = None
