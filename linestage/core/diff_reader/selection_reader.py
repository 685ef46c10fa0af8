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


from collections.abc import Iterable
from pathlib import Path

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..data.selection import DiffSelection
from ..exceptions import SelectionError, invalid_selection, path_not_found

_SELECTION_ADAPTER = TypeAdapter(dict[int, bool])


def parse_selection(raw: str | bytes, source: str = "<input>") -> DiffSelection:
    """Reads a JSON object such as {"3": true, "4": false} into a selection."""
    try:
        lines = _SELECTION_ADAPTER.validate_json(raw)
    except ValidationError as e:
        raise invalid_selection(source, str(e.errors()[0]["msg"])) from e

    if any(index < 0 for index in lines):
        raise invalid_selection(source, "line indices cannot be negative")

    return DiffSelection(lines)


def load_selection(path: Path) -> DiffSelection:
    if not path.exists():
        raise path_not_found(str(path))

    selection = parse_selection(path.read_bytes(), source=str(path))
    logger.debug(f"Loaded {len(selection)} selection entries from {path}")
    return selection


def selection_from_indices(
    include: Iterable[int] = (),
    exclude: Iterable[int] = (),
    base: DiffSelection | None = None,
) -> DiffSelection:
    """Layers explicit include/exclude indices over an optional base selection."""
    include = list(include)
    exclude = list(exclude)

    conflicts = sorted(set(include) & set(exclude))
    if conflicts:
        raise SelectionError(
            f"Lines both included and excluded: {', '.join(map(str, conflicts))}",
            "Each line index can only be passed to one of --include/--exclude",
        )

    selection = base or DiffSelection()
    return selection.with_lines(include, True).with_lines(exclude, False)
