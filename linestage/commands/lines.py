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


from pathlib import Path

import typer

from linestage.core.diff_reader.unified_diff_reader import parse_unified_diff
from linestage.core.exceptions import handle_linestage_exception, path_not_found


@handle_linestage_exception
def main(
    ctx: typer.Context,
    diff_file: Path = typer.Argument(..., help="Unified diff of a single file."),
) -> None:
    """
    List the selectable lines of a diff with their absolute and section-local indices.
    """
    if not diff_file.exists():
        raise path_not_found(str(diff_file))

    parsed = parse_unified_diff(diff_file.read_bytes().decode("utf-8"))

    typer.echo(f"{parsed.status.value} {parsed.path}")
    for section in parsed.diff:
        typer.echo(f"{section.span_start:>6} {0:>5}   {section.header.text}")
        for local_index, line in section.selectable_lines():
            typer.echo(
                f"{section.absolute_index(local_index):>6} {local_index:>5}   {line.text}"
            )
