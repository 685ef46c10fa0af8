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
from loguru import logger

from linestage.context import GlobalContext, PatchContext
from linestage.core.data.file_change import FileChange, FileStatus
from linestage.core.data.selection import DiffSelection
from linestage.core.diff_reader.selection_reader import (
    load_selection,
    selection_from_indices,
)
from linestage.core.diff_reader.unified_diff_reader import parse_unified_diff
from linestage.core.exceptions import FileSystemError, handle_linestage_exception, path_not_found
from linestage.core.logging.utils import log_patch_result, time_block
from linestage.core.patch.synthesizer import PatchResult, synthesize


def build_patch(global_context: GlobalContext, patch_context: PatchContext) -> PatchResult:
    """Reads the diff and selection named by the context and synthesizes the patch."""
    if not patch_context.diff_file.exists():
        raise path_not_found(str(patch_context.diff_file))

    parsed = parse_unified_diff(patch_context.diff_file.read_bytes().decode("utf-8"))

    base = (
        load_selection(patch_context.selection_file)
        if patch_context.selection_file is not None
        else DiffSelection()
    )
    selection = selection_from_indices(
        patch_context.include, patch_context.exclude, base=base
    )

    status = patch_context.status or parsed.status
    if status != parsed.status:
        logger.debug(f"Status overridden: {parsed.status.value} -> {status.value}")

    file_change = FileChange(parsed.path, status, selection)

    with time_block("synthesize"):
        result = synthesize(file_change, parsed.diff, global_context.index_scheme)

    log_patch_result("patch", file_change.display_path, result)
    return result


@handle_linestage_exception
def main(
    ctx: typer.Context,
    diff_file: Path = typer.Argument(
        ..., help="Unified diff of a single file to select lines from."
    ),
    selection_file: Path | None = typer.Option(
        None,
        "--selection",
        help='JSON object mapping line indices to booleans, e.g. {"3": true}.',
    ),
    include: list[int] | None = typer.Option(
        None, "--include", "-i", help="Line index to include. Repeatable."
    ),
    exclude: list[int] | None = typer.Option(
        None, "--exclude", "-x", help="Line index to exclude. Repeatable."
    ),
    status: FileStatus | None = typer.Option(
        None,
        "--status",
        case_sensitive=False,
        help="File lifecycle state. Inferred from the diff headers when omitted.",
    ),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the patch here instead of stdout."
    ),
) -> None:
    """
    Synthesize a patch that applies only the selected lines of a diff.
    """
    global_context: GlobalContext = ctx.obj

    patch_context = PatchContext(
        diff_file=diff_file,
        selection_file=selection_file,
        include=tuple(include or ()),
        exclude=tuple(exclude or ()),
        status=status,
        output=output,
    )

    result = build_patch(global_context, patch_context)

    if result.is_empty:
        logger.warning("No lines selected, nothing to patch")
        if global_context.fail_on_empty:
            raise typer.Exit(2)

    if output is None:
        typer.echo(result.text, nl=False)
        return

    try:
        output.write_text(result.text, encoding="utf-8", newline="")
    except OSError as e:
        raise FileSystemError(f"Could not write patch to {output}", str(e)) from e

    logger.info(f"Wrote {result.hunk_count} hunk(s) to {output}")
