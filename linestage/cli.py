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
from platformdirs import user_config_dir

from linestage.commands import lines, patch
from linestage.context import CONFIG_FILE_NAME, ENV_PREFIX, GlobalConfig, GlobalContext
from linestage.core.config.config_loader import ConfigLoader
from linestage.core.exceptions import handle_linestage_exception
from linestage.core.logging.logging import setup_logger
from linestage.runtimeutil import (
    ensure_utf8_output,
    get_log_dir_callback,
    version_callback,
)

# create app
app = typer.Typer(
    help="linestage: stage individual lines of a diff as a valid patch",
    pretty_exceptions_show_locals=False,
    pretty_exceptions_enable=False,
    add_completion=False,
)

# attach commands
app.command(name="patch")(patch.main)
app.command(name="lines")(lines.main)


def setup_config_args(**kwargs):
    config_args = {}

    for key, item in kwargs.items():
        if item is not None:
            config_args[key] = item

    return config_args


@app.callback(invoke_without_command=True)
@handle_linestage_exception
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        help="Show version and exit",
    ),
    log_path: bool = typer.Option(
        False,
        "--log-dir",
        "-LD",
        callback=get_log_dir_callback,
        help="Show log path (where logs for linestage live) and exit",
    ),
    custom_config: str | None = typer.Option(
        None,
        "--custom-config",
        help="Path to a custom config file",
    ),
    index_scheme: str | None = typer.Option(
        None,
        "--index-scheme",
        help="How selection indices address lines: default, absolute or local.",
    ),
    fail_on_empty: bool | None = typer.Option(
        None,
        "--fail-on-empty",
        help="Exit with status 2 when no hunk survives the selection.",
    ),
    verbose: bool | None = typer.Option(
        None,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    silent: bool | None = typer.Option(
        None,
        "--silent",
        "-s",
        help="Do not output any log text to the console.",
    ),
) -> None:
    """
    Global setup callback. Initialize shared objects here.
    """
    # skip --help in subcommands
    if any(arg in ctx.help_option_names for arg in ctx.args):
        return

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    # initial setup of logger, will be updated later if needed
    setup_logger(ctx.invoked_subcommand, debug=verbose or False, silent=silent or False)

    config_args = setup_config_args(
        index_scheme=index_scheme,
        fail_on_empty=fail_on_empty,
        verbose=verbose,
        silent=silent,
    )

    local_config_path = Path(CONFIG_FILE_NAME)
    global_config_path = Path(user_config_dir("linestage")) / CONFIG_FILE_NAME
    custom_config_path = Path(custom_config) if custom_config else None

    config, used_sources, used_defaults = ConfigLoader.get_full_config(
        GlobalConfig,
        config_args,
        local_config_path,
        ENV_PREFIX,
        global_config_path,
        custom_config_path,
    )

    # config files may turn on verbosity or silence the cli
    if config.verbose != bool(verbose) or config.silent != bool(silent):
        setup_logger(ctx.invoked_subcommand, debug=config.verbose, silent=config.silent)

    logger.debug(
        f"Config built from {used_sources} (defaults used: {used_defaults}): {config}"
    )

    ctx.obj = GlobalContext.from_global_config(config)


def run_app():
    ensure_utf8_output()
    app()


if __name__ == "__main__":
    run_app()
