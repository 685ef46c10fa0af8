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
from typer.testing import CliRunner

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


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Keep logs, config lookups and env overrides inside the test directory."""
    monkeypatch.setattr("linestage.core.logging.logging.LOG_DIR", tmp_path / "logs")
    monkeypatch.setattr(
        "linestage.cli.user_config_dir", lambda appname: str(tmp_path / "global")
    )
    for name in (
        "LINESTAGE_LOG_LEVEL",
        "LINESTAGE_CONSOLE_LOG_LEVEL",
        "LINESTAGE_VERBOSE",
        "LINESTAGE_SILENT",
        "LINESTAGE_INDEX_SCHEME",
        "LINESTAGE_FAIL_ON_EMPTY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def diff_file(tmp_path):
    path = tmp_path / "change.diff"
    path.write_text(MODIFIED_DIFF)
    return path
