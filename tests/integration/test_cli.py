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


import json

from linestage.cli import app


def run_cli(runner, args):
    return runner.invoke(app, args)


EXPECTED_BOTH_HUNKS = (
    "--- a/src/app.py\n"
    "+++ b/src/app.py\n"
    "@@ -1,3 +1,2 @@ import os\n"
    " a\n"
    "-b\n"
    " c\n"
    "@@ -10,2 +10,3 @@\n"
    " x\n"
    "+y\n"
    " z\n"
)


class TestPatchCommand:
    """The patch command reads a diff and a selection and emits a patch."""

    def test_patch_to_stdout(self, runner, diff_file):
        result = run_cli(
            runner, ["-s", "patch", str(diff_file), "-i", "2", "-x", "3", "-i", "7"]
        )

        assert result.exit_code == 0
        assert result.stdout == EXPECTED_BOTH_HUNKS

    def test_patch_to_output_file(self, runner, diff_file, tmp_path):
        output = tmp_path / "out.patch"

        result = run_cli(
            runner,
            ["-s", "patch", str(diff_file), "-i", "2", "-x", "3", "-i", "7", "-o", str(output)],
        )

        assert result.exit_code == 0
        assert output.read_text() == EXPECTED_BOTH_HUNKS

    def test_crlf_lines_survive_file_round_trip(self, runner, tmp_path):
        crlf_diff = b"--- a/f.txt\n+++ b/f.txt\n@@ -1,2 +1,2 @@\n a\r\n-b\r\n+c\r\n"
        diff_path = tmp_path / "crlf.diff"
        diff_path.write_bytes(crlf_diff)
        output = tmp_path / "out.patch"

        result = run_cli(
            runner,
            ["-s", "patch", str(diff_path), "-i", "2", "-i", "3", "-o", str(output)],
        )

        assert result.exit_code == 0
        assert output.read_bytes() == crlf_diff

    def test_patch_with_selection_file(self, runner, diff_file, tmp_path):
        selection = tmp_path / "sel.json"
        selection.write_text(json.dumps({"2": True, "3": False, "7": True}))

        result = run_cli(
            runner, ["-s", "patch", str(diff_file), "--selection", str(selection)]
        )

        assert result.exit_code == 0
        assert result.stdout == EXPECTED_BOTH_HUNKS

    def test_local_index_scheme(self, runner, diff_file):
        # local index 2 is "-b" in the first hunk and "+y" in the second
        result = run_cli(
            runner,
            ["-s", "--index-scheme", "local", "patch", str(diff_file), "-i", "2"],
        )

        assert result.exit_code == 0
        assert result.stdout == EXPECTED_BOTH_HUNKS

    def test_status_override(self, runner, diff_file):
        result = run_cli(
            runner, ["-s", "patch", str(diff_file), "--status", "deleted", "-i", "2"]
        )

        assert result.exit_code == 0
        assert "@@ -1,3 +1,2 @@ import os\n a\n-b\n B\n c\n" in result.stdout

    def test_nothing_selected_is_not_an_error(self, runner, diff_file):
        result = run_cli(
            runner, ["-s", "patch", str(diff_file), "-x", "2", "-x", "3", "-x", "7"]
        )

        assert result.exit_code == 0
        assert result.stdout == ""

    def test_fail_on_empty(self, runner, diff_file):
        result = run_cli(
            runner,
            ["-s", "--fail-on-empty", "patch", str(diff_file), "-x", "2", "-x", "3", "-x", "7"],
        )

        assert result.exit_code == 2

    def test_fail_on_empty_from_local_config(self, runner, diff_file, tmp_path):
        (tmp_path / "linestageconfig.toml").write_text("fail_on_empty = true\n")

        result = run_cli(
            runner, ["-s", "patch", str(diff_file), "-x", "2", "-x", "3", "-x", "7"]
        )

        assert result.exit_code == 2

    def test_missing_diff_file(self, runner, tmp_path):
        result = run_cli(runner, ["-s", "patch", str(tmp_path / "nope.diff")])

        assert result.exit_code == 1

    def test_conflicting_indices(self, runner, diff_file):
        result = run_cli(runner, ["-s", "patch", str(diff_file), "-i", "2", "-x", "2"])

        assert result.exit_code == 1

    def test_invalid_index_scheme(self, runner, diff_file):
        result = run_cli(
            runner, ["-s", "--index-scheme", "sideways", "patch", str(diff_file)]
        )

        assert result.exit_code == 1

    def test_malformed_diff(self, runner, tmp_path):
        bad = tmp_path / "bad.diff"
        bad.write_text("@@ -1,3 +1,3 @@\n a\n")

        result = run_cli(runner, ["-s", "patch", str(bad)])

        assert result.exit_code == 1


class TestLinesCommand:
    def test_lists_selectable_lines(self, runner, diff_file):
        result = run_cli(runner, ["-s", "lines", str(diff_file)])

        assert result.exit_code == 0
        lines = result.stdout.splitlines()
        assert lines[0] == "modified src/app.py"
        assert "     2     2   -b" in lines
        assert "     3     3   +B" in lines
        assert "     7     2   +y" in lines
        assert not any(line.endswith("   a") for line in lines)


class TestGlobalOptions:
    def test_no_command_prints_help(self, runner):
        result = run_cli(runner, [])

        assert result.exit_code == 0
        assert "patch" in result.stdout

    def test_version(self, runner):
        result = run_cli(runner, ["--version"])

        assert result.exit_code == 0
        assert "linestage version" in result.stdout
