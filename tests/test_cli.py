# =============================================================================
# test_cli.py - Command-Line Tool Tests
# =============================================================================
# Tests for lovlex, lovparse, lovdiagram and lovc, run through Click's
# CliRunner. Exit codes: 0 success, 1 lexical/syntax/translation error,
# 2 bad arguments or inaccessible files.
# =============================================================================

from pathlib import Path

import pytest
from click.testing import CliRunner

from lovelace.cli import lovc, lovdiagram, lovlex, lovparse
from lovelace.cli.errors import ExitCode


VALID_SOURCE = "main begin\n    let Float x;\n    x := 3;\n    print x;\nend\n"
BROKEN_SOURCE = "main begin\n    print (x;\nend\n"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def valid_file(tmp_path) -> Path:
    path = tmp_path / "prog.lov"
    path.write_text(VALID_SOURCE)
    return path


@pytest.fixture
def broken_file(tmp_path) -> Path:
    path = tmp_path / "broken.lov"
    path.write_text(BROKEN_SOURCE)
    return path


# =============================================================================
# Common Options
# =============================================================================

class TestCommonOptions:

    @pytest.mark.parametrize("tool", [lovlex, lovparse, lovdiagram, lovc])
    def test_help(self, runner, tool):
        result = runner.invoke(tool.main, ["--help"])
        assert result.exit_code == 0
        assert "INPUT_FILE" in result.output

    @pytest.mark.parametrize("tool", [lovlex, lovparse, lovdiagram, lovc])
    def test_version(self, runner, tool):
        result = runner.invoke(tool.main, ["--version"])
        assert result.exit_code == 0
        assert "1.0.0" in result.output

    @pytest.mark.parametrize("tool", [lovlex, lovparse, lovdiagram, lovc])
    def test_missing_argument(self, runner, tool):
        result = runner.invoke(tool.main, [])
        assert result.exit_code == ExitCode.INVALID_ARGS

    @pytest.mark.parametrize("tool", [lovlex, lovparse, lovdiagram, lovc])
    def test_missing_file(self, runner, tool, tmp_path):
        result = runner.invoke(tool.main, [str(tmp_path / "nope.lov")])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "file not found" in result.output


# =============================================================================
# lovlex
# =============================================================================

class TestLovlex:

    def test_listing(self, runner, valid_file):
        result = runner.invoke(lovlex.main, [str(valid_file)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Reserved word: main",
            "Reserved word: begin",
            "Reserved word: let",
            "Reserved word: Float",
            "Identifier: x",
            "Semicolon: ;",
            "Identifier: x",
            "Assignment: :=",
            "Number: 3",
            "Semicolon: ;",
            "Reserved word: print",
            "Identifier: x",
            "Semicolon: ;",
            "Reserved word: end",
        ]

    def test_lexical_error_after_partial_listing(self, runner, tmp_path):
        path = tmp_path / "bad.lov"
        path.write_text("x := 1 @")
        result = runner.invoke(lovlex.main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert result.output.startswith("Identifier: x\nAssignment: :=\nNumber: 1\n")
        assert "invalid character '@'" in result.output

    def test_braces_listed_as_unknown(self, runner, tmp_path):
        path = tmp_path / "braces.lov"
        path.write_text("main { }")
        result = runner.invoke(lovlex.main, [str(path)])
        assert result.exit_code == 0
        assert result.output.splitlines() == [
            "Reserved word: main",
            "Unknown token: {",
            "Unknown token: }",
        ]


# =============================================================================
# lovparse
# =============================================================================

class TestLovparse:

    def test_success(self, runner, valid_file):
        result = runner.invoke(lovparse.main, [str(valid_file)])
        assert result.exit_code == 0
        assert "Parse completed successfully." in result.output

    def test_syntax_error(self, runner, broken_file):
        result = runner.invoke(lovparse.main, [str(broken_file)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert f"{broken_file}:2:13: error: unexpected token ';'" in result.output
        assert "hint: expected ')'" in result.output
        assert "Parse completed successfully." not in result.output


# =============================================================================
# lovdiagram
# =============================================================================

class TestLovdiagram:

    def test_text_tree(self, runner, valid_file):
        result = runner.invoke(lovdiagram.main, [str(valid_file)])
        assert result.exit_code == 0
        assert "Prog\n└── main: Main\n" in result.output
        assert "        └── value: x" in result.output

    def test_dot(self, runner, valid_file):
        result = runner.invoke(lovdiagram.main, [str(valid_file), "--dot"])
        assert result.exit_code == 0
        assert "digraph AST {" in result.output
        assert 'n0 -> n1 [label="main"];' in result.output

    def test_syntax_error(self, runner, broken_file):
        result = runner.invoke(lovdiagram.main, [str(broken_file), "--dot"])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "digraph" not in result.output


# =============================================================================
# lovc
# =============================================================================

class TestLovc:

    def test_writes_c_file(self, runner, valid_file):
        result = runner.invoke(lovc.main, [str(valid_file)])
        output_path = valid_file.with_suffix(".c")
        assert result.exit_code == 0
        assert f"C code generated in: {output_path}" in result.output
        assert output_path.read_text() == (
            "#include <stdio.h>\n"
            "\n"
            "int main() {\n"
            "    float x;\n"
            "    x = 3.0;\n"
            '    printf("%f\\n", x);\n'
            "    return 0;\n"
            "}\n"
        )

    def test_output_option(self, runner, valid_file, tmp_path):
        target = tmp_path / "custom.c"
        result = runner.invoke(lovc.main, [str(valid_file), "-o", str(target)])
        assert result.exit_code == 0
        assert target.exists()
        assert not valid_file.with_suffix(".c").exists()

    def test_verbose(self, runner, valid_file):
        result = runner.invoke(lovc.main, [str(valid_file), "-v"])
        assert result.exit_code == 0
        assert "Translating" in result.output
        assert "Tokenized: 15 tokens" in result.output
        assert "Parsed: 0 function(s)" in result.output

    def test_syntax_error_writes_nothing(self, runner, broken_file):
        result = runner.invoke(lovc.main, [str(broken_file)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert not broken_file.with_suffix(".c").exists()

    def test_refuses_c_input(self, runner, tmp_path):
        path = tmp_path / "prog.c"
        path.write_text(VALID_SOURCE)
        result = runner.invoke(lovc.main, [str(path)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert path.read_text() == VALID_SOURCE

    def test_refuses_to_overwrite_source(self, runner, valid_file):
        result = runner.invoke(lovc.main, [str(valid_file), "-o", str(valid_file)])
        assert result.exit_code == ExitCode.INVALID_ARGS
        assert "overwrite the source" in result.output
        assert valid_file.read_text() == VALID_SOURCE

    def test_long_chain(self, runner, tmp_path):
        path = tmp_path / "long.lov"
        path.write_text("main begin print " + " + ".join(["a"] * 1500) + "; end\n")
        result = runner.invoke(lovc.main, [str(path)])
        assert result.exit_code == 0
        assert path.with_suffix(".c").exists()

    def test_deep_nesting(self, runner, tmp_path):
        path = tmp_path / "deep.lov"
        path.write_text("main begin print " + "(" * 5000 + "1" + ")" * 5000 + "; end\n")
        result = runner.invoke(lovc.main, [str(path)])
        assert result.exit_code == ExitCode.BUILD_ERROR
        assert "nested too deeply" in result.output
        assert not path.with_suffix(".c").exists()
