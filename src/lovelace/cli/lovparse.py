"""
lovparse - Lovelace Syntax Check
================================

Parses a Lovelace source file and reports whether it is syntactically
valid. On failure the error names the line, the column and the tokens
the grammar expected there.

Usage Examples
--------------
    $ lovparse prog.lov
    Parse completed successfully.

    $ lovparse broken.lov
    broken.lov:3:13: error: unexpected token ';'
            print (x;
                    ^
    hint: expected ')'
"""

from pathlib import Path

import click

from lovelace import __version__
from lovelace.cli import setup_logging
from lovelace.cli.errors import handle_cli_exception
from lovelace.compiler import LovelaceCompiler


@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lovparse")
def main(input_file: Path, verbose: bool) -> None:
    """
    Check the syntax of a Lovelace source file.

    INPUT_FILE is the Lovelace source file (.lov) to check.
    """
    setup_logging(verbose)

    try:
        compiler = LovelaceCompiler()
        source = compiler.read_source(input_file)
        compiler.parse_source(source, str(input_file))
        click.echo("Parse completed successfully.")
    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
