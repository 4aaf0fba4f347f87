"""
lovlex - Lovelace Token Listing
===============================

Scans a Lovelace source file and prints one line per token with its
category label, stopping at the first lexical error.

Usage Examples
--------------
    $ lovlex prog.lov
    Reserved word: main
    Reserved word: begin
    Identifier: x
    Assignment: :=
    Number: 3
    Semicolon: ;
    ...
"""

from pathlib import Path

import click

from lovelace import __version__
from lovelace.classifier import describe_tokens
from lovelace.cli import setup_logging
from lovelace.cli.errors import handle_cli_exception
from lovelace.compiler import LovelaceCompiler
from lovelace.lexer import Lexer


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
@click.version_option(version=__version__, prog_name="lovlex")
def main(input_file: Path, verbose: bool) -> None:
    """
    List the tokens of a Lovelace source file.

    INPUT_FILE is the Lovelace source file (.lov) to scan.
    """
    setup_logging(verbose)

    try:
        source = LovelaceCompiler().read_source(input_file)
        # Descriptions stream out as the lexer advances, so tokens before
        # a lexical error are still listed
        for line in describe_tokens(Lexer(source, str(input_file)).tokenize()):
            click.echo(line)
    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
