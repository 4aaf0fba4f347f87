"""
lovc - Lovelace to C Transpiler
===============================

Translates a Lovelace source file to C. The output file sits next to
the input with its extension replaced by .c, unless -o is given.

Usage Examples
--------------
Basic translation:
    $ lovc prog.lov                  # writes prog.c

With output file:
    $ lovc prog.lov -o out/prog.c

Build and run:
    $ lovc prog.lov && cc prog.c -o prog && ./prog

No file is written when translation fails.
"""

from pathlib import Path
from typing import Optional

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
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output C file (default: input with .c extension)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lovc")
def main(input_file: Path, output: Optional[Path], verbose: bool) -> None:
    """
    Translate a Lovelace program to C.

    INPUT_FILE is the Lovelace source file (.lov) to translate.

    \b
    Type mapping:
        Float -> float
        Bool  -> int
        Void  -> void
    """
    setup_logging(verbose)

    try:
        compiler = LovelaceCompiler()
        if verbose:
            click.echo(f"Translating {input_file}...")

        result = compiler.compile_file(input_file, output)

        if verbose:
            click.echo(f"Tokenized: {result.token_count} tokens")
            click.echo(f"Parsed: {len(result.ast.functions)} function(s)")
        click.echo(f"C code generated in: {result.output_path}")
    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
