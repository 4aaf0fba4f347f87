"""
lovdiagram - Lovelace AST Diagram
=================================

Parses a Lovelace source file and prints its syntax tree, either as an
indented tree (default) or as a Graphviz DOT digraph.

Usage Examples
--------------
Text tree:
    $ lovdiagram prog.lov

Rendered graph:
    $ lovdiagram prog.lov --dot > ast.dot
    $ dot -Tpng ast.dot -o ast.png

The diagram goes to stdout; the parse notice goes to stderr so that
piping the DOT output stays clean.
"""

from pathlib import Path

import click

from lovelace import __version__
from lovelace.cli import setup_logging
from lovelace.cli.errors import handle_cli_exception
from lovelace.compiler import DiagramFormat, LovelaceCompiler


@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "--dot",
    is_flag=True,
    help="Emit Graphviz DOT instead of a text tree",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="lovdiagram")
def main(input_file: Path, dot: bool, verbose: bool) -> None:
    """
    Print the syntax tree of a Lovelace source file.

    INPUT_FILE is the Lovelace source file (.lov) to draw.
    """
    setup_logging(verbose)
    diagram_format = DiagramFormat.DOT if dot else DiagramFormat.TEXT

    try:
        compiler = LovelaceCompiler()
        source = compiler.read_source(input_file)
        diagram = compiler.render_diagram(source, str(input_file), diagram_format)
        click.echo("Parse completed successfully.", err=True)
        click.echo(diagram)
    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
