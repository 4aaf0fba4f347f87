"""
Lovelace Compiler Driver
========================

Orchestrates the toolchain stages for the command-line tools and for
programmatic use:

    Source → Lex → Parse → AST → (Diagram | C Transpiler)

Usage
-----
Command line:
    $ lovc prog.lov            # writes prog.c

Programmatic:
    >>> from lovelace.compiler import LovelaceCompiler
    >>> result = LovelaceCompiler().compile_source("main begin print 1; end")
    >>> print(result.c_source)

Error Handling
--------------
Every stage stops at its first error and raises a LovelaceError
subclass; nothing is retried. compile_file() writes the output file
only after the whole translation succeeded, so a failing run leaves no
artifact behind.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union

from lovelace.ast import Program
from lovelace.diagram import render
from lovelace.errors import FileAccessError, NestingDepthError
from lovelace.lexer import Lexer, Token
from lovelace.parser import Parser
from lovelace.transpiler import CTranspiler

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@contextmanager
def nesting_guard(filename: str) -> Iterator[None]:
    """Report interpreter recursion exhaustion as a NestingDepthError."""
    try:
        yield
    except RecursionError:
        raise NestingDepthError(filename) from None


class DiagramFormat(Enum):
    """Output forms of the diagram renderer."""
    TEXT = "text"
    DOT = "dot"


@dataclass
class CompilerOptions:
    """
    Compiler configuration options.

    Attributes:
        output_suffix: Extension that replaces the source extension to
            form the generated file's path
        encoding: Text encoding for source and output files
    """
    output_suffix: str = ".c"
    encoding: str = "utf-8"


@dataclass
class CompilerResult:
    """
    Result of a compilation.

    Attributes:
        filename: Source filename
        c_source: Generated C translation unit
        ast: The parsed program
        token_count: Number of tokens lexed (EOF included)
        output_path: Where the C file was written, if it was
    """
    filename: str = ""
    c_source: str = ""
    ast: Optional[Program] = None
    token_count: int = 0
    output_path: Optional[Path] = None


class LovelaceCompiler:
    """
    Front-to-back driver for Lovelace sources.

    Example:
        compiler = LovelaceCompiler()
        result = compiler.compile_file("prog.lov")
        print(result.output_path)

    Attributes:
        options: Compiler configuration options
    """

    def __init__(self, options: Optional[CompilerOptions] = None):
        self.options = options or CompilerOptions()

    # =========================================================================
    # File Access
    # =========================================================================

    def read_source(self, filepath: PathLike) -> str:
        """
        Read a source file.

        Raises:
            FileAccessError: If the file is missing or unreadable
        """
        path = Path(filepath)
        try:
            return path.read_text(encoding=self.options.encoding)
        except FileNotFoundError:
            raise FileAccessError(path, "file not found") from None
        except IsADirectoryError:
            raise FileAccessError(path, "is a directory") from None
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, str(e)) from e

    def output_path_for(self, filepath: PathLike) -> Path:
        """
        Derive the generated file's path by replacing the source extension.

        Raises:
            FileAccessError: If the derived path is the source itself
        """
        path = Path(filepath)
        output = path.with_suffix(self.options.output_suffix)
        if output == path:
            raise FileAccessError(
                path, f"source already has the output extension '{self.options.output_suffix}'"
            )
        return output

    # =========================================================================
    # Pipeline Stages
    # =========================================================================

    def tokenize_source(self, source: str, filename: str = "<input>") -> list[Token]:
        """Lex source text into tokens, EOF included."""
        tokens = list(Lexer(source, filename).tokenize())
        logger.debug("%s: %d tokens", filename, len(tokens))
        return tokens

    def parse_source(self, source: str, filename: str = "<input>") -> Program:
        """Lex and parse source text into a Program."""
        tokens = self.tokenize_source(source, filename)
        with nesting_guard(filename):
            program = Parser(tokens, filename, source.splitlines()).parse()
        logger.debug("%s: parsed main and %d function(s)", filename, len(program.functions))
        return program

    def render_diagram(
        self,
        source: str,
        filename: str = "<input>",
        diagram_format: DiagramFormat = DiagramFormat.TEXT,
    ) -> str:
        """
        Parse source text and render its AST diagram.

        Raises:
            LexicalError, LovelaceSyntaxError, NestingDepthError
        """
        program = self.parse_source(source, filename)
        with nesting_guard(filename):
            return render(program, dot=diagram_format is DiagramFormat.DOT)

    def compile_source(self, source: str, filename: str = "<input>") -> CompilerResult:
        """
        Translate Lovelace source text to C.

        Raises:
            LexicalError, LovelaceSyntaxError, UnsupportedNodeError,
            NestingDepthError
        """
        tokens = self.tokenize_source(source, filename)
        with nesting_guard(filename):
            program = Parser(tokens, filename, source.splitlines()).parse()
            c_source = CTranspiler().generate(program)
        return CompilerResult(
            filename=filename,
            c_source=c_source,
            ast=program,
            token_count=len(tokens),
        )

    def compile_file(
        self,
        filepath: PathLike,
        output_path: Optional[PathLike] = None,
    ) -> CompilerResult:
        """
        Translate a source file and write the C file next to it.

        Args:
            filepath: Lovelace source file
            output_path: Override for the derived output path

        Raises:
            FileAccessError: If the source cannot be read, the output cannot
                be written, or the output path is the source itself
            LexicalError, LovelaceSyntaxError, UnsupportedNodeError,
            NestingDepthError
        """
        path = Path(filepath)
        if output_path:
            target = Path(output_path)
            if target.resolve() == path.resolve():
                raise FileAccessError(target, "output would overwrite the source file")
        else:
            target = self.output_path_for(path)

        source = self.read_source(path)
        result = self.compile_source(source, str(path))

        try:
            target.write_text(result.c_source, encoding=self.options.encoding)
        except OSError as e:
            raise FileAccessError(target, str(e)) from e

        logger.info("Wrote %s", target)
        result.output_path = target
        return result


# =============================================================================
# Convenience Functions
# =============================================================================

def compile_lovelace(source: str, filename: str = "<input>") -> str:
    """Translate Lovelace source text to C source text."""
    return LovelaceCompiler().compile_source(source, filename).c_source
