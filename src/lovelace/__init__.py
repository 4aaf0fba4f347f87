"""
Lovelace Toolchain
==================

Tools for Lovelace, a small imperative teaching language with a main
block, user functions, Float/Bool/Void scalars, assignment, if, while,
print, read, return and function calls.

Main Components
---------------
- **lexer**: source text to tokens
- **classifier**: descriptive labels for tokens (lovlex)
- **parser**: tokens to AST, with precise syntax errors (lovparse)
- **diagram**: AST as an indented tree or Graphviz DOT (lovdiagram)
- **transpiler**: AST to C source (lovc)

Pipeline
--------
    Lovelace Source → Lexer → Parser → AST → Diagram | C Transpiler

Quick Start
-----------
>>> from lovelace import parse_source, render_text, transpile
>>> program = parse_source('''
... main begin
...     let Float x;
...     x := 3;
...     print x;
... end
... ''')
>>> print(transpile(program))

Or use the command-line tools:
    $ lovlex prog.lov
    $ lovparse prog.lov
    $ lovdiagram prog.lov --dot | dot -Tpng -o ast.png
    $ lovc prog.lov
"""

__version__ = "1.0.0"

from lovelace.errors import (
    SourceLocation,
    LovelaceError,
    FileAccessError,
    LexicalError,
    LovelaceSyntaxError,
    UnsupportedNodeError,
    NestingDepthError,
)
from lovelace.lexer import Lexer, Token, TokenType, tokenize
from lovelace.classifier import TokenCategory, describe_token, describe_tokens
from lovelace.parser import Parser, parse_source
from lovelace.diagram import build_diagram, render_dot, render_text
from lovelace.transpiler import CTranspiler, transpile
from lovelace.compiler import (
    CompilerOptions,
    CompilerResult,
    DiagramFormat,
    LovelaceCompiler,
    compile_lovelace,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "SourceLocation",
    "LovelaceError",
    "FileAccessError",
    "LexicalError",
    "LovelaceSyntaxError",
    "UnsupportedNodeError",
    "NestingDepthError",
    # Lexer and classifier
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "TokenCategory",
    "describe_token",
    "describe_tokens",
    # Parser
    "Parser",
    "parse_source",
    # Diagram
    "build_diagram",
    "render_text",
    "render_dot",
    # Transpiler
    "CTranspiler",
    "transpile",
    # Driver
    "CompilerOptions",
    "CompilerResult",
    "DiagramFormat",
    "LovelaceCompiler",
    "compile_lovelace",
]
