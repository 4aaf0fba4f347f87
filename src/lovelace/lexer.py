"""
Lovelace Lexer (Tokenizer)
==========================

This module implements the lexer for the Lovelace language.
It converts source text into a stream of tokens for the parser and
for the token classifier.

Token Categories
----------------
- Reserved words: main, begin, end, let, Float, Bool, Void, if, while,
  read, return, print, def, true, false
- Identifiers: variable and function names
- Numbers: 42, 3.14, 1e10, 2.5E-3
- Operators: := && || == < > + - * /
- Delimiters: ( ) ; , and the block braces { }

Type keywords are also recognized in lowercase (float, bool, void).

Comments
--------
- Single-line: // comment

Example Usage
-------------
>>> from lovelace.lexer import Lexer
>>> lexer = Lexer("main begin print 1; end", "test.lov")
>>> for token in lexer.tokenize():
...     print(token)
Token(MAIN, 'main', 1:1)
Token(BEGIN, 'begin', 1:6)
Token(PRINT, 'print', 1:12)
Token(NUMBER, '1', 1:18)
Token(SEMICOLON, ';', 1:19)
Token(END, 'end', 1:21)
Token(EOF, 1:24)
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator, Optional
import math
import string

from lovelace.errors import LexicalError, SourceLocation


# =============================================================================
# Token Type Enumeration
# =============================================================================

class TokenType(Enum):
    """
    Token types for the Lovelace language.

    Keywords are distinguished from identifiers to simplify parsing.
    """

    # === Structural Tokens ===
    EOF = auto()            # End of file

    # === Identifiers and Literals ===
    IDENTIFIER = auto()     # Variable/function names
    NUMBER = auto()         # Numeric literals

    # === Keywords - Structure ===
    MAIN = auto()           # main
    BEGIN = auto()          # begin
    END = auto()            # end
    LET = auto()            # let
    DEF = auto()            # def

    # === Keywords - Types ===
    FLOAT = auto()          # Float
    BOOL = auto()           # Bool
    VOID = auto()           # Void

    # === Keywords - Statements ===
    IF = auto()             # if
    WHILE = auto()          # while
    READ = auto()           # read
    RETURN = auto()         # return
    PRINT = auto()          # print

    # === Keywords - Literals ===
    TRUE = auto()           # true
    FALSE = auto()          # false

    # === Operators ===
    ASSIGN = auto()         # :=
    AND = auto()            # &&
    OR = auto()             # ||
    EQ = auto()             # ==
    LT = auto()             # <
    GT = auto()             # >
    PLUS = auto()           # +
    MINUS = auto()          # -
    MULT = auto()           # *
    DIV = auto()            # /

    # === Delimiters ===
    LPAREN = auto()         # (
    RPAREN = auto()         # )
    SEMICOLON = auto()      # ;
    COMMA = auto()          # ,
    LBRACE = auto()         # {
    RBRACE = auto()         # }


# =============================================================================
# Keyword Mapping
# =============================================================================

KEYWORDS: dict[str, TokenType] = {
    # Structure
    "main": TokenType.MAIN,
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "let": TokenType.LET,
    "def": TokenType.DEF,

    # Types (both spellings)
    "Float": TokenType.FLOAT,
    "Bool": TokenType.BOOL,
    "Void": TokenType.VOID,
    "float": TokenType.FLOAT,
    "bool": TokenType.BOOL,
    "void": TokenType.VOID,

    # Statements
    "if": TokenType.IF,
    "while": TokenType.WHILE,
    "read": TokenType.READ,
    "return": TokenType.RETURN,
    "print": TokenType.PRINT,

    # Literals
    "true": TokenType.TRUE,
    "false": TokenType.FALSE,
}

TYPE_KEYWORDS = frozenset({TokenType.FLOAT, TokenType.BOOL, TokenType.VOID})

# Single-character operators and delimiters
SINGLE_TOKENS: dict[str, TokenType] = {
    "<": TokenType.LT,
    ">": TokenType.GT,
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.MULT,
    "/": TokenType.DIV,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
    "{": TokenType.LBRACE,
    "}": TokenType.RBRACE,
}


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Lovelace source code.

    The value is always the literal source text of the token (None only
    for EOF), so numbers keep their original spelling for display.

    Attributes:
        type: The TokenType classification
        value: The literal source text
        line: Line number in source (1-indexed)
        column: Column number in source (1-indexed)
        filename: Name of the source file
    """
    type: TokenType
    value: Optional[str]
    line: int
    column: int
    filename: str = "<input>"

    def __repr__(self) -> str:
        """Format token for debugging output."""
        if self.value is not None:
            return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"
        return f"Token({self.type.name}, {self.line}:{self.column})"

    @property
    def text(self) -> str:
        """Literal text, or an empty string for EOF."""
        return self.value if self.value is not None else ""

    @property
    def location(self) -> SourceLocation:
        """Return a SourceLocation for error reporting."""
        return SourceLocation(self.filename, self.line, self.column)

    def is_type_keyword(self) -> bool:
        """Return True if this token is a type keyword."""
        return self.type in TYPE_KEYWORDS


# =============================================================================
# Lexer Implementation
# =============================================================================

class Lexer:
    """
    Tokenizes Lovelace source code.

    Usage:
        lexer = Lexer(source_text, filename)
        tokens = list(lexer.tokenize())

    Attributes:
        source: The source code being tokenized
        filename: Name of the source file (for error reporting)
    """

    # Characters that can start an identifier
    IDENT_START = string.ascii_letters + "_"

    # Characters that can continue an identifier
    IDENT_CHARS = string.ascii_letters + string.digits + "_"

    def __init__(self, source: str, filename: str = "<input>"):
        self.source = source
        self.filename = filename

        # Current position in source
        self._pos = 0
        self._line = 1
        self._column = 1

        # Track line start position for error reporting
        self._line_start_pos = 0

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens from the source code.

        Yields:
            Token objects, always ending with an EOF token

        Raises:
            LexicalError: If the input contains an invalid lexeme
        """
        while True:
            self._skip_whitespace_and_comments()
            if self._at_end():
                break
            yield self._scan_token()

        yield self._make_token(TokenType.EOF, None, self._line, self._column)

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset, or '' past the end."""
        pos = self._pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Consume and return the current character, tracking line and column."""
        if self._at_end():
            return ""

        char = self.source[self._pos]
        self._pos += 1

        if char == "\n":
            self._line += 1
            self._column = 1
            self._line_start_pos = self._pos
        else:
            self._column += 1

        return char

    def _match(self, expected: str) -> bool:
        """Consume next character if it matches expected."""
        if self._peek() == expected:
            self._advance()
            return True
        return False

    # =========================================================================
    # Token Creation
    # =========================================================================

    def _make_token(
        self,
        token_type: TokenType,
        value: Optional[str],
        start_line: int,
        start_column: int,
    ) -> Token:
        return Token(
            type=token_type,
            value=value,
            line=start_line,
            column=start_column,
            filename=self.filename,
        )

    def _error(
        self,
        message: str,
        line: int,
        column: int,
        hint: Optional[str] = None,
    ) -> LexicalError:
        """Create a lexical error with source line context."""
        return LexicalError(
            message,
            SourceLocation(self.filename, line, column),
            hint=hint,
            source_line=self._get_current_line(),
        )

    # =========================================================================
    # Whitespace and Comment Handling
    # =========================================================================

    def _skip_whitespace_and_comments(self) -> None:
        while not self._at_end():
            char = self._peek()

            if char in " \t\n\r\f":
                self._advance()
                continue

            # Single-line comment: //
            if char == "/" and self._peek(1) == "/":
                while not self._at_end() and self._peek() != "\n":
                    self._advance()
                continue

            break

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def _scan_token(self) -> Token:
        start_line = self._line
        start_column = self._column

        char = self._peek()

        if char in self.IDENT_START:
            return self._scan_identifier(start_line, start_column)

        if char in string.digits:
            return self._scan_number(start_line, start_column)

        return self._scan_operator(start_line, start_column)

    def _scan_identifier(self, start_line: int, start_column: int) -> Token:
        """
        Scan an identifier or keyword.

        Identifiers start with a letter or underscore and can contain
        letters, digits, and underscores.
        """
        chars = []
        while self._peek() and self._peek() in self.IDENT_CHARS:
            chars.append(self._advance())

        name = "".join(chars)
        token_type = KEYWORDS.get(name, TokenType.IDENTIFIER)
        return self._make_token(token_type, name, start_line, start_column)

    def _scan_number(self, start_line: int, start_column: int) -> Token:
        """
        Scan a numeric literal.

        Handles:
        - Integer part: 123
        - Optional fraction: 123.45 (a '.' must be followed by a digit)
        - Optional exponent: 1e10, 2.5E-3
        - Values beyond double range (1e400) are rejected
        """
        chars = []
        while self._peek() and self._peek() in string.digits:
            chars.append(self._advance())

        if self._peek() == "." and self._peek(1) and self._peek(1) in string.digits:
            chars.append(self._advance())
            while self._peek() and self._peek() in string.digits:
                chars.append(self._advance())

        if self._peek() and self._peek() in "eE":
            chars.append(self._advance())
            if self._peek() and self._peek() in "+-":
                chars.append(self._advance())
            if not (self._peek() and self._peek() in string.digits):
                raise self._error(
                    f"malformed number '{''.join(chars)}'",
                    start_line,
                    start_column,
                    hint="an exponent needs at least one digit",
                )
            while self._peek() and self._peek() in string.digits:
                chars.append(self._advance())

        text = "".join(chars)
        if math.isinf(float(text)):
            raise self._error(
                f"number '{text}' is out of range",
                start_line,
                start_column,
                hint="numbers must fit a double-precision float (about 1.8e308)",
            )

        return self._make_token(TokenType.NUMBER, text, start_line, start_column)

    def _scan_operator(self, start_line: int, start_column: int) -> Token:
        """Scan an operator or delimiter."""
        char = self._advance()

        if char == ":":
            if self._match("="):
                return self._make_token(TokenType.ASSIGN, ":=", start_line, start_column)
            raise self._error("invalid character ':'", start_line, start_column,
                              hint="assignment is written ':='")

        if char == "&":
            if self._match("&"):
                return self._make_token(TokenType.AND, "&&", start_line, start_column)
            raise self._error("invalid character '&'", start_line, start_column,
                              hint="logical and is written '&&'")

        if char == "|":
            if self._match("|"):
                return self._make_token(TokenType.OR, "||", start_line, start_column)
            raise self._error("invalid character '|'", start_line, start_column,
                              hint="logical or is written '||'")

        if char == "=":
            if self._match("="):
                return self._make_token(TokenType.EQ, "==", start_line, start_column)
            raise self._error("invalid character '='", start_line, start_column,
                              hint="use ':=' for assignment or '==' for comparison")

        if char in SINGLE_TOKENS:
            return self._make_token(SINGLE_TOKENS[char], char, start_line, start_column)

        raise self._error(
            f"invalid character '{char}' (0x{ord(char):02X})",
            start_line,
            start_column,
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    def _get_current_line(self) -> str:
        """Get the current line of source text for error reporting."""
        line_end = self.source.find("\n", self._line_start_pos)
        if line_end == -1:
            line_end = len(self.source)
        return self.source[self._line_start_pos:line_end]


def tokenize(source: str, filename: str = "<input>") -> list[Token]:
    """Tokenize a whole source string, EOF token included."""
    return list(Lexer(source, filename).tokenize())
