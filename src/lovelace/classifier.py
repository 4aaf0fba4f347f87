"""
Lovelace Token Classifier
=========================

Maps lexical token kinds to descriptive category labels, the way a
lexer listing presents them:

    Reserved word: main
    Identifier: x
    Assignment: :=
    Number: 3
    Semicolon: ;

The lookup is a static table from TokenType to a small closed
TokenCategory enumeration, so it is independent of how the scanner
numbers or names its kinds. Kinds with no entry (EOF, the block
braces) are reported as "Unknown token: <text>" without failing.

The label set is fixed. The parser accepts '{' and '}' as synonyms of
begin/end, but they have no category of their own, so a listing shows
them as unknown tokens:

    Reserved word: main
    Unknown token: {
    Unknown token: }
"""

from enum import Enum
from typing import Iterable, Iterator, Optional

from lovelace.lexer import Token, TokenType


class TokenCategory(Enum):
    """Display categories for tokens, valued by their label."""
    RESERVED_WORD = "Reserved word"
    ASSIGNMENT = "Assignment"
    LOGICAL_OPERATOR = "Logical operator"
    COMPARISON_OPERATOR = "Comparison operator"
    ARITHMETIC_OPERATOR = "Arithmetic operator"
    OPEN_PAREN = "Open parenthesis"
    CLOSE_PAREN = "Close parenthesis"
    SEMICOLON = "Semicolon"
    COMMA = "Comma"
    IDENTIFIER = "Identifier"
    NUMBER = "Number"

    @property
    def label(self) -> str:
        return self.value


CATEGORIES: dict[TokenType, TokenCategory] = {
    # Reserved words
    TokenType.MAIN: TokenCategory.RESERVED_WORD,
    TokenType.BEGIN: TokenCategory.RESERVED_WORD,
    TokenType.END: TokenCategory.RESERVED_WORD,
    TokenType.LET: TokenCategory.RESERVED_WORD,
    TokenType.FLOAT: TokenCategory.RESERVED_WORD,
    TokenType.BOOL: TokenCategory.RESERVED_WORD,
    TokenType.VOID: TokenCategory.RESERVED_WORD,
    TokenType.IF: TokenCategory.RESERVED_WORD,
    TokenType.WHILE: TokenCategory.RESERVED_WORD,
    TokenType.READ: TokenCategory.RESERVED_WORD,
    TokenType.RETURN: TokenCategory.RESERVED_WORD,
    TokenType.PRINT: TokenCategory.RESERVED_WORD,
    TokenType.DEF: TokenCategory.RESERVED_WORD,
    TokenType.TRUE: TokenCategory.RESERVED_WORD,
    TokenType.FALSE: TokenCategory.RESERVED_WORD,

    # Operators
    TokenType.ASSIGN: TokenCategory.ASSIGNMENT,
    TokenType.AND: TokenCategory.LOGICAL_OPERATOR,
    TokenType.OR: TokenCategory.LOGICAL_OPERATOR,
    TokenType.EQ: TokenCategory.COMPARISON_OPERATOR,
    TokenType.LT: TokenCategory.COMPARISON_OPERATOR,
    TokenType.GT: TokenCategory.COMPARISON_OPERATOR,
    TokenType.PLUS: TokenCategory.ARITHMETIC_OPERATOR,
    TokenType.MINUS: TokenCategory.ARITHMETIC_OPERATOR,
    TokenType.MULT: TokenCategory.ARITHMETIC_OPERATOR,
    TokenType.DIV: TokenCategory.ARITHMETIC_OPERATOR,

    # Delimiters
    TokenType.LPAREN: TokenCategory.OPEN_PAREN,
    TokenType.RPAREN: TokenCategory.CLOSE_PAREN,
    TokenType.SEMICOLON: TokenCategory.SEMICOLON,
    TokenType.COMMA: TokenCategory.COMMA,

    # Literals
    TokenType.IDENTIFIER: TokenCategory.IDENTIFIER,
    TokenType.NUMBER: TokenCategory.NUMBER,
}

# Fixed symbols for punctuation and operator kinds
SYMBOLS: dict[TokenType, str] = {
    TokenType.ASSIGN: ":=",
    TokenType.AND: "&&",
    TokenType.OR: "||",
    TokenType.EQ: "==",
    TokenType.LT: "<",
    TokenType.GT: ">",
    TokenType.PLUS: "+",
    TokenType.MINUS: "-",
    TokenType.MULT: "*",
    TokenType.DIV: "/",
    TokenType.LPAREN: "(",
    TokenType.RPAREN: ")",
    TokenType.SEMICOLON: ";",
    TokenType.COMMA: ",",
}


def categorize(token_type: TokenType) -> Optional[TokenCategory]:
    """Return the display category of a token kind, or None if it has none."""
    return CATEGORIES.get(token_type)


def describe_token(token: Token) -> str:
    """
    Describe a token for a lexer listing.

    Operator and punctuation kinds embed their fixed symbol; identifiers,
    numbers and reserved words embed the literal text.

    Examples:
        Arithmetic operator: +
        Identifier: total
        Unknown token: {
    """
    category = categorize(token.type)
    if category is None:
        return f"Unknown token: {token.text}"

    symbol = SYMBOLS.get(token.type, token.text)
    return f"{category.label}: {symbol}"


def describe_tokens(tokens: Iterable[Token]) -> Iterator[str]:
    """Describe each token of a stream in order, stopping at EOF."""
    for token in tokens:
        if token.type == TokenType.EOF:
            return
        yield describe_token(token)
