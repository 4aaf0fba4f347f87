"""
Lovelace Recursive Descent Parser
=================================

This module implements a recursive descent parser for Lovelace.
It takes the token stream from the lexer and builds the AST.

Grammar (EBNF)
--------------
program       ::= main_block function_def* EOF
main_block    ::= 'main' OPEN var_decl* statement* CLOSE
function_def  ::= 'def' type IDENT '(' params? ')' OPEN var_decl* statement* CLOSE
params        ::= type IDENT (',' type IDENT)*
var_decl      ::= 'let'? type IDENT ';'
type          ::= 'Float' | 'Bool' | 'Void'

OPEN ... CLOSE is either 'begin' ... 'end' or '{' ... '}'.

statement     ::= IDENT ':=' 'read' '(' ')' ';'
                | IDENT ':=' expr ';'
                | IDENT '(' args? ')' ';'
                | 'if' expr OPEN statement* CLOSE ';'?
                | 'while' expr OPEN statement* CLOSE ';'?
                | 'print' expr ';'
                | 'read' (IDENT | '(' IDENT ')') ';'
                | 'return' expr? ';'

Expression Precedence (lowest to highest)
-----------------------------------------
1. logical_or      ||
2. logical_and     &&
3. equality        ==
4. relational      < >
5. additive        + -
6. multiplicative  * /
7. primary         NUMBER, true, false, IDENT, IDENT '(' args ')', '(' expr ')'

All binary operators are left-associative. Parentheses only group.

The parser stops at the first error: a LovelaceSyntaxError carries the
offending token's position and the continuations that were expected.

Example Usage
-------------
>>> from lovelace.parser import parse_source
>>> program = parse_source("main begin let Float x; x := 3; print x; end")
>>> program.main.statements[0]
AssignStatement(name='x', value=FloatLiteral(value=3.0))
"""

from typing import Optional

from lovelace.ast import (
    BinaryExpression,
    BinaryOperator,
    CallExpression,
    CallStatement,
    Expression,
    FalseLiteral,
    FloatLiteral,
    Function,
    IdentifierExpression,
    IfStatement,
    Main,
    Parameter,
    PrintStatement,
    Program,
    ReadStatement,
    ReturnStatement,
    Statement,
    TrueLiteral,
    VariableDeclaration,
    WhileStatement,
    AssignStatement,
    BOOL,
    FLOAT,
    VOID,
)
from lovelace.errors import LovelaceSyntaxError
from lovelace.lexer import Lexer, Token, TokenType


# Canonical type name for each type keyword, whatever its spelling
TYPE_NAMES: dict[TokenType, str] = {
    TokenType.FLOAT: FLOAT,
    TokenType.BOOL: BOOL,
    TokenType.VOID: VOID,
}

# Binary operator levels, lowest precedence first
PRECEDENCE_LEVELS: list[dict[TokenType, BinaryOperator]] = [
    {TokenType.OR: BinaryOperator.LOGICAL_OR},
    {TokenType.AND: BinaryOperator.LOGICAL_AND},
    {TokenType.EQ: BinaryOperator.EQUAL},
    {TokenType.LT: BinaryOperator.LESS, TokenType.GT: BinaryOperator.GREATER},
    {TokenType.PLUS: BinaryOperator.ADD, TokenType.MINUS: BinaryOperator.SUBTRACT},
    {TokenType.MULT: BinaryOperator.MULTIPLY, TokenType.DIV: BinaryOperator.DIVIDE},
]

# Operator token -> (precedence level, operator)
BINARY_OPERATORS: dict[TokenType, tuple[int, BinaryOperator]] = {
    token_type: (level, operator)
    for level, operators in enumerate(PRECEDENCE_LEVELS)
    for token_type, operator in operators.items()
}

# Matching closer for each block opener
BLOCK_CLOSERS = {
    TokenType.BEGIN: TokenType.END,
    TokenType.LBRACE: TokenType.RBRACE,
}

# Display text for expected-token descriptions
TOKEN_DISPLAY: dict[TokenType, str] = {
    TokenType.EOF: "end of input",
    TokenType.IDENTIFIER: "identifier",
    TokenType.NUMBER: "number",
    TokenType.MAIN: "'main'",
    TokenType.BEGIN: "'begin'",
    TokenType.END: "'end'",
    TokenType.LET: "'let'",
    TokenType.DEF: "'def'",
    TokenType.FLOAT: "'Float'",
    TokenType.BOOL: "'Bool'",
    TokenType.VOID: "'Void'",
    TokenType.IF: "'if'",
    TokenType.WHILE: "'while'",
    TokenType.READ: "'read'",
    TokenType.RETURN: "'return'",
    TokenType.PRINT: "'print'",
    TokenType.TRUE: "'true'",
    TokenType.FALSE: "'false'",
    TokenType.ASSIGN: "':='",
    TokenType.AND: "'&&'",
    TokenType.OR: "'||'",
    TokenType.EQ: "'=='",
    TokenType.LT: "'<'",
    TokenType.GT: "'>'",
    TokenType.PLUS: "'+'",
    TokenType.MINUS: "'-'",
    TokenType.MULT: "'*'",
    TokenType.DIV: "'/'",
    TokenType.LPAREN: "'('",
    TokenType.RPAREN: "')'",
    TokenType.SEMICOLON: "';'",
    TokenType.COMMA: "','",
    TokenType.LBRACE: "'{'",
    TokenType.RBRACE: "'}'",
}

STATEMENT_STARTS = (
    TokenType.IDENTIFIER,
    TokenType.IF,
    TokenType.WHILE,
    TokenType.PRINT,
    TokenType.READ,
    TokenType.RETURN,
)

EXPRESSION_STARTS = (
    TokenType.NUMBER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.IDENTIFIER,
    TokenType.LPAREN,
)


def _display(token_type: TokenType) -> str:
    return TOKEN_DISPLAY.get(token_type, token_type.name.lower())


class Parser:
    """
    Recursive descent parser for Lovelace.

    Attributes:
        tokens: List of tokens to parse (must end with EOF)
        filename: Source filename for error reporting
    """

    def __init__(
        self,
        tokens: list[Token],
        filename: str = "<input>",
        source_lines: Optional[list[str]] = None,
    ):
        """
        Initialize the parser.

        Args:
            tokens: List of tokens from the lexer
            filename: Source filename for error messages
            source_lines: Original source lines for error context
        """
        self.tokens = tokens
        self.filename = filename
        self.source_lines = source_lines or []
        self._pos = 0

    def parse(self) -> Program:
        """
        Parse the token stream into an AST.

        Returns:
            The Program root node

        Raises:
            LovelaceSyntaxError: At the first token the grammar rejects
        """
        start = self._peek()
        main = self._parse_main()

        functions = []
        while self._check(TokenType.DEF):
            functions.append(self._parse_function())

        if not self._at_end():
            raise self._unexpected("'def'", "end of input")

        return Program(main=main, functions=tuple(functions), location=start.location)

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._peek().type == TokenType.EOF

    def _peek(self, offset: int = 0) -> Token:
        """Look at token at current position + offset."""
        pos = self._pos + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _advance(self) -> Token:
        token = self._peek()
        if not self._at_end():
            self._pos += 1
        return token

    def _check(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _match(self, *types: TokenType) -> Optional[Token]:
        """Consume current token if it matches one of the types."""
        if self._check(*types):
            return self._advance()
        return None

    def _expect(self, token_type: TokenType) -> Token:
        """
        Expect and consume a specific token type.

        Raises:
            LovelaceSyntaxError: If the current token has another type
        """
        if self._check(token_type):
            return self._advance()
        raise self._unexpected(_display(token_type))

    def _unexpected(self, *expected: str) -> LovelaceSyntaxError:
        """Build a syntax error at the current token."""
        token = self._peek()
        if token.type == TokenType.EOF:
            found = "end of input"
        else:
            found = f"token '{token.value}'"
        return LovelaceSyntaxError(
            found,
            expected,
            token.location,
            self._get_source_line(token.line),
        )

    def _get_source_line(self, line: int) -> Optional[str]:
        if 0 < line <= len(self.source_lines):
            return self.source_lines[line - 1]
        return None

    # =========================================================================
    # Blocks and Declarations
    # =========================================================================

    def _open_block(self) -> TokenType:
        """Consume a block opener and return the closer that must pair with it."""
        token = self._match(TokenType.BEGIN, TokenType.LBRACE)
        if token is None:
            raise self._unexpected("'begin'", "'{'")
        return BLOCK_CLOSERS[token.type]

    def _parse_main(self) -> Main:
        start = self._expect(TokenType.MAIN)
        closer = self._open_block()
        variables = self._parse_variable_declarations()
        statements = self._parse_statements(closer)
        self._expect(closer)
        return Main(
            variables=variables,
            statements=statements,
            location=start.location,
        )

    def _parse_function(self) -> Function:
        start = self._expect(TokenType.DEF)
        return_type = self._parse_type()
        name = self._expect(TokenType.IDENTIFIER).value

        self._expect(TokenType.LPAREN)
        parameters = []
        if not self._check(TokenType.RPAREN):
            parameters.append(self._parse_parameter())
            while self._match(TokenType.COMMA):
                parameters.append(self._parse_parameter())
        if not self._check(TokenType.RPAREN):
            raise self._unexpected("','", "')'")
        self._advance()

        closer = self._open_block()
        variables = self._parse_variable_declarations()
        body = self._parse_statements(closer)
        self._expect(closer)

        return Function(
            name=name,
            return_type=return_type,
            parameters=tuple(parameters),
            variables=variables,
            body=body,
            location=start.location,
        )

    def _parse_type(self) -> str:
        token = self._peek()
        if not token.is_type_keyword():
            raise self._unexpected("'Float'", "'Bool'", "'Void'")
        self._advance()
        return TYPE_NAMES[token.type]

    def _parse_parameter(self) -> Parameter:
        start = self._peek()
        var_type = self._parse_type()
        name = self._expect(TokenType.IDENTIFIER).value
        return Parameter(var_type=var_type, name=name, location=start.location)

    def _parse_variable_declarations(self) -> tuple[VariableDeclaration, ...]:
        """Parse the declarations that open a block: ('let'? type IDENT ';')*."""
        declarations = []
        while self._check(TokenType.LET) or self._peek().is_type_keyword():
            start = self._peek()
            self._match(TokenType.LET)
            var_type = self._parse_type()
            name = self._expect(TokenType.IDENTIFIER).value
            self._expect(TokenType.SEMICOLON)
            declarations.append(
                VariableDeclaration(var_type=var_type, name=name, location=start.location)
            )
        return tuple(declarations)

    # =========================================================================
    # Statements
    # =========================================================================

    def _parse_statements(self, closer: TokenType) -> tuple[Statement, ...]:
        """Parse statements up to (not including) the block closer."""
        statements = []
        while not self._check(closer):
            if not self._check(*STATEMENT_STARTS):
                raise self._unexpected(
                    *(_display(t) for t in STATEMENT_STARTS), _display(closer)
                )
            statements.append(self._parse_statement())
        return tuple(statements)

    def _parse_statement(self) -> Statement:
        token = self._peek()

        if token.type == TokenType.IDENTIFIER:
            return self._parse_identifier_statement()
        if token.type in (TokenType.IF, TokenType.WHILE):
            return self._parse_conditional_block()
        if token.type == TokenType.PRINT:
            self._advance()
            value = self._parse_expression()
            self._expect(TokenType.SEMICOLON)
            return PrintStatement(value=value, location=token.location)
        if token.type == TokenType.READ:
            return self._parse_read()
        if token.type == TokenType.RETURN:
            self._advance()
            value = None
            if not self._check(TokenType.SEMICOLON):
                value = self._parse_expression()
            self._expect(TokenType.SEMICOLON)
            return ReturnStatement(value=value, location=token.location)

        raise self._unexpected(*(_display(t) for t in STATEMENT_STARTS))

    def _parse_identifier_statement(self) -> Statement:
        """Assignment, read-assignment or call statement."""
        name_token = self._advance()
        name = name_token.value

        if self._match(TokenType.LPAREN):
            arguments = self._parse_arguments()
            self._expect(TokenType.SEMICOLON)
            return CallStatement(name=name, arguments=arguments, location=name_token.location)

        if not self._match(TokenType.ASSIGN):
            raise self._unexpected("':='", "'('")

        # name := read();
        if self._match(TokenType.READ):
            self._expect(TokenType.LPAREN)
            self._expect(TokenType.RPAREN)
            self._expect(TokenType.SEMICOLON)
            return ReadStatement(name=name, location=name_token.location)

        value = self._parse_expression()
        self._expect(TokenType.SEMICOLON)
        return AssignStatement(name=name, value=value, location=name_token.location)

    def _parse_conditional_block(self) -> Statement:
        """if/while: keyword, condition, block, optional trailing ';'."""
        keyword = self._advance()
        condition = self._parse_expression()
        closer = self._open_block()
        body = self._parse_statements(closer)
        self._expect(closer)
        self._match(TokenType.SEMICOLON)

        if keyword.type == TokenType.IF:
            return IfStatement(condition=condition, body=body, location=keyword.location)
        return WhileStatement(condition=condition, body=body, location=keyword.location)

    def _parse_read(self) -> ReadStatement:
        keyword = self._advance()
        if self._match(TokenType.LPAREN):
            name = self._expect(TokenType.IDENTIFIER).value
            self._expect(TokenType.RPAREN)
        else:
            if not self._check(TokenType.IDENTIFIER):
                raise self._unexpected("identifier", "'('")
            name = self._advance().value
        self._expect(TokenType.SEMICOLON)
        return ReadStatement(name=name, location=keyword.location)

    # =========================================================================
    # Expressions
    # =========================================================================

    def _parse_expression(self, min_level: int = 0) -> Expression:
        """
        Precedence climbing over BINARY_OPERATORS, left-associative.

        Operators at min_level or above are folded into the left operand
        in a loop; only the right operand of a tighter-binding operator
        recurses. A chain like a + b + c therefore stays flat, and each
        level of parentheses costs a constant number of frames.
        """
        left = self._parse_primary()
        while True:
            entry = BINARY_OPERATORS.get(self._peek().type)
            if entry is None or entry[0] < min_level:
                return left
            level, operator = entry
            op_token = self._advance()
            right = self._parse_expression(level + 1)
            left = BinaryExpression(
                operator=operator,
                left=left,
                right=right,
                location=op_token.location,
            )

    def _parse_primary(self) -> Expression:
        token = self._peek()

        if token.type == TokenType.NUMBER:
            self._advance()
            return FloatLiteral(value=float(token.value), location=token.location)

        if token.type == TokenType.TRUE:
            self._advance()
            return TrueLiteral(location=token.location)

        if token.type == TokenType.FALSE:
            self._advance()
            return FalseLiteral(location=token.location)

        if token.type == TokenType.IDENTIFIER:
            self._advance()
            if self._match(TokenType.LPAREN):
                arguments = self._parse_arguments()
                return CallExpression(
                    name=token.value, arguments=arguments, location=token.location
                )
            return IdentifierExpression(name=token.value, location=token.location)

        if token.type == TokenType.LPAREN:
            self._advance()
            expr = self._parse_expression()
            self._expect(TokenType.RPAREN)
            return expr

        raise self._unexpected(*(_display(t) for t in EXPRESSION_STARTS))

    def _parse_arguments(self) -> tuple[Expression, ...]:
        """Parse call arguments after '(' up to and including ')'."""
        arguments = []
        if not self._match(TokenType.RPAREN):
            arguments.append(self._parse_expression())
            while self._match(TokenType.COMMA):
                arguments.append(self._parse_expression())
            if not self._match(TokenType.RPAREN):
                raise self._unexpected("','", "')'")
        return tuple(arguments)


# =============================================================================
# Convenience Functions
# =============================================================================

def parse_source(source: str, filename: str = "<input>") -> Program:
    """
    Lex and parse Lovelace source text.

    Raises:
        LexicalError: If the scanner rejects the text
        LovelaceSyntaxError: If the parser rejects the tokens
    """
    tokens = list(Lexer(source, filename).tokenize())
    return Parser(tokens, filename, source.splitlines()).parse()
