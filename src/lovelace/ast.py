"""
Lovelace Abstract Syntax Tree (AST) Definitions
===============================================

This module defines the AST node types produced by the Lovelace parser
and consumed by the diagram renderer and the C transpiler.

Node Hierarchy
--------------
ASTNode (base)
├── Program - root node: one Main plus the user functions
├── Main - the main block
├── Function - user function definition
├── Parameter - formal function parameter
├── VariableDeclaration - local variable
├── Statements
│   ├── AssignStatement - name := expr;
│   ├── IfStatement - if cond begin ... end
│   ├── WhileStatement - while cond begin ... end
│   ├── PrintStatement - print expr;
│   ├── ReadStatement - read name;
│   ├── ReturnStatement - return [expr];
│   └── CallStatement - name(args);
└── Expressions
    ├── FloatLiteral - numeric constant
    ├── IdentifierExpression - variable reference
    ├── TrueLiteral - true
    ├── FalseLiteral - false
    ├── BinaryExpression - left op right
    └── CallExpression - name(args)

Design Notes
------------
- All nodes are frozen dataclasses; child sequences are tuples, so a
  tree cannot change after the parser builds it
- Each node may carry its source location; locations never take part
  in equality, so hand-built trees compare equal to parsed ones
- The statement and expression variant sets are closed and listed in
  STATEMENT_TYPES and EXPRESSION_TYPES
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from lovelace.errors import SourceLocation


# =============================================================================
# Type Names
# =============================================================================

# Built-in Lovelace types. Type names are kept as plain strings because the
# set is open: unknown names flow through the toolchain unchanged.
FLOAT = "Float"
BOOL = "Bool"
VOID = "Void"


# =============================================================================
# AST Node Base Classes
# =============================================================================

@dataclass(frozen=True)
class ASTNode:
    """
    Base class for all AST nodes.

    Attributes:
        location: Source location where this node appears (optional)
    """
    location: Optional[SourceLocation] = field(
        default=None, compare=False, repr=False, kw_only=True
    )


@dataclass(frozen=True)
class Statement(ASTNode):
    """Base class for all statement nodes."""
    pass


@dataclass(frozen=True)
class Expression(ASTNode):
    """Base class for all expression nodes."""
    pass


# =============================================================================
# Declarations
# =============================================================================

@dataclass(frozen=True)
class Parameter(ASTNode):
    """
    Formal function parameter.

    Attributes:
        var_type: Declared type name (Float, Bool, Void, ...)
        name: Parameter name
    """
    var_type: str
    name: str


@dataclass(frozen=True)
class VariableDeclaration(ASTNode):
    """
    Local variable declaration (in main or in a function).

    Attributes:
        var_type: Declared type name
        name: Variable name
    """
    var_type: str
    name: str


# =============================================================================
# Statement Nodes
# =============================================================================

@dataclass(frozen=True)
class AssignStatement(Statement):
    """
    Assignment: name := value;

    Attributes:
        name: Target variable
        value: Assigned expression
    """
    name: str
    value: Expression


@dataclass(frozen=True)
class IfStatement(Statement):
    """
    Conditional without else branch.

    Attributes:
        condition: The condition expression
        body: Statements executed when the condition holds
    """
    condition: Expression
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class WhileStatement(Statement):
    """
    While loop.

    Attributes:
        condition: Loop condition
        body: Loop body statements
    """
    condition: Expression
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class PrintStatement(Statement):
    """Print the value of an expression."""
    value: Expression


@dataclass(frozen=True)
class ReadStatement(Statement):
    """Read a value from input into the named variable."""
    name: str


@dataclass(frozen=True)
class ReturnStatement(Statement):
    """
    Return from a function.

    Attributes:
        value: Optional return value expression
    """
    value: Optional[Expression] = None


@dataclass(frozen=True)
class CallStatement(Statement):
    """
    Function call used as a statement.

    Attributes:
        name: Called function
        arguments: Argument expressions in source order
    """
    name: str
    arguments: tuple[Expression, ...] = ()


# =============================================================================
# Expression Nodes
# =============================================================================

class BinaryOperator(str, Enum):
    """Binary operators, valued by their source symbol."""
    # Arithmetic
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "/"

    # Logical
    LOGICAL_AND = "&&"
    LOGICAL_OR = "||"

    # Comparison
    EQUAL = "=="
    LESS = "<"
    GREATER = ">"

    def __str__(self) -> str:
        return self.value


# Operators whose top-level application is printed with an integer format
BOOLEAN_OPERATORS = frozenset({
    BinaryOperator.LOGICAL_AND,
    BinaryOperator.LOGICAL_OR,
    BinaryOperator.LESS,
    BinaryOperator.GREATER,
    BinaryOperator.EQUAL,
})


@dataclass(frozen=True)
class FloatLiteral(Expression):
    """Numeric constant. Lovelace has a single numeric type."""
    value: float


@dataclass(frozen=True)
class IdentifierExpression(Expression):
    """Variable reference."""
    name: str


@dataclass(frozen=True)
class TrueLiteral(Expression):
    """The boolean constant true."""
    pass


@dataclass(frozen=True)
class FalseLiteral(Expression):
    """The boolean constant false."""
    pass


@dataclass(frozen=True)
class BinaryExpression(Expression):
    """
    Binary operator application.

    Attributes:
        operator: The operator
        left: Left operand
        right: Right operand
    """
    operator: BinaryOperator
    left: Expression
    right: Expression


@dataclass(frozen=True)
class CallExpression(Expression):
    """
    Function call expression.

    Attributes:
        name: Called function
        arguments: Argument expressions in source order
    """
    name: str
    arguments: tuple[Expression, ...] = ()


# =============================================================================
# Containers
# =============================================================================

@dataclass(frozen=True)
class Main(ASTNode):
    """
    The main block.

    Attributes:
        variables: Local declarations in source order
        statements: Statements in source order
    """
    variables: tuple[VariableDeclaration, ...] = ()
    statements: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Function(ASTNode):
    """
    User function definition.

    Attributes:
        name: Function name
        return_type: Declared return type
        parameters: Formal parameters in order
        variables: Local declarations in order
        body: Statements in order
    """
    name: str
    return_type: str
    parameters: tuple[Parameter, ...] = ()
    variables: tuple[VariableDeclaration, ...] = ()
    body: tuple[Statement, ...] = ()


@dataclass(frozen=True)
class Program(ASTNode):
    """
    Root node of every tree.

    Attributes:
        main: The main block
        functions: User functions in declaration order
    """
    main: Main
    functions: tuple[Function, ...] = ()


# =============================================================================
# Closed Variant Sets
# =============================================================================

STATEMENT_TYPES = (
    AssignStatement,
    IfStatement,
    WhileStatement,
    PrintStatement,
    ReadStatement,
    ReturnStatement,
    CallStatement,
)

EXPRESSION_TYPES = (
    FloatLiteral,
    IdentifierExpression,
    TrueLiteral,
    FalseLiteral,
    BinaryExpression,
    CallExpression,
)
