"""
C Transpiler for Lovelace
=========================

This module lowers a Lovelace AST to C source by single-pass,
syntax-directed translation: every node maps directly to C text and
no intermediate representation is built.

Output Layout
-------------
    #include <stdio.h>

    float soma(float a, float b);          <- forward declarations

    float soma(float a, float b) {         <- definitions
        return (a + b);
    }

    int main() {                           <- entry point from Main
        float x;
        ...
        return 0;
    }

Type Mapping
------------
| Lovelace | C       |
|----------|---------|
| Float    | float   |
| Bool     | int     |
| Void     | void    |
| other    | as is   |

Translation Rules
-----------------
- Every binary expression is fully parenthesized, (left op right), so
  the result never depends on C operator precedence
- true/false lower to 1/0
- print uses "%d" when the printed expression is true, false, or a
  binary expression whose top-level operator is &&, ||, <, > or ==;
  otherwise "%f". Nested sub-expressions are not inspected.
- read always scans a float ("%f"), whatever the variable's type
- A node type without a translation rule raises UnsupportedNodeError
- Float literals must be finite; inf and nan have no C spelling

Usage
-----
>>> from lovelace.parser import parse_source
>>> from lovelace.transpiler import CTranspiler
>>> program = parse_source("main begin let Float x; x := 3; print x; end")
>>> print(CTranspiler().generate(program))
"""

import logging
import math
from typing import Iterable

from lovelace.ast import (
    AssignStatement,
    BinaryExpression,
    BOOLEAN_OPERATORS,
    CallExpression,
    CallStatement,
    Expression,
    FalseLiteral,
    FloatLiteral,
    Function,
    IdentifierExpression,
    IfStatement,
    Parameter,
    PrintStatement,
    Program,
    ReadStatement,
    ReturnStatement,
    Statement,
    TrueLiteral,
    VariableDeclaration,
    WhileStatement,
    BOOL,
    FLOAT,
    VOID,
)
from lovelace.errors import UnsupportedNodeError

logger = logging.getLogger(__name__)


# Lovelace type name -> C type name
TYPE_MAP: dict[str, str] = {
    FLOAT: "float",
    BOOL: "int",
    VOID: "void",
}

INDENT = "    "

INT_FORMAT = "%d"
FLOAT_FORMAT = "%f"


def map_type(type_name: str) -> str:
    """Map a Lovelace type name to C; unknown names pass through."""
    return TYPE_MAP.get(type_name, type_name)


def is_boolean_expression(expr: Expression) -> bool:
    """
    Syntactic boolean test used to pick the print format.

    Looks at the top-level shape only: (a + (b < c)) is not boolean.
    """
    if isinstance(expr, (TrueLiteral, FalseLiteral)):
        return True
    if isinstance(expr, BinaryExpression):
        return expr.operator in BOOLEAN_OPERATORS
    return False


def format_float(value: float) -> str:
    """
    Default numeric formatting: 3 -> '3.0', 15.5 -> '15.5'.

    Only finite values have a C spelling; the lexer rejects
    out-of-range literals and the transpiler refuses inf or nan in
    hand-built trees.
    """
    return repr(float(value))


class CTranspiler:
    """
    Generates C source from a Lovelace Program.

    The generator keeps only its output buffer as state; generate()
    resets it, so one instance can translate several programs.
    """

    def __init__(self):
        self._output: list[str] = []

    def generate(self, program: Program) -> str:
        """
        Generate C source for a whole program.

        Returns:
            The C translation unit, newline-terminated

        Raises:
            UnsupportedNodeError: If a node has no translation rule
        """
        self._output = []

        self._emit("#include <stdio.h>")
        self._emit()

        # Forward declarations so any function can call any other
        for function in program.functions:
            self._emit(f"{self._signature(function)};")
        if program.functions:
            self._emit()

        for function in program.functions:
            self._generate_function(function)

        # Entry point
        self._emit("int main() {")
        self._generate_declarations(program.main.variables, INDENT)
        self._generate_block(program.main.statements, INDENT)
        self._emit(f"{INDENT}return 0;")
        self._emit("}")

        logger.debug(
            "Generated %d lines of C for %d function(s)",
            len(self._output), len(program.functions),
        )
        return "\n".join(self._output) + "\n"

    # =========================================================================
    # Output Methods
    # =========================================================================

    def _emit(self, line: str = "") -> None:
        self._output.append(line)

    # =========================================================================
    # Functions and Declarations
    # =========================================================================

    def _signature(self, function: Function) -> str:
        params = ", ".join(self._parameter(p) for p in function.parameters)
        return f"{map_type(function.return_type)} {function.name}({params})"

    @staticmethod
    def _parameter(param: Parameter) -> str:
        return f"{map_type(param.var_type)} {param.name}"

    def _generate_function(self, function: Function) -> None:
        self._emit(f"{self._signature(function)} {{")
        self._generate_declarations(function.variables, INDENT)
        self._generate_block(function.body, INDENT)
        self._emit("}")
        self._emit()

    def _generate_declarations(
        self, variables: Iterable[VariableDeclaration], indent: str
    ) -> None:
        for var in variables:
            self._emit(f"{indent}{map_type(var.var_type)} {var.name};")

    # =========================================================================
    # Statements
    # =========================================================================

    def _generate_block(self, statements: Iterable[Statement], indent: str) -> None:
        for stmt in statements:
            self._generate_statement(stmt, indent)

    def _generate_statement(self, stmt: Statement, indent: str) -> None:
        """Generate code for any statement."""
        if isinstance(stmt, AssignStatement):
            self._emit(f"{indent}{stmt.name} = {self.expression(stmt.value)};")
        elif isinstance(stmt, IfStatement):
            self._generate_conditional("if", stmt.condition, stmt.body, indent)
        elif isinstance(stmt, WhileStatement):
            self._generate_conditional("while", stmt.condition, stmt.body, indent)
        elif isinstance(stmt, PrintStatement):
            fmt = INT_FORMAT if is_boolean_expression(stmt.value) else FLOAT_FORMAT
            self._emit(f'{indent}printf("{fmt}\\n", {self.expression(stmt.value)});')
        elif isinstance(stmt, ReadStatement):
            self._emit(f'{indent}scanf("{FLOAT_FORMAT}", &{stmt.name});')
        elif isinstance(stmt, ReturnStatement):
            if stmt.value is None:
                self._emit(f"{indent}return;")
            else:
                self._emit(f"{indent}return {self.expression(stmt.value)};")
        elif isinstance(stmt, CallStatement):
            self._emit(f"{indent}{self._call(stmt.name, stmt.arguments)};")
        else:
            raise UnsupportedNodeError(stmt, "statement")

    def _generate_conditional(
        self,
        keyword: str,
        condition: Expression,
        body: Iterable[Statement],
        indent: str,
    ) -> None:
        self._emit(f"{indent}{keyword} ({self.expression(condition)}) {{")
        self._generate_block(body, indent + INDENT)
        self._emit(f"{indent}}}")

    # =========================================================================
    # Expressions
    # =========================================================================

    def expression(self, expr: Expression) -> str:
        """
        Lower an expression to C text.

        Operands are lowered bottom-up with an explicit work stack, so a
        long operator chain (a deep left spine) does not recurse.
        """
        # Work items: (node, operands_done). Finished operand texts are
        # pushed to results in source order.
        results: list[str] = []
        pending: list[tuple[Expression, bool]] = [(expr, False)]

        while pending:
            node, operands_done = pending.pop()

            if isinstance(node, BinaryExpression):
                if operands_done:
                    right = results.pop()
                    left = results.pop()
                    results.append(f"({left} {node.operator.value} {right})")
                else:
                    pending.append((node, True))
                    pending.append((node.right, False))
                    pending.append((node.left, False))

            elif isinstance(node, CallExpression):
                if operands_done:
                    start = len(results) - len(node.arguments)
                    args = ", ".join(results[start:])
                    del results[start:]
                    results.append(f"{node.name}({args})")
                else:
                    pending.append((node, True))
                    for arg in reversed(node.arguments):
                        pending.append((arg, False))

            else:
                results.append(self._leaf(node))

        return results[0]

    @staticmethod
    def _leaf(expr: Expression) -> str:
        if isinstance(expr, FloatLiteral):
            if not math.isfinite(expr.value):
                raise UnsupportedNodeError(expr, "non-finite literal")
            return format_float(expr.value)
        if isinstance(expr, IdentifierExpression):
            return expr.name
        if isinstance(expr, TrueLiteral):
            return "1"
        if isinstance(expr, FalseLiteral):
            return "0"
        raise UnsupportedNodeError(expr, "expression")

    def _call(self, name: str, arguments: Iterable[Expression]) -> str:
        args = ", ".join(self.expression(arg) for arg in arguments)
        return f"{name}({args})"


def transpile(program: Program) -> str:
    """Translate a Program to C source text."""
    return CTranspiler().generate(program)
