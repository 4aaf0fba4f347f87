# =============================================================================
# test_parser.py - Parser Unit Tests
# =============================================================================
# Tests for the Lovelace recursive descent parser.
#
# Test coverage includes:
#   - Program structure: main block, function definitions, both block styles
#   - Declarations with and without 'let', lowercase type names
#   - Every statement form
#   - Expression precedence and associativity
#   - Syntax error positions and expected-token descriptions
# =============================================================================

import pytest

from lovelace.ast import (
    AssignStatement,
    BinaryExpression,
    BinaryOperator,
    CallExpression,
    CallStatement,
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
    TrueLiteral,
    VariableDeclaration,
    WhileStatement,
)
from lovelace.errors import LexicalError, LovelaceSyntaxError
from lovelace.parser import parse_source


# =============================================================================
# Helper Functions
# =============================================================================

def parse(source: str) -> Program:
    return parse_source(source, "test.lov")


def parse_main(body: str) -> Main:
    """Parse statements wrapped in a main block."""
    return parse(f"main begin\n{body}\nend").main


def parse_expr(text: str):
    """Parse a single expression through a print statement."""
    stmt = parse_main(f"print {text};").statements[0]
    return stmt.value


def var(name: str) -> IdentifierExpression:
    return IdentifierExpression(name)


def num(value: float) -> FloatLiteral:
    return FloatLiteral(value)


# =============================================================================
# Program Structure
# =============================================================================

class TestProgramStructure:

    def test_empty_main(self):
        program = parse("main begin end")
        assert program == Program(main=Main())

    def test_brace_blocks(self):
        assert parse("main { }") == parse("main begin end")

    def test_mixed_block_styles(self):
        program = parse(
            "main { if true begin print 1; end }\n"
            "def Void f() begin return; end"
        )
        assert isinstance(program.main.statements[0], IfStatement)
        assert program.functions[0].name == "f"

    def test_function_definition(self):
        program = parse(
            "main begin end\n"
            "def Bool isPos(Float n) begin\n"
            "    return n > 0;\n"
            "end"
        )
        assert program.functions == (
            Function(
                name="isPos",
                return_type="Bool",
                parameters=(Parameter("Float", "n"),),
                body=(
                    ReturnStatement(
                        BinaryExpression(BinaryOperator.GREATER, var("n"), num(0.0))
                    ),
                ),
            ),
        )

    def test_functions_keep_declaration_order(self):
        program = parse(
            "main begin end\n"
            "def Float a() begin return 1; end\n"
            "def Float b() begin return 2; end\n"
            "def Float c() begin return 3; end"
        )
        assert [f.name for f in program.functions] == ["a", "b", "c"]

    def test_multiple_parameters(self):
        program = parse("main begin end def Float soma(Float a, Bool b) begin return a; end")
        assert program.functions[0].parameters == (
            Parameter("Float", "a"),
            Parameter("Bool", "b"),
        )

    def test_function_locals(self):
        program = parse(
            "main begin end\n"
            "def Void f() begin\n"
            "    let Float t;\n"
            "    t := 1;\n"
            "end"
        )
        function = program.functions[0]
        assert function.variables == (VariableDeclaration("Float", "t"),)
        assert function.body == (AssignStatement("t", num(1.0)),)

    def test_locations(self):
        program = parse("main begin\n  x := 1;\nend")
        stmt = program.main.statements[0]
        assert str(stmt.location) == "test.lov:2:3"
        assert program.location.line == 1

    def test_comments_ignored(self):
        program = parse("// header\nmain begin // open\n  print 1; // out\nend\n")
        assert program.main.statements == (PrintStatement(num(1.0)),)


# =============================================================================
# Declarations
# =============================================================================

class TestDeclarations:

    def test_let_declarations(self):
        main = parse_main("let Float x;\nlet Bool ok;\nlet Void v;")
        assert main.variables == (
            VariableDeclaration("Float", "x"),
            VariableDeclaration("Bool", "ok"),
            VariableDeclaration("Void", "v"),
        )

    def test_let_is_optional(self):
        assert parse_main("Float x;").variables == (VariableDeclaration("Float", "x"),)

    def test_lowercase_types_normalized(self):
        main = parse_main("let float x; bool y;")
        assert [v.var_type for v in main.variables] == ["Float", "Bool"]

    def test_lowercase_function_types(self):
        program = parse("main begin end def void f(float a) begin end")
        function = program.functions[0]
        assert function.return_type == "Void"
        assert function.parameters == (Parameter("Float", "a"),)

    def test_declarations_precede_statements(self):
        with pytest.raises(LovelaceSyntaxError):
            parse_main("x := 1;\nlet Float y;")


# =============================================================================
# Statements
# =============================================================================

class TestStatements:

    def test_assignment(self):
        assert parse_main("x := 3;").statements == (AssignStatement("x", num(3.0)),)

    def test_read_assignment(self):
        assert parse_main("x := read();").statements == (ReadStatement("x"),)

    @pytest.mark.parametrize("source", ["read x;", "read(x);"])
    def test_read_forms(self, source):
        assert parse_main(source).statements == (ReadStatement("x"),)

    def test_print(self):
        assert parse_main("print x;").statements == (PrintStatement(var("x")),)

    def test_print_parenthesized(self):
        assert parse_main("print(x);").statements == (PrintStatement(var("x")),)

    def test_if(self):
        main = parse_main("if x < 10 begin print x; end;")
        assert main.statements == (
            IfStatement(
                BinaryExpression(BinaryOperator.LESS, var("x"), num(10.0)),
                (PrintStatement(var("x")),),
            ),
        )

    def test_if_semicolon_optional(self):
        assert parse_main("if true begin end") == parse_main("if true begin end;")

    def test_while(self):
        main = parse_main("while c < 3 begin c := c + 1; end")
        stmt = main.statements[0]
        assert isinstance(stmt, WhileStatement)
        assert stmt.body == (
            AssignStatement("c", BinaryExpression(BinaryOperator.ADD, var("c"), num(1.0))),
        )

    def test_nested_blocks(self):
        main = parse_main("while true begin if false { print 1; } end")
        inner = main.statements[0].body[0]
        assert isinstance(inner, IfStatement)
        assert inner.body == (PrintStatement(num(1.0)),)

    def test_empty_body(self):
        assert parse_main("if true begin end").statements[0].body == ()

    def test_return_forms(self):
        main = parse_main("return;\nreturn x;")
        assert main.statements == (ReturnStatement(), ReturnStatement(var("x")))

    def test_call_statement(self):
        main = parse_main("f(1, x);\ng();")
        assert main.statements == (
            CallStatement("f", (num(1.0), var("x"))),
            CallStatement("g"),
        )


# =============================================================================
# Expressions
# =============================================================================

class TestExpressions:

    def test_literals(self):
        assert parse_expr("15.5") == num(15.5)
        assert parse_expr("true") == TrueLiteral()
        assert parse_expr("false") == FalseLiteral()

    def test_multiplication_binds_tighter(self):
        assert parse_expr("a + b * c") == BinaryExpression(
            BinaryOperator.ADD,
            var("a"),
            BinaryExpression(BinaryOperator.MULTIPLY, var("b"), var("c")),
        )

    def test_left_associative(self):
        assert parse_expr("a - b - c") == BinaryExpression(
            BinaryOperator.SUBTRACT,
            BinaryExpression(BinaryOperator.SUBTRACT, var("a"), var("b")),
            var("c"),
        )

    def test_parentheses_group(self):
        assert parse_expr("(a + b) * c") == BinaryExpression(
            BinaryOperator.MULTIPLY,
            BinaryExpression(BinaryOperator.ADD, var("a"), var("b")),
            var("c"),
        )

    def test_logical_precedence(self):
        """|| binds loosest, then &&, then ==, then < >."""
        assert parse_expr("a || b && c == d < e") == BinaryExpression(
            BinaryOperator.LOGICAL_OR,
            var("a"),
            BinaryExpression(
                BinaryOperator.LOGICAL_AND,
                var("b"),
                BinaryExpression(
                    BinaryOperator.EQUAL,
                    var("c"),
                    BinaryExpression(BinaryOperator.LESS, var("d"), var("e")),
                ),
            ),
        )

    def test_comparison_over_arithmetic(self):
        expr = parse_expr("a + 1 > b * 2")
        assert expr.operator is BinaryOperator.GREATER
        assert expr.left.operator is BinaryOperator.ADD
        assert expr.right.operator is BinaryOperator.MULTIPLY

    def test_call_expression(self):
        assert parse_expr("soma(a, dobro(b))") == CallExpression(
            "soma", (var("a"), CallExpression("dobro", (var("b"),)))
        )

    def test_call_without_arguments(self):
        assert parse_expr("f()") == CallExpression("f")


# =============================================================================
# Error Conditions
# =============================================================================

class TestSyntaxErrors:

    def test_unclosed_parenthesis(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("main begin\n  print (x;\nend")
        error = exc_info.value
        assert (error.line, error.column) == (2, 11)
        assert error.found == "token ';'"
        assert error.expected == ("')'",)
        message = str(error)
        assert message.startswith("test.lov:2:11: error: unexpected token ';'")
        assert "    print (x;" in message
        assert "hint: expected ')'" in message

    def test_missing_semicolon(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("main begin\n  x := 1\nend")
        assert exc_info.value.line == 3
        assert exc_info.value.expected == ("';'",)

    def test_unexpected_end_of_input(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("main begin print 1;")
        assert exc_info.value.found == "end of input"
        assert "'end'" in exc_info.value.expected

    def test_missing_main(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("def Float f() begin return 1; end")
        assert exc_info.value.expected == ("'main'",)

    def test_trailing_tokens(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("main begin end print 1;")
        assert exc_info.value.expected == ("'def'", "end of input")
        assert "expected one of: 'def', end of input" in str(exc_info.value)

    def test_mismatched_block_closer(self):
        with pytest.raises(LovelaceSyntaxError):
            parse("main begin }")

    def test_missing_function_type(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse("main begin end def f() begin end")
        assert exc_info.value.expected == ("'Float'", "'Bool'", "'Void'")

    def test_bad_expression_start(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse_main("x := * 2;")
        assert exc_info.value.found == "token '*'"
        assert "number" in exc_info.value.expected

    def test_assignment_needs_walrus(self):
        with pytest.raises(LovelaceSyntaxError) as exc_info:
            parse_main("x 3;")
        assert exc_info.value.expected == ("':='", "'('")

    def test_lexical_errors_propagate(self):
        with pytest.raises(LexicalError):
            parse("main begin x := 1 # 2; end")


# =============================================================================
# Deep and Long Input
# =============================================================================

class TestDeepInput:

    def test_long_operator_chain_is_left_associative(self):
        expr = parse_expr(" + ".join(["a"] * 1500))
        depth = 0
        while isinstance(expr, BinaryExpression):
            assert expr.operator is BinaryOperator.ADD
            assert expr.right == var("a")
            expr = expr.left
            depth += 1
        assert depth == 1499
        assert expr == var("a")

    def test_long_mixed_chain(self):
        expr = parse_expr(" + ".join(["a * b"] * 500))
        assert expr.operator is BinaryOperator.ADD
        assert expr.right == BinaryExpression(BinaryOperator.MULTIPLY, var("a"), var("b"))

    def test_nested_parentheses(self):
        assert parse_expr("(" * 150 + "1" + ")" * 150) == num(1.0)

    def test_nested_parentheses_in_operands(self):
        expr = parse_expr("(" * 100 + "a + b" + ")" * 100 + " * c")
        assert expr == BinaryExpression(
            BinaryOperator.MULTIPLY,
            BinaryExpression(BinaryOperator.ADD, var("a"), var("b")),
            var("c"),
        )
