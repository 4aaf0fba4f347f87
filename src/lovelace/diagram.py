"""
Lovelace AST Diagram Renderer
=============================

Renders a parsed Program as a human-readable tree or as a Graphviz
DOT graph.

Both views come from one traversal: build_diagram() converts the AST
into a DiagramNode tree, and the two renderers walk that tree. They
therefore visit the same nodes in the same order:

    Prog
    ├── main: Main
    │   ├── var[0]: Float x
    │   ├── cmd[0]: Assign: x
    │   │   └── value: 3.0
    │   └── cmd[1]: Print
    │       └── value: x
    └── fun[0]: Fun: isPos (return: Bool)
        ├── param[0]: Float n
        └── cmd[0]: Return
            └── value: (>)
                ├── left: n
                └── right: 0.0

Within Main and each Function the parameters, variables and statements
form one sibling run, so only the very last of them gets the closing
connector.

DOT node ids (n0, n1, ...) are allocated in pre-order by a counter that
belongs to a single render_dot() call, so two renders of the same tree
are byte-identical.

Node variants the renderer does not know are drawn as visible
"Statement?" / "Expression?" placeholders rather than dropped.
"""

import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

from lovelace.ast import (
    AssignStatement,
    BinaryExpression,
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
)

logger = logging.getLogger(__name__)


# =============================================================================
# Diagram Tree
# =============================================================================

class NodeKind(Enum):
    """Diagram node categories; each has its own DOT style."""
    PROGRAM = "program"
    MAIN = "main"
    FUNCTION = "function"
    DECLARATION = "declaration"
    STATEMENT = "statement"
    BRANCH = "branch"
    EXPRESSION = "expression"
    OPERATOR = "operator"
    UNKNOWN_STATEMENT = "unknown_statement"
    UNKNOWN_EXPRESSION = "unknown_expression"


# DOT attributes per node kind (appended after the label)
NODE_STYLES: dict[NodeKind, str] = {
    NodeKind.PROGRAM: 'shape=doubleoctagon, style=filled, fillcolor="#cce5ff"',
    NodeKind.MAIN: 'shape=box, style=filled, fillcolor="#fff3cd"',
    NodeKind.FUNCTION: 'shape=box, style=filled, fillcolor="#d4edda"',
    NodeKind.DECLARATION: 'shape=box, style="rounded,filled", fillcolor="#e2e3e5"',
    NodeKind.STATEMENT: 'shape=box, style=filled, fillcolor="#ffd6cc"',
    NodeKind.BRANCH: 'shape=diamond, style=filled, fillcolor="#ffd6cc"',
    NodeKind.EXPRESSION: 'shape=ellipse, style=filled, fillcolor="#f0f0f0"',
    NodeKind.OPERATOR: 'shape=circle, style=filled, fillcolor="#f0f0f0"',
    NodeKind.UNKNOWN_STATEMENT: "shape=box",
    NodeKind.UNKNOWN_EXPRESSION: "shape=ellipse",
}


@dataclass
class DiagramNode:
    """
    One node of the rendered diagram.

    Attributes:
        kind: Category, selects the DOT style
        text: Text shown in the indented tree view
        label: Unescaped label shown in the DOT view; a newline in it
            becomes a DOT line break
        children: (edge label, child) pairs in traversal order
    """
    kind: NodeKind
    text: str
    label: str
    children: list[tuple[str, "DiagramNode"]] = field(default_factory=list)

    def add(self, edge: str, child: "DiagramNode") -> None:
        self.children.append((edge, child))

    def walk(self) -> Iterator["DiagramNode"]:
        """Pre-order iteration over this node and its descendants."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(child for _, child in reversed(node.children))


# =============================================================================
# AST -> Diagram Tree
# =============================================================================

def build_diagram(program: Program) -> DiagramNode:
    """Convert a Program into the diagram tree shared by both renderers."""
    root = DiagramNode(NodeKind.PROGRAM, "Prog", "Prog")
    root.add("main", _main_node(program.main))
    for i, function in enumerate(program.functions):
        root.add(f"fun[{i}]", _function_node(function))
    return root


def _main_node(main: Main) -> DiagramNode:
    node = DiagramNode(NodeKind.MAIN, "Main", "Main")
    for i, var in enumerate(main.variables):
        node.add(f"var[{i}]", _variable_node(var))
    for i, stmt in enumerate(main.statements):
        node.add(f"cmd[{i}]", _statement_node(stmt))
    return node


def _function_node(function: Function) -> DiagramNode:
    node = DiagramNode(
        NodeKind.FUNCTION,
        f"Fun: {function.name} (return: {function.return_type})",
        f"Fun: {function.name}\nreturn: {function.return_type}",
    )
    for i, param in enumerate(function.parameters):
        node.add(f"param[{i}]", _parameter_node(param))
    for i, var in enumerate(function.variables):
        node.add(f"var[{i}]", _variable_node(var))
    for i, stmt in enumerate(function.body):
        node.add(f"cmd[{i}]", _statement_node(stmt))
    return node


def _parameter_node(param: Parameter) -> DiagramNode:
    return DiagramNode(
        NodeKind.DECLARATION,
        f"{param.var_type} {param.name}",
        f"Param: {param.var_type} {param.name}",
    )


def _variable_node(var: VariableDeclaration) -> DiagramNode:
    return DiagramNode(
        NodeKind.DECLARATION,
        f"{var.var_type} {var.name}",
        f"VarDecl: {var.var_type} {var.name}",
    )


def _statement_node(stmt: Statement) -> DiagramNode:
    if isinstance(stmt, AssignStatement):
        text = f"Assign: {stmt.name}"
        node = DiagramNode(NodeKind.STATEMENT, text, text)
        node.add("value", _expression_node(stmt.value))
        return node

    if isinstance(stmt, (IfStatement, WhileStatement)):
        text = "If" if isinstance(stmt, IfStatement) else "While"
        node = DiagramNode(NodeKind.BRANCH, text, text)
        node.add("cond", _expression_node(stmt.condition))
        for i, inner in enumerate(stmt.body):
            node.add(f"body[{i}]", _statement_node(inner))
        return node

    if isinstance(stmt, PrintStatement):
        node = DiagramNode(NodeKind.STATEMENT, "Print", "Print")
        node.add("value", _expression_node(stmt.value))
        return node

    if isinstance(stmt, ReadStatement):
        text = f"ReadInput: {stmt.name}"
        return DiagramNode(NodeKind.STATEMENT, text, text)

    if isinstance(stmt, ReturnStatement):
        if stmt.value is None:
            return DiagramNode(NodeKind.STATEMENT, "Return (void)", "Return")
        node = DiagramNode(NodeKind.STATEMENT, "Return", "Return")
        node.add("value", _expression_node(stmt.value))
        return node

    if isinstance(stmt, CallStatement):
        text = f"Call: {stmt.name}"
        node = DiagramNode(NodeKind.STATEMENT, text, text)
        for i, arg in enumerate(stmt.arguments):
            node.add(f"arg[{i}]", _expression_node(arg))
        return node

    logger.warning("No diagram rule for statement %s", type(stmt).__name__)
    return DiagramNode(NodeKind.UNKNOWN_STATEMENT, "Statement?", "Statement?")


def _expression_node(expr: Expression) -> DiagramNode:
    """
    Convert an expression subtree.

    Uses a work stack instead of recursion: a long operator chain is a
    deep left spine in the AST.
    """
    holder = DiagramNode(NodeKind.EXPRESSION, "", "")
    pending: list[tuple[Expression, DiagramNode, str]] = [(expr, holder, "")]
    while pending:
        current, parent, edge = pending.pop()
        node, operands = _expression_shape(current)
        parent.add(edge, node)
        for operand_edge, operand in reversed(operands):
            pending.append((operand, node, operand_edge))
    return holder.children[0][1]


def _expression_shape(
    expr: Expression,
) -> tuple[DiagramNode, list[tuple[str, Expression]]]:
    """Diagram node for one expression, plus its (edge, operand) pairs."""
    if isinstance(expr, FloatLiteral):
        text = repr(expr.value)
        return DiagramNode(NodeKind.EXPRESSION, text, text), []

    if isinstance(expr, IdentifierExpression):
        return DiagramNode(NodeKind.EXPRESSION, expr.name, expr.name), []

    if isinstance(expr, TrueLiteral):
        return DiagramNode(NodeKind.EXPRESSION, "true", "true"), []

    if isinstance(expr, FalseLiteral):
        return DiagramNode(NodeKind.EXPRESSION, "false", "false"), []

    if isinstance(expr, BinaryExpression):
        symbol = expr.operator.value
        node = DiagramNode(NodeKind.OPERATOR, f"({symbol})", symbol)
        return node, [("left", expr.left), ("right", expr.right)]

    if isinstance(expr, CallExpression):
        text = f"Call: {expr.name}"
        node = DiagramNode(NodeKind.EXPRESSION, text, text)
        return node, [(f"arg[{i}]", arg) for i, arg in enumerate(expr.arguments)]

    logger.warning("No diagram rule for expression %s", type(expr).__name__)
    return DiagramNode(NodeKind.UNKNOWN_EXPRESSION, "Expression?", "Expression?"), []


# =============================================================================
# Text Renderer
# =============================================================================

BRANCH = "├── "
LAST_BRANCH = "└── "
PIPE_PREFIX = "│   "
SPACE_PREFIX = "    "


def render_text(program: Program) -> str:
    """Render the program as an indented tree, one node per line."""
    root = build_diagram(program)
    lines = [root.text]
    pending = _text_entries(root, "")
    while pending:
        edge, child, prefix, is_last = pending.pop()
        connector = LAST_BRANCH if is_last else BRANCH
        lines.append(f"{prefix}{connector}{edge}: {child.text}")
        child_prefix = prefix + (SPACE_PREFIX if is_last else PIPE_PREFIX)
        pending.extend(_text_entries(child, child_prefix))
    return "\n".join(lines)


def _text_entries(
    node: DiagramNode, prefix: str
) -> list[tuple[str, DiagramNode, str, bool]]:
    """(edge, child, prefix, is_last) for each child, last child first."""
    last_index = len(node.children) - 1
    return [
        (edge, child, prefix, i == last_index)
        for i, (edge, child) in reversed(list(enumerate(node.children)))
    ]


# =============================================================================
# DOT Renderer
# =============================================================================

DOT_HEADER = [
    "digraph AST {",
    "    rankdir=TB;",
    '    fontname="Helvetica";',
    '    node [fontname="Helvetica", fontsize=11];',
    '    edge [fontname="Helvetica", fontsize=9];',
    "",
]


def escape_label(text: str) -> str:
    """
    Escape text for use inside a double-quoted DOT label.

    Backslash and double quote are escaped so the string stays well
    formed; angle brackets are escaped so record-style renderers do not
    read them as field delimiters. A newline becomes DOT's "\\n".
    """
    return (
        text.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("<", "\\<")
        .replace(">", "\\>")
        .replace("\n", "\\n")
    )


class DotRenderer:
    """
    Emits a diagram tree as Graphviz DOT.

    A renderer instance owns its id counter; render() restarts it, so
    each call numbers nodes from n0.
    """

    def __init__(self):
        self._ids: Iterator[int] = itertools.count()
        self._lines: list[str] = []

    def render(self, root: DiagramNode) -> str:
        self._ids = itertools.count()
        self._lines = list(DOT_HEADER)

        # Entries are (node, parent id, edge label) still to visit, or a
        # finished edge line. A node's edge line is pushed beneath its
        # children, so it is emitted once the whole subtree is out.
        pending: list[Union[tuple[DiagramNode, Optional[str], str], str]] = [
            (root, None, "")
        ]
        while pending:
            entry = pending.pop()
            if isinstance(entry, str):
                self._lines.append(entry)
                continue

            node, parent_id, edge = entry
            node_id = self._new_id()
            self._lines.append(
                f'    {node_id} [label="{escape_label(node.label)}", {NODE_STYLES[node.kind]}];'
            )
            if parent_id is not None:
                pending.append(f'    {parent_id} -> {node_id} [label="{escape_label(edge)}"];')
            for child_edge, child in reversed(node.children):
                pending.append((child, node_id, child_edge))

        self._lines.append("}")
        return "\n".join(self._lines)

    def _new_id(self) -> str:
        return f"n{next(self._ids)}"


def render_dot(program: Program) -> str:
    """Render the program as a Graphviz DOT digraph."""
    return DotRenderer().render(build_diagram(program))


def render(program: Program, dot: bool = False) -> str:
    """Render in DOT form when dot is set, as a text tree otherwise."""
    output = render_dot(program) if dot else render_text(program)
    logger.debug("Rendered %s diagram (%d lines)", "DOT" if dot else "text",
                 output.count("\n") + 1)
    return output
