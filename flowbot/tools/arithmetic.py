"""
Restricted arithmetic evaluation.

Parses an expression with the `ast` module and walks the tree, accepting
only numeric literals, unary +/-, the binary operators + - * / and
parentheses. Anything else is rejected before evaluation; no code is ever
executed.
"""

import ast
import operator
from typing import Callable, Dict, Type, Union

from ..exceptions import ToolExecutionError

Number = Union[int, float]

_BINARY_OPERATORS: Dict[Type[ast.operator], Callable[[Number, Number], Number]] = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
}

_UNARY_OPERATORS: Dict[Type[ast.unaryop], Callable[[Number], Number]] = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
}

# Deeply nested input would otherwise exhaust the parser recursion limit.
MAX_EXPRESSION_LENGTH = 200


def evaluate(expression: str) -> Number:
    """
    Evaluate an arithmetic expression.

    Raises:
        ToolExecutionError: on syntax errors, disallowed constructs or
            division by zero.
    """
    expression = expression.strip()
    if not expression:
        raise ToolExecutionError("Empty expression")
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ToolExecutionError("Expression is too long")

    try:
        tree = ast.parse(expression, mode="eval")
    except SyntaxError:
        raise ToolExecutionError("Invalid mathematical expression") from None

    try:
        return _eval_node(tree.body)
    except ZeroDivisionError:
        raise ToolExecutionError("Division by zero") from None
    except OverflowError:
        raise ToolExecutionError("Result is too large") from None


def _eval_node(node: ast.AST) -> Number:
    if isinstance(node, ast.Constant):
        # bool is an int subclass; reject it explicitly
        if isinstance(node.value, (int, float)) and not isinstance(node.value, bool):
            return node.value
        raise ToolExecutionError("Invalid mathematical expression")

    if isinstance(node, ast.BinOp):
        op = _BINARY_OPERATORS.get(type(node.op))
        if op is None:
            raise ToolExecutionError("Invalid mathematical expression")
        return op(_eval_node(node.left), _eval_node(node.right))

    if isinstance(node, ast.UnaryOp):
        op = _UNARY_OPERATORS.get(type(node.op))
        if op is None:
            raise ToolExecutionError("Invalid mathematical expression")
        return op(_eval_node(node.operand))

    raise ToolExecutionError("Invalid mathematical expression")


def format_number(value: Number) -> str:
    """Render integral floats without the trailing `.0`."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
