import operator
from typing import Callable

from tinycompiler.executor import ExecutionError
from tinycompiler.parser import BinaryOperation, BinaryOperator, Expression, NumberLiteral

BinaryOperationImpl = Callable[[float, float], float]

binary_impls: dict[BinaryOperator, BinaryOperationImpl] = {
    BinaryOperator.ADD: operator.add,
    BinaryOperator.SUB: operator.sub,
    BinaryOperator.MUL: operator.mul,
    BinaryOperator.DIV: operator.truediv,
}

op_names = {
    BinaryOperator.ADD: "Addition",
    BinaryOperator.SUB: "Subtraction",
    BinaryOperator.MUL: "Multiplication",
    BinaryOperator.DIV: "Division",
}


def evaluate_expression(expression: Expression) -> float:
    """Walks the tree directly, without emitting anything"""
    if isinstance(expression, NumberLiteral):
        return float(expression.text)
    elif isinstance(expression, BinaryOperation):
        left_res = evaluate_expression(expression.left)
        right_res = evaluate_expression(expression.right)
        try:
            return binary_impls[expression.operator](left_res, right_res)
        except ArithmeticError as e:
            raise ExecutionError(f"{op_names[expression.operator]} failed: {e}") from e
    else:
        raise ExecutionError(f"Unexpected expression type: {expression!r}")
