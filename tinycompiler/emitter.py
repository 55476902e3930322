from dataclasses import dataclass

from tinycompiler.errors import CompilerError
from tinycompiler.parser import BinaryOperation, Expression, NumberLiteral


@dataclass
class EmitError(CompilerError):
    errmsg: str

    stage = "emit"

    def __str__(self) -> str:
        return f"[Emitter error] {self.errmsg}"


MODULE_TEMPLATE = '''\
"""Generated by tinycompiler as unit {unit_name}"""


def call() -> float:
    return {artifact}
'''


def emit(expression: Expression) -> str:
    if isinstance(expression, NumberLiteral):
        if "." in expression.text:
            return expression.text
        else:
            return expression.text + ".0"
    elif isinstance(expression, BinaryOperation):
        return "(" + emit(expression.left) + expression.operator.symbol + emit(expression.right) + ")"
    else:
        raise EmitError(f"Unexpected expression type: {expression!r}")


def render_module_source(unit_name: str, artifact: str) -> str:
    if not unit_name.isidentifier():
        raise EmitError(f"Unit name must be a valid identifier, got {unit_name!r}")
    return MODULE_TEMPLATE.format(unit_name=unit_name, artifact=artifact)


def generate_module_source(unit_name: str, expression: Expression) -> str:
    return render_module_source(unit_name, emit(expression))
