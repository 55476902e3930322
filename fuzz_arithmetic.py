"""Differential fuzzing: compiled results against python's own eval"""
import math
import random
import re
import string
import warnings

from tinycompiler.compiler import run_expression
from tinycompiler.errors import CompilerError
from tinycompiler.executor import ModuleExecutor, UnitNamer

warnings.filterwarnings("ignore")

executor = ModuleExecutor()
namer = UnitNamer(prefix="FuzzExpr")

SKIPPED_PATTERNS = [
    r"\*\s*\*",  # python power (10**4)
    r"/\s*/",  # python floor division (10 // 3)
    r"(^|[^\d.])\.",  # python reads .5 as a number, we don't
    r"(^|[(+\-*/])\s*-",  # python has unary minus, we don't
]


def eval_py(code: str) -> float | Exception:
    try:
        return float(eval(code))
    except Exception as e:
        return e


def eval_compiled(code: str) -> float | CompilerError:
    try:
        return run_expression(code, executor, unit_name=namer.next_name())
    except CompilerError as e:
        return e


def agrees(res_py: float | Exception, res_compiled: float | CompilerError) -> bool:
    if isinstance(res_py, float) and isinstance(res_compiled, float):
        return math.isclose(res_compiled, res_py) or (math.isnan(res_compiled) and math.isnan(res_py))
    if isinstance(res_py, Exception) and isinstance(res_compiled, CompilerError):
        return True
    # python refuses 007, we read it as 7
    return isinstance(res_py, SyntaxError) and "leading zeros" in str(res_py)


if __name__ == "__main__":
    alphabet = string.digits + ".()+-*/ "

    def generate(length: int) -> str:
        return "".join(random.choices(alphabet, k=length))

    while True:
        code = generate(10)

        if any(re.search(pattern, code) for pattern in SKIPPED_PATTERNS):
            continue

        res_py = eval_py(code)
        res_compiled = eval_compiled(code)
        if agrees(res_py, res_compiled):
            continue

        stage = res_compiled.stage if isinstance(res_compiled, CompilerError) else "ok"
        print(f"{code!r}\npy: {res_py!r}\ncompiled ({stage}): {res_compiled}\n\n")
