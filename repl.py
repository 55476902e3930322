from tinycompiler.compiler import compile_expression, run_compiled
from tinycompiler.errors import CompilerError
from tinycompiler.executor import ModuleExecutor, UnitNamer


if __name__ == "__main__":
    executor = ModuleExecutor()
    namer = UnitNamer()

    while True:
        try:
            code = input("> ")
        except EOFError:
            break

        if not code.strip():
            continue

        try:
            compiled = compile_expression(code, unit_name=namer.next_name())
            result = run_compiled(compiled, executor)
        except CompilerError as e:
            print(e)
            continue

        print(result)
