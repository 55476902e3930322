from tinycompiler.emitter import emit
from tinycompiler.executor import ExecutionError, ModuleExecutor, UnitNamer
from tinycompiler.parser import Parser, ParserError
from tinycompiler.runtime import evaluate_expression
from tinycompiler.tokenizer import TokenizerError, tokenize, untokenize

executor = ModuleExecutor()
namer = UnitNamer()

for code in [
    "5",
    "3.5",
    "1 + 1",
    "4 + 6 * 3",
    "(4 + 6)",
    "(4+6) * 3",
    "(1+2)*3 - 4/2",
    "7/6/2000",
    "10 - 3 - 2",
    "1 / 0",
    "(1+2",
    "1 + @",
    "1.2.3 + 1",
    "()",
]:
    print("=" * 10)
    print(f"code: {code!r}")
    try:
        tokens = tokenize(code)
    except TokenizerError as e:
        print(e)
        continue

    print(f"tokens: {' '.join(str(t) for t in tokens)}")
    print(f"normalized: {untokenize(tokens)}")

    try:
        expression = Parser(tokens, code=code).parse()
    except ParserError as e:
        print(e)
        continue
    print(f"ast: {expression}")

    artifact = emit(expression)
    print(f"artifact: {artifact}")

    try:
        print(f"tree walk result: {evaluate_expression(expression)}")
        print(f"compiled result: {executor.evaluate(artifact, namer.next_name())}")
    except ExecutionError as e:
        print(e)
