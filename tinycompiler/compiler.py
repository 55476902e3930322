import logging
from dataclasses import dataclass

from tinycompiler.emitter import emit, render_module_source
from tinycompiler.executor import Executor
from tinycompiler.parser import Expression, Parser
from tinycompiler.tokenizer import tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CompiledExpression:
    code: str
    ast: Expression
    artifact: str
    unit_name: str
    source: str


def compile_expression(code: str, unit_name: str) -> CompiledExpression:
    tokens = tokenize(code)
    logger.debug("Tokenized %r into %d tokens", code, len(tokens))
    ast = Parser(tokens, code=code).parse()
    logger.debug("Parsed %r: %s", code, ast)
    artifact = emit(ast)
    source = render_module_source(unit_name, artifact)
    logger.debug("Emitted unit %s: %s", unit_name, artifact)
    return CompiledExpression(code=code, ast=ast, artifact=artifact, unit_name=unit_name, source=source)


def run_compiled(compiled: CompiledExpression, executor: Executor) -> float:
    return executor.evaluate(compiled.artifact, compiled.unit_name)


def run_expression(code: str, executor: Executor, unit_name: str) -> float:
    return run_compiled(compile_expression(code, unit_name), executor)
