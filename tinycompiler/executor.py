import itertools
import logging
import types
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Protocol

from tinycompiler.emitter import EmitError, render_module_source
from tinycompiler.errors import CompilerError

logger = logging.getLogger(__name__)


@dataclass
class ExecutionError(CompilerError):
    errmsg: str
    unit_name: Optional[str] = None

    stage = "execute"

    def __str__(self) -> str:
        if self.unit_name is None:
            return f"[Execution error] {self.errmsg}"
        return f"[Execution error] {self.unit_name}: {self.errmsg}"


class Executor(Protocol):
    def evaluate(self, artifact: str, unit_name: str) -> float:
        ...


class UnitNamer:
    """Hands out unique names for compiled units: CompiledExpr1, CompiledExpr2, ..."""

    def __init__(self, prefix: str = "CompiledExpr") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)

    def next_name(self) -> str:
        return f"{self.prefix}{next(self._counter)}"


class ModuleExecutor:
    """Compiles the artifact into a python module and calls its call() function.

    With output_dir the module source is written to <output_dir>/<unit_name>.py and
    loaded from there, otherwise the module only ever exists in memory. Loaded
    modules are never added to sys.modules.
    """

    def __init__(self, output_dir: Optional[Path] = None) -> None:
        self.output_dir = output_dir

    def evaluate(self, artifact: str, unit_name: str) -> float:
        try:
            source = render_module_source(unit_name, artifact)
        except EmitError as e:
            raise ExecutionError(e.errmsg, unit_name=unit_name) from e

        try:
            if self.output_dir is None:
                module = self._load_from_memory(unit_name, source)
            else:
                module = self._load_from_file(unit_name, source, self.output_dir)
        except Exception as e:
            raise ExecutionError(f"Compilation failed: {e}", unit_name=unit_name) from e

        call = getattr(module, "call", None)
        if not callable(call):
            raise ExecutionError("Compiled unit has no call() function", unit_name=unit_name)

        try:
            result = call()
        except Exception as e:
            raise ExecutionError(f"Evaluation failed: {e}", unit_name=unit_name) from e

        if not isinstance(result, float):
            raise ExecutionError(f"Expected a float result, got {type(result).__name__}", unit_name=unit_name)
        logger.debug("Unit %s evaluated to %r", unit_name, result)
        return result

    def _load_from_memory(self, unit_name: str, source: str) -> types.ModuleType:
        logger.debug("Compiling unit %s in memory", unit_name)
        return _exec_module(unit_name, source, filename=f"<{unit_name}>")

    def _load_from_file(self, unit_name: str, source: str, output_dir: Path) -> types.ModuleType:
        output_dir.mkdir(parents=True, exist_ok=True)
        path = output_dir / f"{unit_name}.py"
        path.write_text(source)
        logger.debug("Wrote unit %s to %s", unit_name, path)
        module = _exec_module(unit_name, path.read_text(), filename=str(path))
        module.__file__ = str(path)
        return module


def _exec_module(unit_name: str, source: str, filename: str) -> types.ModuleType:
    module = types.ModuleType(unit_name)
    code = compile(source, filename, "exec")
    exec(code, module.__dict__)
    return module
