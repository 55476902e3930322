from typing import ClassVar


class CompilerError(Exception):
    stage: ClassVar[str] = "compile"
