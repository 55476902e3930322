import enum
import re
from dataclasses import dataclass
from typing import Iterator

from tinycompiler.errors import CompilerError
from tinycompiler.utils import PrintableEnum, point_at


class TokenizerErrorKind(PrintableEnum):
    UNEXPECTED_CHARACTER = enum.auto()


@dataclass
class TokenizerError(CompilerError):
    errmsg: str
    code: str
    error_char_idx: int
    kind: TokenizerErrorKind = TokenizerErrorKind.UNEXPECTED_CHARACTER

    stage = "lex"

    @property
    def character(self) -> str:
        return self.code[self.error_char_idx]

    def __str__(self) -> str:
        return "\n".join([f"[Tokenizer error] {self.errmsg}", *point_at(self.code, self.error_char_idx)])


class TokenType(PrintableEnum):
    NUMBER = enum.auto()
    PLUS = enum.auto()
    MINUS = enum.auto()
    STAR = enum.auto()
    SLASH = enum.auto()
    BRACKET_OPEN = enum.auto()
    BRACKET_CLOSE = enum.auto()
    EXPR_END = enum.auto()


@dataclass(frozen=True)
class Token:
    type: TokenType
    lexeme: str
    position: int

    def __str__(self) -> str:
        return f"<{self.type}>{self.lexeme}"


def _is_digit(s: str) -> bool:
    # str.isdigit() also accepts superscripts and other non-ascii digits
    return "0" <= s <= "9"


def _is_valid_in_number(s: str) -> bool:
    return _is_digit(s) or s == "."


SINGLE_CHAR_TOKENS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "(": TokenType.BRACKET_OPEN,
    ")": TokenType.BRACKET_CLOSE,
}


class Lexer:
    def __init__(self, code: str) -> None:
        self.code = code
        self.i = 0

    def next(self) -> Token:
        code = self.code
        while self.i < len(code) and code[self.i].isspace():
            self.i += 1

        if self.i >= len(code):
            return Token(type=TokenType.EXPR_END, lexeme="", position=len(code))

        start = self.i
        char = code[start]
        if _is_digit(char):
            end = start + 1
            while end < len(code) and _is_valid_in_number(code[end]):
                end += 1
            self.i = end
            return Token(type=TokenType.NUMBER, lexeme=code[start:end], position=start)
        elif char in SINGLE_CHAR_TOKENS:
            self.i += 1
            return Token(type=SINGLE_CHAR_TOKENS[char], lexeme=char, position=start)
        else:
            raise TokenizerError(f"Unexpected character: {char!r}", code=code, error_char_idx=start)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next()
            yield token
            if token.type is TokenType.EXPR_END:
                return


def tokenize(code: str) -> list[Token]:
    return list(Lexer(code))


def untokenize(tokens: list[Token]) -> str:
    result = " ".join(t.lexeme for t in tokens if t.type is not TokenType.EXPR_END)

    # ( 1 + 2 ) => (1 + 2)
    result = re.sub(r"\(\s+", "(", result)
    result = re.sub(r"\s+\)", ")", result)
    return result
