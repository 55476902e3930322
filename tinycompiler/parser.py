import enum
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from tinycompiler.errors import CompilerError
from tinycompiler.tokenizer import Token, TokenType, tokenize
from tinycompiler.utils import PrintableEnum, point_at


class ParserErrorKind(PrintableEnum):
    UNEXPECTED_TOKEN = enum.auto()
    UNCLOSED_PARENTHESIS = enum.auto()
    EMPTY_FACTOR = enum.auto()
    MALFORMED_NUMBER = enum.auto()
    TOO_DEEP = enum.auto()


@dataclass
class ParserError(CompilerError):
    kind: ParserErrorKind
    errmsg: str
    expected: tuple[TokenType, ...]
    found: Token
    code: Optional[str] = None

    stage = "parse"

    def __str__(self) -> str:
        lines = [f"[Parser error] {self.errmsg}"]
        if self.code is not None:
            lines.extend(point_at(self.code, self.found.position))
        return "\n".join(lines)


class BinaryOperator(PrintableEnum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @property
    def symbol(self) -> str:
        return self.value


@dataclass(frozen=True)
class NumberLiteral:
    text: str


@dataclass(frozen=True)
class BinaryOperation:
    operator: BinaryOperator
    left: "Expression"
    right: "Expression"


Expression = NumberLiteral | BinaryOperation


TERM_OPERATORS = {
    TokenType.PLUS: BinaryOperator.ADD,
    TokenType.MINUS: BinaryOperator.SUB,
}

FACTOR_OPERATORS = {
    TokenType.STAR: BinaryOperator.MUL,
    TokenType.SLASH: BinaryOperator.DIV,
}

BINARY_OPERATORS = {**TERM_OPERATORS, **FACTOR_OPERATORS}

FACTOR_START = (TokenType.NUMBER, TokenType.BRACKET_OPEN)

MAX_BRACKET_DEPTH = 100
# emit() wraps every operation in brackets and python refuses more than 200 nested ones
MAX_TREE_DEPTH = 180


class Parser:
    """Recursive descent over

    expr   := term (('+' | '-') term)*
    term   := factor (('*' | '/') factor)*
    factor := NUMBER | '(' expr ')'

    with a single token of lookahead. Binary operators fold to the left.
    Grammar methods return the parsed subtree with its depth in operations.
    """

    def __init__(self, tokens: Iterable[Token], code: Optional[str] = None) -> None:
        self.code = code
        self._tokens: Iterator[Token] = iter(tokens)
        self.current = self._advance()
        self.bracket_depth = 0

    def _advance(self) -> Token:
        token = next(self._tokens, None)
        if token is None:
            # token stream ran dry without an explicit end marker
            position = len(self.code) if self.code is not None else 0
            return Token(type=TokenType.EXPR_END, lexeme="", position=position)
        return token

    def _error(
        self,
        kind: ParserErrorKind,
        errmsg: str,
        expected: tuple[TokenType, ...],
        found: Optional[Token] = None,
    ) -> ParserError:
        return ParserError(
            kind=kind,
            errmsg=errmsg,
            expected=expected,
            found=found if found is not None else self.current,
            code=self.code,
        )

    def eat(self, expected: TokenType) -> Token:
        token = self.current
        if token.type is not expected:
            raise self._error(
                ParserErrorKind.UNEXPECTED_TOKEN,
                f"Expected {expected}, found {token.type}",
                expected=(expected,),
            )
        if token.type is not TokenType.EXPR_END:
            self.current = self._advance()
        return token

    def parse(self) -> Expression:
        expression, _ = self.expr()
        if self.current.type is not TokenType.EXPR_END:
            expected = (TokenType.EXPR_END, *TERM_OPERATORS, *FACTOR_OPERATORS)
            raise self._error(
                ParserErrorKind.UNEXPECTED_TOKEN,
                f"Binary operator or end of expression expected, found {self.current.type}",
                expected=expected,
            )
        return expression

    def _combine(
        self, operator_token: Token, left: tuple[Expression, int], right: tuple[Expression, int]
    ) -> tuple[Expression, int]:
        depth = max(left[1], right[1]) + 1
        if depth > MAX_TREE_DEPTH:
            raise self._error(
                ParserErrorKind.TOO_DEEP,
                f"Expression nests more than {MAX_TREE_DEPTH} operations",
                expected=(),
                found=operator_token,
            )
        operator = BINARY_OPERATORS[operator_token.type]
        return BinaryOperation(operator=operator, left=left[0], right=right[0]), depth

    def expr(self) -> tuple[Expression, int]:
        result = self.term()
        while self.current.type in TERM_OPERATORS:
            operator_token = self.eat(self.current.type)
            result = self._combine(operator_token, result, self.term())
        return result

    def term(self) -> tuple[Expression, int]:
        result = self.factor()
        while self.current.type in FACTOR_OPERATORS:
            operator_token = self.eat(self.current.type)
            result = self._combine(operator_token, result, self.factor())
        return result

    def factor(self) -> tuple[Expression, int]:
        if self.current.type is TokenType.NUMBER:
            if self.current.lexeme.count(".") > 1:
                raise self._error(
                    ParserErrorKind.MALFORMED_NUMBER,
                    f"Malformed number literal: {self.current.lexeme!r}",
                    expected=(TokenType.NUMBER,),
                )
            return NumberLiteral(self.eat(TokenType.NUMBER).lexeme), 0
        elif self.current.type is TokenType.BRACKET_OPEN:
            if self.bracket_depth >= MAX_BRACKET_DEPTH:
                raise self._error(
                    ParserErrorKind.TOO_DEEP,
                    f"Brackets nest deeper than {MAX_BRACKET_DEPTH}",
                    expected=(TokenType.NUMBER,),
                )
            self.eat(TokenType.BRACKET_OPEN)
            self.bracket_depth += 1
            result = self.expr()
            if self.current.type is TokenType.EXPR_END:
                raise self._error(
                    ParserErrorKind.UNCLOSED_PARENTHESIS,
                    "Unclosed bracket",
                    expected=(TokenType.BRACKET_CLOSE,),
                )
            self.eat(TokenType.BRACKET_CLOSE)
            self.bracket_depth -= 1
            return result
        elif self.current.type in (TokenType.EXPR_END, TokenType.BRACKET_CLOSE):
            raise self._error(
                ParserErrorKind.EMPTY_FACTOR,
                f"Number or bracketed expression expected, found {self.current.type}",
                expected=FACTOR_START,
            )
        else:
            raise self._error(
                ParserErrorKind.UNEXPECTED_TOKEN,
                f"Number or bracketed expression expected, found {self.current.type}",
                expected=FACTOR_START,
            )


def parse(code: str) -> Expression:
    tokens = tokenize(code)
    return Parser(tokens, code=code).parse()
