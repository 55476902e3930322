import pytest

from tinycompiler.tokenizer import Lexer, Token, TokenizerError, TokenizerErrorKind, TokenType, tokenize, untokenize


def test_tokenize() -> None:
    assert tokenize("(12 + 3.5)*4 - 1/2") == [
        Token(TokenType.BRACKET_OPEN, "(", 0),
        Token(TokenType.NUMBER, "12", 1),
        Token(TokenType.PLUS, "+", 4),
        Token(TokenType.NUMBER, "3.5", 6),
        Token(TokenType.BRACKET_CLOSE, ")", 9),
        Token(TokenType.STAR, "*", 10),
        Token(TokenType.NUMBER, "4", 11),
        Token(TokenType.MINUS, "-", 13),
        Token(TokenType.NUMBER, "1", 15),
        Token(TokenType.SLASH, "/", 16),
        Token(TokenType.NUMBER, "2", 17),
        Token(TokenType.EXPR_END, "", 18),
    ]


@pytest.mark.parametrize("code", ["", "   ", "\t\n"])
def test_tokenize_blank(code: str) -> None:
    assert tokenize(code) == [Token(TokenType.EXPR_END, "", len(code))]


def test_end_token_is_repeated() -> None:
    lexer = Lexer("1")
    assert lexer.next() == Token(TokenType.NUMBER, "1", 0)
    end = lexer.next()
    assert end.type is TokenType.EXPR_END
    assert lexer.next() == end
    assert lexer.next() == end


def test_lexer_is_lazy() -> None:
    lexer = Lexer("1 + @")
    assert lexer.next().type is TokenType.NUMBER
    assert lexer.next().type is TokenType.PLUS
    with pytest.raises(TokenizerError):
        lexer.next()


@pytest.mark.parametrize(
    "code, lexemes",
    [
        pytest.param("1.2.3", ["1.2.3"]),
        pytest.param("5.", ["5."]),
        pytest.param("007", ["007"]),
        pytest.param("1 2", ["1", "2"]),
    ],
)
def test_number_lexemes(code: str, lexemes: list[str]) -> None:
    tokens = tokenize(code)
    assert [t.lexeme for t in tokens if t.type is TokenType.NUMBER] == lexemes


@pytest.mark.parametrize(
    "code, error_char_idx",
    [
        pytest.param("1+@", 2),
        pytest.param(".5", 0),
        pytest.param("2^3", 1),
        pytest.param("x", 0),
        pytest.param("1;2", 1),
        pytest.param("²", 0),
    ],
)
def test_unexpected_character(code: str, error_char_idx: int) -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize(code)
    error = exc_info.value
    assert error.kind is TokenizerErrorKind.UNEXPECTED_CHARACTER
    assert error.error_char_idx == error_char_idx
    assert error.character == code[error_char_idx]
    assert error.stage == "lex"


def test_tokenizer_error_message() -> None:
    with pytest.raises(TokenizerError) as exc_info:
        tokenize("1+@")
    assert str(exc_info.value) == "\n".join(["[Tokenizer error] Unexpected character: '@'", "1+@", "  ^"])


def test_untokenize() -> None:
    assert untokenize(tokenize("( 1+2 )*3")) == "(1 + 2) * 3"
