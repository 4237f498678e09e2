"""Test class Tokenizer."""
import pytest

from arithmetic_evaluator.common.errors import LexError
from arithmetic_evaluator.common.lexer import Tokenizer, tokenize
from arithmetic_evaluator.common.operators import Operator
from arithmetic_evaluator.common.tokens import TokenKind


def kinds(text: str) -> list:
    return [token.kind for token in tokenize(text)]


def test_tokenize_basic() -> None:
    """Tokenize splits a simple expression into numbers and operators."""
    tokens = list(tokenize("3 + 4 * 2"))
    assert [t.text for t in tokens] == ["3", "+", "4", "*", "2", ""]
    assert tokens[1].operator is Operator.ADD
    assert tokens[3].operator is Operator.MULTIPLY
    assert tokens[-1].kind is TokenKind.END_OF_INPUT


def test_tokenize_without_spaces() -> None:
    """Whitespace is optional between tokens."""
    assert [t.text for t in tokenize("max(2,x)^3")] == ["max", "(", "2", ",", "x", ")", "^", "3", ""]


def test_positions_are_character_offsets() -> None:
    """Each token records the offset of its first character."""
    tokens = list(tokenize("  12 >=  x"))
    assert [t.position for t in tokens] == [2, 5, 9, 10]


@pytest.mark.parametrize("text,expected", [
    ("0", 0.0),
    ("42", 42.0),
    ("3.25", 3.25),
    ("5.", 5.0),
    ("1e3", 1000.0),
    ("2E-2", 0.02),
    ("1.5e+2", 150.0),
])
def test_number_literals(text: str, expected: float) -> None:
    """Numeric literals are converted to floats."""
    token = next(tokenize(text))
    assert token.kind is TokenKind.NUMBER
    assert token.value == expected
    assert token.text == text


@pytest.mark.parametrize("text,position", [
    ("1.2.3", 3),
    ("1e", 1),
    ("2e+", 1),
    ("3e2.5", 3),
])
def test_malformed_numbers_raise(text: str, position: int) -> None:
    """Malformed numeric literals raise LexError at the offending character."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize(text))
    assert exc_info.value.position == position


def test_number_overflow_raises() -> None:
    """A literal too large for a float is rejected."""
    with pytest.raises(LexError):
        list(tokenize("1e999"))


@pytest.mark.parametrize("text,operator", [
    (">=", Operator.GREATER_EQUAL),
    ("<=", Operator.LESS_EQUAL),
    ("==", Operator.EQUAL),
    ("!=", Operator.NOT_EQUAL),
    ("**", Operator.POWER),
    ("&&", Operator.AND),
    ("||", Operator.OR),
    (">", Operator.GREATER),
    ("<", Operator.LESS),
    ("=", Operator.ASSIGN),
    ("!", Operator.FACTORIAL),
    ("%", Operator.MODULUS),
])
def test_operator_symbols(text: str, operator: Operator) -> None:
    """Multi-character operators win over their single-character prefixes."""
    tokens = list(tokenize(text))
    assert len(tokens) == 2
    assert tokens[0].kind is TokenKind.OPERATOR
    assert tokens[0].operator is operator


def test_longest_match_between_operands() -> None:
    """'5!=5' is an inequality, not a factorial followed by assignment."""
    tokens = list(tokenize("5!=5"))
    assert tokens[1].operator is Operator.NOT_EQUAL
    assert len(tokens) == 4


@pytest.mark.parametrize("word,operator", [
    ("and", Operator.AND),
    ("or", Operator.OR),
    ("nand", Operator.NAND),
    ("nor", Operator.NOR),
    ("not", Operator.NOT),
    ("mod", Operator.MODULUS),
])
def test_keywords_are_operators(word: str, operator: Operator) -> None:
    """Reserved words are emitted as operator tokens."""
    token = next(tokenize(word))
    assert token.kind is TokenKind.OPERATOR
    assert token.operator is operator


def test_identifiers_are_case_sensitive() -> None:
    """Identifiers keep their spelling; 'AND' is not a keyword."""
    tokens = list(tokenize("Pi AND x_1"))
    assert [t.kind for t in tokens[:3]] == [TokenKind.IDENTIFIER] * 3
    assert [t.text for t in tokens[:3]] == ["Pi", "AND", "x_1"]


def test_punctuation() -> None:
    """Parentheses and commas have their own token kinds."""
    assert kinds("(,)") == [
        TokenKind.LEFT_PAREN,
        TokenKind.COMMA,
        TokenKind.RIGHT_PAREN,
        TokenKind.END_OF_INPUT,
    ]


@pytest.mark.parametrize("text,char,position", [
    ("1 @ 2", "@", 2),
    ("$", "$", 0),
    ("2 & 3", "&", 2),
    ("x | y", "|", 2),
    ("x² + 1", "²", 1),
    ("a٣", "٣", 1),
    ("é = 1", "é", 0),
    ("_x", "_", 0),
])
def test_unknown_character_raises(text: str, char: str, position: int) -> None:
    """Unknown characters raise LexError with the character and its position."""
    with pytest.raises(LexError) as exc_info:
        list(tokenize(text))
    assert exc_info.value.char == char
    assert exc_info.value.position == position


def test_empty_input_yields_end_of_input() -> None:
    """Blank input still produces the terminal token."""
    assert kinds("   ") == [TokenKind.END_OF_INPUT]


def test_tokens_are_lazy() -> None:
    """Tokens before an invalid character are produced before the error is raised."""
    stream = tokenize("1 + @")
    assert next(stream).value == 1.0
    assert next(stream).operator is Operator.ADD
    with pytest.raises(LexError):
        next(stream)


def test_tokens_restart_from_scratch() -> None:
    """Each call to tokens() scans the text again from the beginning."""
    tokenizer = Tokenizer(text="x = 1")
    first = tokenizer.tokens()
    next(first)
    assert [t.text for t in tokenizer.tokens()] == ["x", "=", "1", ""]
