"""Split expression text into tokens."""
import math
import string
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from arithmetic_evaluator.common.errors import LexError
from arithmetic_evaluator.common.operators import KEYWORDS, SYMBOLS
from arithmetic_evaluator.common.tokens import Token, TokenKind


PUNCTUATION = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    ",": TokenKind.COMMA,
}

# Longest spellings first so that multi-character operators win
_SYMBOL_LENGTHS = sorted({len(symbol) for symbol in SYMBOLS}, reverse=True)


def _is_digit(ch: str) -> bool:
    # str.isdigit() also accepts superscripts and other scripts
    return "0" <= ch <= "9"


def _is_letter(ch: str) -> bool:
    return ch in string.ascii_letters


def _is_word_char(ch: str) -> bool:
    return _is_letter(ch) or _is_digit(ch) or ch == "_"


class Tokenizer(BaseModel):
    """
    Lazy tokenizer over one line of input.

    Every call to :meth:`tokens` starts a fresh scan from the first character,
    so the sequence can be restarted but never resumed mid-stream.

    Examples:
        - ``2 >= x`` yields NUMBER, OPERATOR(>=), IDENTIFIER, END_OF_INPUT
        - ``5!=5`` yields NUMBER, OPERATOR(!=), NUMBER, END_OF_INPUT
    """

    model_config = ConfigDict(frozen=True)

    text: str = Field(..., description="Input line to tokenize")

    def tokens(self) -> Iterator[Token]:
        """
        Scan the text and yield tokens, ending with END_OF_INPUT.

        :return: Generator of tokens
        :rtype: Iterator[Token]
        :raises LexError: On an unknown character or malformed number
        """
        text = self.text
        pos = 0
        while True:
            while pos < len(text) and text[pos].isspace():
                pos += 1
            if pos >= len(text):
                break

            ch = text[pos]
            if _is_digit(ch):
                token = self._read_number(pos)
            elif _is_letter(ch):
                token = self._read_word(pos)
            elif ch in PUNCTUATION:
                token = Token(kind=PUNCTUATION[ch], text=ch, position=pos)
            else:
                token = self._read_symbol(pos)
            pos += len(token.text)
            yield token

        yield Token(kind=TokenKind.END_OF_INPUT, text="", position=len(text))

    def _scan_digits(self, pos: int) -> int:
        while pos < len(self.text) and _is_digit(self.text[pos]):
            pos += 1
        return pos

    def _read_number(self, start: int) -> Token:
        """Read ``digits ['.' digits] [e [+-] digits]`` starting at ``start``."""
        text = self.text
        pos = self._scan_digits(start)

        if pos < len(text) and text[pos] == ".":
            pos = self._scan_digits(pos + 1)
            if pos < len(text) and text[pos] == ".":
                raise LexError(
                    f"Malformed number '{text[start:pos + 1]}': more than one decimal point", pos, "."
                )

        if pos < len(text) and text[pos] in "eE":
            exponent = pos + 1
            if exponent < len(text) and text[exponent] in "+-":
                exponent += 1
            end = self._scan_digits(exponent)
            if end == exponent:
                raise LexError(f"Malformed number '{text[start:exponent]}': exponent has no digits", pos, text[pos])
            pos = end
            if pos < len(text) and text[pos] == ".":
                raise LexError(f"Malformed number '{text[start:pos + 1]}': fractional exponent", pos, ".")

        raw = text[start:pos]
        value = float(raw)
        if math.isinf(value):
            raise LexError(f"Number '{raw}' is too large", start)
        return Token(kind=TokenKind.NUMBER, text=raw, position=start, value=value)

    def _read_word(self, start: int) -> Token:
        text = self.text
        pos = start + 1
        while pos < len(text) and _is_word_char(text[pos]):
            pos += 1
        word = text[start:pos]
        if word in KEYWORDS:
            return Token(kind=TokenKind.OPERATOR, text=word, position=start, operator=KEYWORDS[word])
        return Token(kind=TokenKind.IDENTIFIER, text=word, position=start)

    def _read_symbol(self, start: int) -> Token:
        for length in _SYMBOL_LENGTHS:
            candidate = self.text[start:start + length]
            if candidate in SYMBOLS:
                return Token(kind=TokenKind.OPERATOR, text=candidate, position=start, operator=SYMBOLS[candidate])
        char = self.text[start]
        raise LexError(f"Invalid character '{char}'", start, char)


def tokenize(text: str) -> Iterator[Token]:
    """Shortcut for ``Tokenizer(text=text).tokens()``."""
    return Tokenizer(text=text).tokens()
