# Tokenizer.py
"""Tokenizer: converts a raw input string into a flat list of tokens.

One left-to-right pass without backtracking. Numbers are parsed into the
numeric kind right away; identifiers keep the verbatim slice of the source and
are resolved later by the interpreter. Every token records its span so errors
can point at the offending source region.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Any, NamedTuple, Optional

from . import error as E
from .NumericEngine import FLOAT64, get_numeric

logger = logging.getLogger(__name__)


class Span(NamedTuple):
    """Half-open [start, end) character range into the source."""
    start: int
    end: int

    def byte_range(self, source, encoding="utf-8"):
        """The same range as byte offsets into ``source`` encoded with ``encoding``."""
        start = len(source[:self.start].encode(encoding))
        return Span(start, start + len(source[self.start:self.end].encode(encoding)))


class TokenKind(enum.Enum):
    NUMBER = "number"
    IDENTIFIER = "identifier"
    OPERATOR = "operator"
    SYMBOL = "symbol"


class Operator(enum.Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    POW = "^"
    EQ = "="
    EXCLAIM = "!"

    def __str__(self):
        return self.value


class Symbol(enum.Enum):
    LPAREN = "("
    RPAREN = ")"
    COMMA = ","
    PIPE = "|"

    def __str__(self):
        return self.value


# Single-character tokens, including the typographic aliases for * and /
OPERATORS = {op.value: op for op in Operator}
OPERATORS.update({"×": Operator.MUL, "·": Operator.MUL, "÷": Operator.DIV})
SYMBOLS = {sym.value: sym for sym in Symbol}

# Characters that form an identifier on their own
SINGLE_CHAR_IDENTIFIERS = ("√",)


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    value: Any
    span: Span

    def is_operator(self, op):
        return self.kind is TokenKind.OPERATOR and self.value is op

    def is_symbol(self, sym):
        return self.kind is TokenKind.SYMBOL and self.value is sym

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class TokenizeOptions:
    identifiers_contain_numbers: bool = True

    @classmethod
    def from_settings(cls, settings):
        return cls(identifiers_contain_numbers=settings.get("identifiers_contain_numbers", True))


def isdigit(char):
    """ASCII digits only; str.isdigit() also accepts superscripts and the like."""
    return "0" <= char <= "9"


def is_identifier_start(char):
    return char == "_" or char.isalpha()


def is_identifier_part(char, options):
    return is_identifier_start(char) or (options.identifiers_contain_numbers and isdigit(char))


def tokenize(source, numeric=None, options: Optional[TokenizeOptions] = None):
    """Convert ``source`` into a list of tokens.

    Raises InvalidNumber for a digit run the numeric kind cannot parse (e.g.
    ``1.2.3``) and UnrecognizedChar for any other character that has no
    meaning; there is no error recovery.
    """
    numeric = get_numeric(numeric) if numeric is not None else FLOAT64
    options = options or TokenizeOptions()
    tokens = []
    b = 0

    while b < len(source):
        current_char = source[b]

        # --- Operators and symbols ---
        if current_char in OPERATORS:
            tokens.append(Token(TokenKind.OPERATOR, OPERATORS[current_char], Span(b, b + 1)))

        elif current_char in SYMBOLS:
            tokens.append(Token(TokenKind.SYMBOL, SYMBOLS[current_char], Span(b, b + 1)))

        # --- Numbers: digits and decimal separator ---
        elif isdigit(current_char) or current_char == ".":
            start = b
            while b + 1 < len(source) and (isdigit(source[b + 1]) or source[b + 1] == "."):
                b += 1
            str_number = source[start:b + 1]
            try:
                number = numeric.parse(str_number)
            except ValueError:
                raise E.InvalidNumber(str_number, Span(start, b + 1))
            tokens.append(Token(TokenKind.NUMBER, number, Span(start, b + 1)))

        elif current_char in SINGLE_CHAR_IDENTIFIERS:
            tokens.append(Token(TokenKind.IDENTIFIER, current_char, Span(b, b + 1)))

        # --- Identifiers ---
        elif is_identifier_start(current_char):
            start = b
            while b + 1 < len(source) and is_identifier_part(source[b + 1], options):
                b += 1
            tokens.append(Token(TokenKind.IDENTIFIER, source[start:b + 1], Span(start, b + 1)))

        # --- Whitespace (ignored) ---
        elif current_char.isspace():
            pass

        else:
            raise E.UnrecognizedChar(current_char, Span(b, b + 1))

        b += 1

    logger.debug("tokens for %r: %s", source, tokens)
    return tokens
