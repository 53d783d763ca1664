# Parser.py
"""""
Parser (recursive descent, precedence climbing).

Precedence, loosest to tightest:
    assignment '='  →  sum '+ -'  →  term '* / %'  →  power '^' (folds left)
    →  implicit multiplication 'x(y)'  →  postfix '!'  →  primary

Primaries are numbers, variables, calls 'name(args)', '(expr)', '|expr|' and
unary minus. Unary minus takes a whole term as its operand, so '-a^b' is
'-(a^b)' and '-a+b' is '(-a)+b'.

The parser does not know which identifiers are functions: 'name(' always
becomes a Call and the interpreter decides whether it is a function call or a
multiplication.
"""""

import logging

from . import error as E
from .config_manager import DEFAULT_SETTINGS
from .Expressions import Assign, BinOp, Call, Neg, Num, Var
from .Tokenizer import Operator, Span, Symbol, TokenKind

logger = logging.getLogger(__name__)


def parse(tokens, max_depth=None):
    """Parse a token list into one expression tree.

    Raises a ParseError subclass for the first problem found. Tokens left over
    after a complete expression are an error (TrailingToken), not a partial
    success.
    """
    tokens = list(tokens)
    if max_depth is None:
        max_depth = DEFAULT_SETTINGS["max_depth"]

    if not tokens:
        raise E.ExpectedValue(Span(0, 0))

    end_of_input = Span(tokens[-1].span.end, tokens[-1].span.end)
    position = 0
    depth = 0

    # ---- Token stream helpers ----

    def peek():
        return tokens[position] if position < len(tokens) else None

    def advance():
        nonlocal position
        token = peek()
        if token is None:
            raise E.UnexpectedEOF(end_of_input)
        position += 1
        return token

    def next_is_operator(*operators):
        token = peek()
        return token is not None and token.kind is TokenKind.OPERATOR and token.value in operators

    def next_is_symbol(symbol):
        token = peek()
        return token is not None and token.is_symbol(symbol)

    def expect_closing_paren():
        token = advance()
        if not token.is_symbol(Symbol.RPAREN):
            raise E.ExpectedClosingParen(token)

    def descend(parse_level):
        """Enter a nested sub-expression, bounded by max_depth."""
        nonlocal depth
        if depth >= max_depth:
            token = peek()
            raise E.ExpressionTooDeep(token.span if token else end_of_input)
        depth += 1
        try:
            return parse_level()
        finally:
            depth -= 1

    # ---- Parsing functions in precedence order ----

    def parse_call(name):
        """Comma separated arguments after 'name(' up to the closing ')'."""
        advance()  # '('
        arguments = []
        if next_is_symbol(Symbol.RPAREN):
            advance()
            return Call(name, arguments)

        while True:
            arguments.append(descend(parse_assignment))
            token = advance()
            if token.is_symbol(Symbol.COMMA):
                continue
            if token.is_symbol(Symbol.RPAREN):
                return Call(name, arguments)
            raise E.UnexpectedToken(token)

    def parse_primary():
        """Numbers, variables, calls, '()' groups, '|x|' and unary minus."""
        token = advance()

        if token.kind is TokenKind.NUMBER:
            return Num(token.value)

        elif token.kind is TokenKind.IDENTIFIER:
            if next_is_symbol(Symbol.LPAREN):
                return parse_call(token.value)
            return Var(token.value)

        elif token.is_operator(Operator.SUB):
            return Neg(descend(parse_term))

        # Parenthesized sub-expression
        elif token.is_symbol(Symbol.LPAREN):
            baum_in_der_klammer = descend(parse_assignment)
            expect_closing_paren()
            return baum_in_der_klammer

        # Absolute value
        elif token.is_symbol(Symbol.PIPE):
            baum_im_betrag = descend(parse_assignment)
            closing = advance()
            if not closing.is_symbol(Symbol.PIPE):
                raise E.UnexpectedToken(closing)
            return Call("abs", [baum_im_betrag])

        raise E.UnexpectedToken(token)

    def parse_factorial():
        """Postfix '!' becomes a call to the factorial built-in."""
        aktueller_baum = parse_primary()
        while next_is_operator(Operator.EXCLAIM):
            advance()
            aktueller_baum = Call("factorial", [aktueller_baum])
        return aktueller_baum

    def parse_implicit_mul():
        """A factor directly followed by '(expr)': 5(2+3) is 5 * (2+3)."""
        aktueller_baum = parse_factorial()
        while next_is_symbol(Symbol.LPAREN):
            advance()
            rechtes_teil = descend(parse_assignment)
            expect_closing_paren()
            aktueller_baum = BinOp(Operator.MUL, aktueller_baum, rechtes_teil)
        return aktueller_baum

    def parse_power():
        """Exponentiation '^'. Each '^' folds immediately, so 2^3^2 is (2^3)^2."""
        aktueller_baum = parse_implicit_mul()
        while next_is_operator(Operator.POW):
            advance()
            rechtes_teil = parse_implicit_mul()
            aktueller_baum = BinOp(Operator.POW, aktueller_baum, rechtes_teil)
        return aktueller_baum

    def parse_term():
        """Multiplication, division and remainder."""
        aktueller_baum = parse_power()
        while next_is_operator(Operator.MUL, Operator.DIV, Operator.MOD):
            operator = advance().value
            rechtes_teil = parse_power()
            aktueller_baum = BinOp(operator, aktueller_baum, rechtes_teil)
        return aktueller_baum

    def parse_sum():
        """Addition and subtraction."""
        aktueller_baum = parse_term()
        while next_is_operator(Operator.ADD, Operator.SUB):
            operator = advance().value
            rechte_seite = parse_term()
            aktueller_baum = BinOp(operator, aktueller_baum, rechte_seite)
        return aktueller_baum

    def parse_assignment():
        """'=' keeps the left side as written; only the interpreter checks it."""
        linke_seite = parse_sum()
        while next_is_operator(Operator.EQ):
            advance()
            rechte_seite = parse_sum()
            linke_seite = Assign(linke_seite, rechte_seite)
        return linke_seite

    # Build the final AST
    try:
        finaler_baum = descend(parse_assignment)
    except RecursionError:
        raise E.ExpressionTooDeep(end_of_input)

    leftover = peek()
    if leftover is not None:
        raise E.TrailingToken(leftover)

    logger.debug("Final AST: %r", finaler_baum)
    return finaler_baum
