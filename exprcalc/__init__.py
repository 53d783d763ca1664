"""""
exprcalc: an embeddable expression evaluator.

    >>> from exprcalc import Environment, evaluate
    >>> env = Environment.default()
    >>> evaluate("x = 5", env)
    5.0
    >>> evaluate("x^2", env)
    25.0
"""""

from .error import (
    EvalError,
    InterpretError,
    MathError,
    ParseError,
    TokenizeError,
)
from .Expressions import Assign, BinOp, Call, Expr, Neg, Num, Var, render, replace
from .Interpreter import Environment, FunctionBinding, NumberBinding, ensure_arg_count
from .MathEngine import evaluate, parse_expression
from .NumericEngine import DECIMAL, FLOAT32, FLOAT64, DecimalNumeric, Float32, Float64, Numeric, get_numeric
from .Parser import parse
from .Tokenizer import Operator, Span, Symbol, Token, TokenizeOptions, TokenKind, tokenize

__all__ = [
    "Assign", "BinOp", "Call", "DECIMAL", "DecimalNumeric", "Environment", "EvalError", "Expr",
    "FLOAT32", "FLOAT64", "Float32", "Float64", "FunctionBinding", "InterpretError", "MathError",
    "Neg", "Num", "NumberBinding", "Numeric", "Operator", "ParseError", "Span", "Symbol", "Token",
    "TokenKind", "TokenizeError", "TokenizeOptions", "Var", "ensure_arg_count", "evaluate",
    "get_numeric", "parse", "parse_expression", "render", "replace", "tokenize",
]
