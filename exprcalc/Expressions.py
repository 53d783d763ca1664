# Expressions.py
"""AST node types produced by the parser and consumed by the interpreter.

Nodes are immutable once built and own their children; there is no sharing
between trees. ``replace`` builds a new tree instead of mutating one.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Tuple

from .Tokenizer import Operator

BINARY_OPERATORS = (Operator.ADD, Operator.SUB, Operator.MUL, Operator.DIV, Operator.MOD, Operator.POW)


class Expr:
    """Base class of all expression nodes."""

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Num(Expr):
    value: Any

    def __repr__(self):
        return f"Num({self.value})"


@dataclass(frozen=True)
class Var(Expr):
    name: str

    def __repr__(self):
        return f"Var({self.name!r})"


@dataclass(frozen=True)
class Neg(Expr):
    operand: Expr

    def __repr__(self):
        return f"Neg({self.operand!r})"


@dataclass(frozen=True)
class BinOp(Expr):
    op: Operator
    left: Expr
    right: Expr

    def __post_init__(self):
        if self.op not in BINARY_OPERATORS:
            raise ValueError(f"not a binary operator: {self.op}")

    def __repr__(self):
        return f"BinOp({self.op.value!r}, left={self.left!r}, right={self.right!r})"


@dataclass(frozen=True)
class Assign(Expr):
    """``target = value``; only a Var target can be evaluated."""
    target: Expr
    value: Expr

    def __repr__(self):
        return f"Assign({self.target!r}, {self.value!r})"


@dataclass(frozen=True)
class Call(Expr):
    """Either a function call or, for a numeric binding and one argument,
    implicit multiplication. The interpreter decides which."""
    name: str
    args: Tuple[Expr, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "args", tuple(self.args))

    def __repr__(self):
        return f"Call({self.name!r}, {list(self.args)!r})"


def replace(tree, target, replacement):
    """Return a copy of ``tree`` with every subtree equal to ``target`` swapped
    for ``replacement``.

    Example: evaluate ``x^2`` for several x without touching the environment::

        for x in range(2, 6):
            env.eval(replace(tree, Var("x"), Num(float(x))))
    """
    if tree == target:
        return replacement
    if isinstance(tree, Neg):
        return Neg(replace(tree.operand, target, replacement))
    if isinstance(tree, BinOp):
        return BinOp(tree.op, replace(tree.left, target, replacement), replace(tree.right, target, replacement))
    if isinstance(tree, Assign):
        return Assign(replace(tree.target, target, replacement), replace(tree.value, target, replacement))
    if isinstance(tree, Call):
        return Call(tree.name, [replace(arg, target, replacement) for arg in tree.args])
    return tree


def _render_number(value):
    # Positional notation only: the tokenizer has no exponent syntax
    text = format(Decimal(str(value)), "f")
    if text.startswith("-"):
        return f"(-{text[1:]})"
    return text


def render(tree):
    """Render ``tree`` as fully parenthesized source text that parses back to
    an equivalent tree."""
    if isinstance(tree, Num):
        return _render_number(tree.value)
    if isinstance(tree, Var):
        return tree.name
    if isinstance(tree, Neg):
        return f"(-{render(tree.operand)})"
    if isinstance(tree, BinOp):
        return f"({render(tree.left)} {tree.op.value} {render(tree.right)})"
    if isinstance(tree, Assign):
        return f"{render(tree.target)} = {render(tree.value)}"
    if isinstance(tree, Call):
        return f"{tree.name}({', '.join(render(arg) for arg in tree.args)})"
    raise TypeError(f"not an expression node: {tree!r}")
