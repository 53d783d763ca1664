# Interpreter.py
"""""
Environment and tree-walking evaluator.

The environment maps case-sensitive names to bindings: a stored number or a
built-in function with a fixed arity. It lives across evaluations; only Assign
nodes and the host API (set, set_var, set_function, delete) change it.

Evaluation is not transactional. An assignment that finished before a later
sub-expression failed stays in the environment.
"""""

import logging
import operator
from dataclasses import dataclass
from typing import Any, Callable, Optional

from . import error as E
from . import config_manager
from . import ScientificEngine
from .Expressions import Assign, BinOp, Call, Neg, Num, Var
from .NumericEngine import FLOAT64, get_numeric
from .Tokenizer import Operator

logger = logging.getLogger(__name__)

ARITHMETIC = {
    Operator.ADD: operator.add,
    Operator.SUB: operator.sub,
    Operator.MUL: operator.mul,
    Operator.DIV: operator.truediv,
}


@dataclass(frozen=True)
class NumberBinding:
    value: Any


@dataclass(frozen=True)
class FunctionBinding:
    """``function(numeric, args)``; max_args None accepts any number above min_args."""
    function: Callable
    min_args: int = 1
    max_args: Optional[int] = 1


def ensure_arg_count(min_args, max_args, args_len, name):
    """Raise TooFewArgs/TooManyArgs when args_len is outside [min_args, max_args]."""
    if args_len < min_args:
        raise E.TooFewArgs(name, min_args)
    if max_args is not None and args_len > max_args:
        raise E.TooManyArgs(name, max_args)


class Environment:
    """Name → binding map plus the numeric kind values are computed in.

    ``Environment()`` is empty; ``Environment.default()`` comes with pi, e,
    tau and the scientific functions.
    """

    def __init__(self, numeric=None, bindings=None):
        self.numeric = get_numeric(numeric) if numeric is not None else FLOAT64
        self.bindings = {}
        for name, value in (bindings or {}).items():
            self.set(name, value)

    @classmethod
    def default(cls, numeric=None, settings=None):
        if settings is None:
            settings = config_manager.load_setting_value("all")
        env = cls(get_numeric(numeric, settings))
        return ScientificEngine.seed_environment(env, settings)

    # -- host API ----------------------------------------------------------

    def set(self, name, value):
        """Bind ``name`` to a binding object or to a number (converted to the kind)."""
        if isinstance(value, (NumberBinding, FunctionBinding)):
            self.bindings[name] = value
        else:
            self.set_var(name, value)

    def set_var(self, name, value):
        self.bindings[name] = NumberBinding(self.numeric.convert(value))

    def set_function(self, name, function, min_args=1, max_args=1):
        self.bindings[name] = FunctionBinding(function, min_args, max_args)

    def delete(self, name):
        """Remove ``name``; returns the removed binding or None."""
        return self.bindings.pop(name, None)

    def get(self, name):
        return self.bindings.get(name)

    def copy(self):
        clone = self.__class__(self.numeric)
        clone.bindings = dict(self.bindings)
        return clone

    def __contains__(self, name):
        return name in self.bindings

    def __iter__(self):
        return iter(self.bindings)

    def __len__(self):
        return len(self.bindings)

    def __repr__(self):
        return f"Environment({self.numeric!r}, names={sorted(self.bindings)!r})"

    # -- evaluation --------------------------------------------------------

    def eval(self, tree):
        """Evaluate ``tree`` and return its value in this environment's kind."""
        try:
            return self._eval(tree)
        except RecursionError:
            raise E.EvaluationTooDeep()

    def _eval(self, node):
        if isinstance(node, Num):
            return self._compute(self.numeric.convert, node.value)

        if isinstance(node, Neg):
            return self._compute(operator.neg, self._eval(node.operand))

        if isinstance(node, BinOp):
            # Both sides run before the operator so their assignments always happen
            left_value = self._eval(node.left)
            right_value = self._eval(node.right)
            return self._apply(node.op, left_value, right_value)

        if isinstance(node, Assign):
            return self._assign(node)

        if isinstance(node, Var):
            return self._lookup(node.name)

        if isinstance(node, Call):
            return self._call(node)

        raise TypeError(f"not an expression node: {node!r}")

    def _compute(self, function, *operands):
        """Run one computation, turning numeric failures into InterpretErrors."""
        try:
            with self.numeric.arithmetic():
                return self.numeric.check_result(function(*operands), operands)
        except ZeroDivisionError:
            raise E.DivisionByZero()
        except OverflowError as e:
            raise E.NumberTooLarge(e)
        except ValueError as e:
            raise E.MathDomainError(e)

    def _apply(self, op, left_value, right_value):
        if op in (Operator.DIV, Operator.MOD) and right_value == self.numeric.zero():
            raise E.DivisionByZero()

        if op is Operator.POW:
            function = self.numeric.pow
        elif op is Operator.MOD:
            function = self.numeric.mod
        else:
            function = ARITHMETIC[op]
        return self._compute(function, left_value, right_value)

    def _assign(self, node):
        if not isinstance(node.target, Var):
            # Solving for a variable is not supported
            raise E.UnsupportedAssignment(node.target)

        value = self._eval(node.value)
        self.bindings[node.target.name] = NumberBinding(value)
        logger.debug("assigned %s = %s", node.target.name, value)
        return value

    def _lookup(self, name):
        binding = self.bindings.get(name)
        if binding is None:
            raise E.VarDoesNotExist(name)
        if isinstance(binding, FunctionBinding):
            raise E.FunctionNameUsedLikeVar(name)
        return binding.value

    def _call(self, node):
        arguments = [self._eval(arg) for arg in node.args]
        binding = self.bindings.get(node.name)

        if binding is None:
            raise E.VarDoesNotExist(node.name)

        if isinstance(binding, FunctionBinding):
            ensure_arg_count(binding.min_args, binding.max_args, len(arguments), node.name)
            return self._compute(binding.function, self.numeric, arguments)

        # A number followed by a parenthesized argument: x(3) is x * 3
        if len(arguments) == 1:
            return self._compute(operator.mul, binding.value, arguments[0])
        raise E.VarIsNotFunction(node.name)
