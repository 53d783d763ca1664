# NumericEngine.py
"""""
Numeric kinds the pipeline is generic over.

A kind describes one concrete representation: how numerals are parsed, the
identities, the integrality test, power, remainder, factorial and the closed-form
functions the built-ins need. Values of a kind are plain Python numbers
(float, numpy.float32, Decimal) and use their own +, -, *, / and ordering.

Every computation of the interpreter runs inside ``kind.arithmetic()``, which
turns the kind's native failure signals into ZeroDivisionError, OverflowError
and ValueError.
"""""

import math
import decimal
from contextlib import contextmanager, nullcontext
from decimal import Decimal

import numpy as np

from . import error as E


def _is_infinite(value):
    return isinstance(value, (float, np.floating)) and math.isinf(value)


def _flatten(operands):
    for operand in operands:
        if isinstance(operand, (list, tuple)):
            yield from _flatten(operand)
        else:
            yield operand


class Numeric:
    """Base kind. Subclasses supply parse/from_float and may override the rest."""

    name = "numeric"

    def parse(self, text):
        raise NotImplementedError

    def from_float(self, value):
        raise NotImplementedError

    def convert(self, value):
        """Coerce a host value (int, float, str) into this kind."""
        if isinstance(value, str):
            return self.parse(value)
        return self.from_float(value)

    def zero(self):
        return self.convert(0)

    def one(self):
        return self.convert(1)

    def is_integer(self, value):
        return float(value).is_integer()

    def arithmetic(self):
        return nullcontext()

    def check_result(self, result, operands):
        """Raise OverflowError when finite operands produced an infinite float."""
        if _is_infinite(result) and not any(_is_infinite(v) for v in _flatten(operands)):
            raise OverflowError("result out of range")
        return result

    def pow(self, base, exponent):
        return base ** exponent

    def mod(self, a, b):
        """Remainder truncated toward zero; the sign follows the dividend."""
        if b == self.zero():
            raise ZeroDivisionError("modulo by zero")
        return self.from_float(math.fmod(float(a), float(b)))

    def factorial(self, value):
        """Product of one, two, ... up to value.

        Only terminates for whole, non-negative values; callers guard the input.
        """
        result = self.one()
        counter = self.one()
        while counter <= value:
            result = result * counter
            counter = counter + self.one()
        return result

    # --- closed-form functions ---

    def _via_float(self, func, value):
        return self.from_float(func(float(value)))

    def abs(self, value):
        return abs(value)

    def sqrt(self, value):
        return self._via_float(math.sqrt, value)

    def sin(self, value):
        return self._via_float(math.sin, value)

    def cos(self, value):
        return self._via_float(math.cos, value)

    def tan(self, value):
        return self._via_float(math.tan, value)

    def ln(self, value):
        return self._via_float(math.log, value)

    def log10(self, value):
        return self._via_float(math.log10, value)

    def exp(self, value):
        return self._via_float(math.exp, value)

    def radians(self, value):
        return value * self.pi() / self.convert(180)

    # --- constants ---

    def pi(self):
        return self.from_float(math.pi)

    def e(self):
        return self.from_float(math.e)

    def tau(self):
        return self.from_float(math.tau)

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class Float64(Numeric):
    """Python float (IEEE 754 double)."""

    name = "float64"

    def parse(self, text):
        return float(text)

    def from_float(self, value):
        return float(value)

    def pow(self, base, exponent):
        # math.pow raises instead of returning a complex number
        return math.pow(base, exponent)

    def mod(self, a, b):
        if b == 0:
            raise ZeroDivisionError("modulo by zero")
        return math.fmod(a, b)

    def factorial(self, value):
        # float() raises OverflowError above 170!
        return float(math.factorial(int(value)))


class Float32(Numeric):
    """numpy.float32 (IEEE 754 single)."""

    name = "float32"

    def parse(self, text):
        return np.float32(text)

    def from_float(self, value):
        return np.float32(value)

    @contextmanager
    def arithmetic(self):
        try:
            with np.errstate(divide="raise", over="raise", invalid="raise"):
                yield
        except FloatingPointError as e:
            message = str(e)
            if "divide by zero" in message:
                raise ZeroDivisionError(message) from e
            if "overflow" in message:
                raise OverflowError(message) from e
            raise ValueError(message) from e

    def pow(self, base, exponent):
        return np.power(base, exponent)

    def mod(self, a, b):
        if b == 0:
            raise ZeroDivisionError("modulo by zero")
        return np.fmod(a, b)

    def sqrt(self, value):
        return np.sqrt(value)

    def sin(self, value):
        return np.sin(value)

    def cos(self, value):
        return np.cos(value)

    def tan(self, value):
        return np.tan(value)

    def ln(self, value):
        return np.log(value)

    def log10(self, value):
        return np.log10(value)

    def exp(self, value):
        return np.exp(value)


class DecimalNumeric(Numeric):
    """decimal.Decimal with a private context of fixed precision."""

    name = "decimal"

    PI = "3.14159265358979323846264338327950288419716939937510582097494459230781640629"
    E = "2.71828182845904523536028747135266249775724709369995957496696762772407663035"

    def __init__(self, precision=50):
        self.precision = precision
        self.context = decimal.Context(
            prec=precision,
            traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
        )

    def parse(self, text):
        try:
            return self.context.create_decimal(text)
        except decimal.InvalidOperation as e:
            raise ValueError(f"invalid decimal literal: {text!r}") from e

    def from_float(self, value):
        # Go through str() to avoid binary float artifacts
        return self.context.create_decimal(str(value))

    def convert(self, value):
        if isinstance(value, str):
            return self.parse(value)
        if isinstance(value, (int, Decimal)):
            return self.context.create_decimal(value)
        return self.from_float(value)

    def is_integer(self, value):
        return value.is_finite() and value == value.to_integral_value()

    @contextmanager
    def arithmetic(self):
        try:
            with decimal.localcontext(self.context):
                yield
        except ZeroDivisionError:
            raise
        except decimal.Overflow as e:
            raise OverflowError("decimal overflow") from e
        except decimal.InvalidOperation as e:
            raise ValueError("invalid decimal operation") from e

    def mod(self, a, b):
        if b == 0:
            raise ZeroDivisionError("modulo by zero")
        # remainder() needs the whole integer quotient to fit the precision
        wide = self.context.copy()
        wide.prec = self.precision + max(0, a.adjusted() - b.adjusted()) + 1
        return self.context.plus(wide.remainder(a, b))

    def sqrt(self, value):
        return value.sqrt(self.context)

    def ln(self, value):
        if value <= 0:
            raise ValueError("math domain error")
        return value.ln(self.context)

    def log10(self, value):
        if value <= 0:
            raise ValueError("math domain error")
        return value.log10(self.context)

    def exp(self, value):
        return value.exp(self.context)

    def pi(self):
        return self.context.create_decimal(self.PI)

    def e(self):
        return self.context.create_decimal(self.E)

    def tau(self):
        return self.context.multiply(2, self.pi())

    def __repr__(self):
        return f"DecimalNumeric(precision={self.precision})"


FLOAT32 = Float32()
FLOAT64 = Float64()
DECIMAL = DecimalNumeric()

NUMERIC_KINDS = {
    "float32": FLOAT32,
    "float64": FLOAT64,
    "decimal": DECIMAL,
}


def get_numeric(kind=None, settings=None):
    """Resolve a kind instance, a registered name, or the configured default."""
    if isinstance(kind, Numeric):
        return kind

    settings = settings or {}
    name = kind or settings.get("numeric_type", "float64")
    if name not in NUMERIC_KINDS:
        raise E.ConfigurationError(E.ERROR_MESSAGES["5001"] + str(name), code="5001")

    precision = settings.get("decimal_precision")
    if name == "decimal" and precision and precision != DECIMAL.precision:
        return DecimalNumeric(precision)
    return NUMERIC_KINDS[name]
