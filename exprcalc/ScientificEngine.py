# ScientificEngine
"""Built-in constants and functions seeded into default environments.

Every function takes the numeric kind and the already evaluated argument list;
the interpreter checks the arity recorded with the binding before calling it.
"""

from . import error as E
from .config_manager import DEFAULT_SETTINGS

# name -> constant method of the numeric kind
CONSTANTS = {
    "pi": "pi",
    "π": "pi",
    "e": "e",
    "tau": "tau",
}


def builtin_abs(numeric, args):
    return numeric.abs(args[0])


def builtin_sqrt(numeric, args):
    return numeric.sqrt(args[0])


def builtin_ln(numeric, args):
    return numeric.ln(args[0])


def builtin_exp(numeric, args):
    return numeric.exp(args[0])


def builtin_log(numeric, args):
    """log(x) is base 10, log(x, base) uses the given base."""
    if len(args) == 1:
        return numeric.log10(args[0])

    number, base = args
    if base <= numeric.zero() or base == numeric.one():
        raise ValueError(f"invalid logarithm base: {base}")
    return numeric.ln(number) / numeric.ln(base)


def builtin_min(numeric, args):
    return min(args)


def builtin_max(numeric, args):
    return max(args)


def make_trig(function_name, degree_mode=False):
    """sin/cos/tan, taking degrees instead of radians when degree_mode is set."""
    def trig(numeric, args):
        value = args[0]
        if degree_mode:
            value = numeric.radians(value)
        return getattr(numeric, function_name)(value)

    trig.__name__ = function_name
    return trig


def make_factorial(max_argument):
    def factorial(numeric, args):
        value = args[0]
        # The iterative default never ends for fractions and is wrong for negatives
        if value < numeric.zero() or not numeric.is_integer(value):
            raise E.InvalidFactorialArgument(value)
        if value > numeric.convert(max_argument):
            raise E.NumberTooLarge(f"factorial argument above {max_argument}")
        return numeric.factorial(value)

    return factorial


def seed_environment(env, settings=None):
    """Bind the default constants and functions into ``env``."""
    settings = settings or DEFAULT_SETTINGS
    numeric = env.numeric
    degree_mode = settings.get("degree_mode", False)

    for name, constant in CONSTANTS.items():
        env.set_var(name, getattr(numeric, constant)())

    env.set_function("abs", builtin_abs)
    env.set_function("sqrt", builtin_sqrt)
    env.set_function("√", builtin_sqrt)
    env.set_function("factorial", make_factorial(
        settings.get("max_factorial_argument", DEFAULT_SETTINGS["max_factorial_argument"])))
    env.set_function("sin", make_trig("sin", degree_mode))
    env.set_function("cos", make_trig("cos", degree_mode))
    env.set_function("tan", make_trig("tan", degree_mode))
    env.set_function("log", builtin_log, 1, 2)
    env.set_function("ln", builtin_ln)
    env.set_function("exp", builtin_exp)
    env.set_function("min", builtin_min, 1, None)
    env.set_function("max", builtin_max, 1, None)
    return env
