from decimal import Decimal

import numpy as np
import pytest

from exprcalc import error as E
from exprcalc.config_manager import DEFAULT_SETTINGS
from exprcalc.Expressions import Neg, Num
from exprcalc.Interpreter import Environment, FunctionBinding, NumberBinding, ensure_arg_count
from exprcalc.Parser import parse
from exprcalc.Tokenizer import tokenize


def run(source, env):
    return env.eval(parse(tokenize(source, env.numeric)))


def test_precedence(env):
    assert run("2 + 3 * 4", env) == 14
    assert run("2 ^ 3 ^ 2", env) == 64
    assert run("(2 + 3) * 4", env) == 20


def test_implicit_multiplication(env):
    assert run("5(3)", env) == 15
    assert run("5.324 * 54(2)", env) == pytest.approx(run("5.324 * 54 * 2", env))
    assert run("(1 + 1)(2 + 2)", env) == 8


def test_function_and_variable_disambiguation(env):
    env.set_var("x", 2)

    assert run("sqrt(4)", env) == 2
    assert run("x(3)", env) == 6


def test_assignment_is_visible_to_next_evaluation(env):
    assert run("x = 5", env) == 5
    assert run("x^2", env) == 25


def test_assignment_overwrites_function(env):
    run("sqrt = 3", env)

    assert isinstance(env.get("sqrt"), NumberBinding)
    assert run("sqrt(2)", env) == 6


def test_unbound_identifier(env):
    with pytest.raises(E.VarDoesNotExist) as exc:
        run("y + 1", env)

    assert exc.value.name == "y"
    assert exc.value.stage == "interpret"


def test_unbound_call(env):
    with pytest.raises(E.VarDoesNotExist) as exc:
        run("nope(1)", env)

    assert exc.value.name == "nope"


def test_arity_is_enforced(env):
    with pytest.raises(E.TooFewArgs) as exc:
        run("abs()", env)
    assert exc.value.name == "abs"
    assert exc.value.min_args == 1

    with pytest.raises(E.TooManyArgs) as exc:
        run("abs(1, 2)", env)
    assert exc.value.max_args == 1


def test_number_called_with_wrong_argument_count(env):
    with pytest.raises(E.VarIsNotFunction):
        run("pi(1, 2)", env)

    with pytest.raises(E.VarIsNotFunction):
        run("pi()", env)


def test_function_used_like_variable(env):
    with pytest.raises(E.FunctionNameUsedLikeVar) as exc:
        run("sqrt + 1", env)

    assert exc.value.name == "sqrt"


def test_only_variables_can_be_assigned(env):
    with pytest.raises(E.UnsupportedAssignment):
        run("2 = 3", env)

    with pytest.raises(E.UnsupportedAssignment):
        run("x = y = 3", env)


def test_completed_assignments_survive_later_errors(env):
    with pytest.raises(E.VarDoesNotExist):
        run("(a = 2) + b", env)

    assert env.get("a") == NumberBinding(2.0)


def test_call_arguments_run_before_lookup(env):
    with pytest.raises(E.VarDoesNotExist):
        run("nofunc(k = 4)", env)

    assert run("k", env) == 4


def test_repeated_evaluation_is_idempotent(env):
    env.set_var("x", 3)
    tree = parse(tokenize("x^2 + sqrt(x) * pi"))

    assert env.eval(tree) == env.eval(tree)


def test_negation_and_absolute_value(env):
    assert run("-3 + 5", env) == 2
    assert run("-2^2", env) == -4
    assert run("|0 - 3|", env) == 3
    assert run("abs(-7)", env) == 7


def test_remainder_truncates_toward_zero(env):
    assert run("7 % 4", env) == 3
    assert run("(0 - 7) % 3", env) == -1
    assert run("7 % -3", env) == 1


def test_factorial(env):
    assert run("5!", env) == 120
    assert run("0!", env) == 1
    assert run("3!!", env) == 720
    assert run("factorial(4)", env) == 24


def test_factorial_rejects_negative_and_fractional_input(env):
    with pytest.raises(E.InvalidFactorialArgument):
        run("(0 - 1)!", env)

    with pytest.raises(E.InvalidFactorialArgument):
        run("2.5!", env)


def test_factorial_too_large(env):
    with pytest.raises(E.NumberTooLarge):
        run("171!", env)

    with pytest.raises(E.NumberTooLarge):
        run("2000!", env)


def test_division_by_zero(env):
    with pytest.raises(E.DivisionByZero):
        run("1 / 0", env)

    with pytest.raises(E.DivisionByZero):
        run("5 % 0", env)


def test_domain_errors(env):
    with pytest.raises(E.MathDomainError):
        run("sqrt(0 - 1)", env)

    with pytest.raises(E.MathDomainError):
        run("(0 - 8)^(1/3)", env)

    with pytest.raises(E.MathDomainError):
        run("ln(0)", env)


def test_overflow(env):
    with pytest.raises(E.NumberTooLarge):
        run("10^400", env)
    with pytest.raises(E.NumberTooLarge):
        run("10^200 * 10^200", env)
    with pytest.raises(E.NumberTooLarge):
        run("0 - 10^300 * 10^300", env)


def test_infinite_host_value_is_kept(env):
    env.set_var("big", float("inf"))

    assert run("big * 2", env) == float("inf")


def test_scientific_functions(env):
    assert run("log(1000)", env) == pytest.approx(3)
    assert run("log(8, 2)", env) == pytest.approx(3)
    assert run("ln(e)", env) == pytest.approx(1)
    assert run("exp(0)", env) == 1
    assert run("sin(pi / 2)", env) == pytest.approx(1)
    assert run("cos(0)", env) == 1
    assert run("tan(0)", env) == 0
    assert run("√(9)", env) == 3
    assert run("tau / π", env) == pytest.approx(2)


def test_log_rejects_bad_base(env):
    with pytest.raises(E.MathDomainError):
        run("log(8, 1)", env)

    with pytest.raises(E.TooManyArgs):
        run("log(8, 2, 3)", env)


def test_variadic_min_max(env):
    assert run("max(1, 5, 3)", env) == 5
    assert run("min(4, 2, 8, 6)", env) == 2

    with pytest.raises(E.TooFewArgs):
        run("max()", env)


def test_degree_mode():
    env = Environment.default(settings={**DEFAULT_SETTINGS, "degree_mode": True})

    assert run("sin(90)", env) == pytest.approx(1)
    assert run("cos(180)", env) == pytest.approx(-1)


def test_host_defined_bindings(env):
    env.set("rate", 3)
    env.set_function("double", lambda numeric, args: args[0] * 2)
    env.set_function("count", lambda numeric, args: numeric.convert(len(args)), 0, 3)

    assert env.get("rate") == NumberBinding(3.0)
    assert run("double(rate)", env) == 6
    assert run("count()", env) == 0
    assert run("count(1, 2, 3)", env) == 3
    with pytest.raises(E.TooManyArgs):
        run("count(1, 2, 3, 4)", env)


def test_set_accepts_binding_objects(env):
    env.set("half", FunctionBinding(lambda numeric, args: args[0] / 2))
    env.set("ten", NumberBinding(10.0))

    assert run("half(ten)", env) == 5


def test_delete(env):
    env.set_var("x", 1)

    assert env.delete("x") == NumberBinding(1.0)
    assert env.delete("x") is None
    assert "x" not in env
    with pytest.raises(E.VarDoesNotExist):
        run("x", env)


def test_empty_environment_has_no_constants():
    env = Environment()

    assert len(env) == 0
    with pytest.raises(E.VarDoesNotExist):
        run("pi", env)


def test_default_environment_names(env):
    for name in ["pi", "π", "e", "tau", "abs", "sqrt", "√", "factorial",
                 "sin", "cos", "tan", "log", "ln", "exp", "min", "max"]:
        assert name in env


def test_copy_is_independent(env):
    clone = env.copy()
    run("z = 1", clone)

    assert "z" in clone
    assert "z" not in env


def test_names_are_case_sensitive(env):
    env.set_var("X", 1)

    with pytest.raises(E.VarDoesNotExist):
        run("x", env)


def test_deep_host_tree_fails_cleanly(env):
    tree = Num(1.0)
    for _ in range(5000):
        tree = Neg(tree)

    with pytest.raises(E.EvaluationTooDeep) as exc:
        env.eval(tree)

    assert isinstance(exc.value, E.TooDeepError)
    assert exc.value.stage == "interpret"


def test_ensure_arg_count():
    ensure_arg_count(1, 2, 2, "f")
    ensure_arg_count(0, None, 10, "f")

    with pytest.raises(E.TooFewArgs):
        ensure_arg_count(1, 2, 0, "f")
    with pytest.raises(E.TooManyArgs):
        ensure_arg_count(1, 2, 3, "f")


def test_float32_environment():
    env = Environment.default(numeric="float32", settings=DEFAULT_SETTINGS)

    result = run("1.5 * 2", env)
    assert isinstance(result, np.float32)
    assert result == 3
    assert run("5!", env) == 120
    assert run("2^10", env) == 1024

    with pytest.raises(E.NumberTooLarge):
        run("35!", env)
    with pytest.raises(E.MathDomainError):
        run("sqrt(0 - 1)", env)


def test_decimal_environment():
    env = Environment.default(numeric="decimal", settings=DEFAULT_SETTINGS)

    assert run("0.1 + 0.2", env) == Decimal("0.3")
    assert run("2^3", env) == 8
    assert run("10^60 % 7", env) == 1
    assert run("(0 - 10^60) % 7", env) == -1
    assert run("5!", env) == 120
    assert run("7 % 3", env) == 1
    assert str(run("pi", env)).startswith("3.14159265358979323846")
    assert str(run("sqrt(2)", env)).startswith("1.41421356237309504880")

    with pytest.raises(E.DivisionByZero):
        run("1 / 0", env)
    with pytest.raises(E.MathDomainError):
        run("ln(0)", env)
    with pytest.raises(E.MathDomainError):
        run("(0 - 8)^(1/3)", env)


def test_literal_too_large_for_float32():
    env = Environment.default(numeric="float32", settings=DEFAULT_SETTINGS)
    tree = parse(tokenize("1" + "0" * 39))

    with pytest.raises(E.NumberTooLarge):
        env.eval(tree)
