# MathEngine.py
"""""
Convenience entry points composing the pipeline.

Pipeline
--------
1) Tokenizer: converts a raw input string into a flat list of tokens.
2) Parser (AST): builds an expression tree (recursive-descent, precedence aware).
3) Interpreter: walks the tree against a long-lived Environment.

Hosts that evaluate the same text many times should call ``parse_expression``
once and ``Environment.eval`` per evaluation.
"""""

import logging

from . import config_manager
from . import error as E
from .Interpreter import Environment
from .NumericEngine import get_numeric
from .Parser import parse
from .Tokenizer import TokenizeOptions, tokenize

logger = logging.getLogger(__name__)


def parse_expression(source, numeric=None, settings=None):
    """Tokenize and parse ``source`` without evaluating it."""
    if settings is None:
        settings = config_manager.load_setting_value("all")
    try:
        tokens = tokenize(source, get_numeric(numeric, settings), TokenizeOptions.from_settings(settings))
        return parse(tokens, settings.get("max_depth"))
    except E.MathError as e:
        e.equation = source
        raise


def evaluate(source, env=None, numeric=None, settings=None):
    """Main API: tokenize → parse → evaluate.

    With no ``env`` a fresh default environment is built, so assignments only
    persist when the caller passes its own. Numbers are parsed in the kind of
    ``env`` when one is given, otherwise in ``numeric`` or the configured
    ``numeric_type``.

    Raises the failing stage's MathError subclass with ``equation`` set to
    ``source``; ``error.stage`` tells which stage it was.
    """
    if settings is None:
        settings = config_manager.load_setting_value("all")
    if env is None:
        env = Environment.default(numeric, settings)

    finaler_baum = parse_expression(source, env.numeric, settings)
    try:
        ergebnis = env.eval(finaler_baum)
    except E.MathError as e:
        e.equation = source
        raise

    logger.debug("%r evaluated to %s", source, ergebnis)
    return ergebnis
