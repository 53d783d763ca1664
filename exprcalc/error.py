# error.py
"""Exception hierarchy shared by every stage of the pipeline.

Every error carries a four digit code, the source text it was raised for
(``equation``) and, where the stage knows it, the ``span`` of the offending
source region.
"""


class MathError(Exception):
    stage = None

    def __init__(self, message, code="9999", equation=None, span=None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.equation = equation
        self.span = span

    @property
    def category(self):
        return Error_Dictionary.get(str(self.code)[:1], Error_Dictionary["9"])

    def __repr__(self):
        return f"{self.__class__.__name__}({self.message!r}, code={self.code!r}, span={self.span!r})"


# Common base for the convenience API
EvalError = MathError


class ConfigurationError(MathError):
    stage = "configuration"


# -----------------------------
# Tokenizer
# -----------------------------

class TokenizeError(MathError):
    stage = "tokenize"


class InvalidNumber(TokenizeError):
    def __init__(self, text, span):
        super().__init__(ERROR_MESSAGES["1001"] + repr(text), code="1001", span=span)
        self.text = text


class UnrecognizedChar(TokenizeError):
    def __init__(self, char, span):
        super().__init__(ERROR_MESSAGES["1002"] + repr(char), code="1002", span=span)
        self.char = char


# -----------------------------
# Parser
# -----------------------------

class ParseError(MathError):
    stage = "parse"


class ExpectedValue(ParseError):
    def __init__(self, span):
        super().__init__(ERROR_MESSAGES["2001"], code="2001", span=span)


class ExpectedClosingParen(ParseError):
    def __init__(self, token):
        super().__init__(ERROR_MESSAGES["2002"] + str(token.value), code="2002", span=token.span)
        self.token = token


class UnexpectedToken(ParseError):
    code_value = "2003"

    def __init__(self, token):
        code = self.code_value
        super().__init__(ERROR_MESSAGES[code] + str(token.value), code=code, span=token.span)
        self.token = token


class TrailingToken(UnexpectedToken):
    code_value = "2004"


class UnexpectedEOF(ParseError):
    def __init__(self, span):
        super().__init__(ERROR_MESSAGES["2005"], code="2005", span=span)


class TooDeepError(MathError):
    """Base of the parser and interpreter nesting limits."""


class ExpressionTooDeep(ParseError, TooDeepError):
    """Nesting went past the parser's max_depth."""

    def __init__(self, span):
        super().__init__(ERROR_MESSAGES["2006"], code="2006", span=span)


# -----------------------------
# Interpreter
# -----------------------------

class InterpretError(MathError):
    stage = "interpret"


class TooFewArgs(InterpretError):
    def __init__(self, name, min_args):
        super().__init__(f"{ERROR_MESSAGES['3001']}'{name}' expects at least {min_args}", code="3001")
        self.name = name
        self.min_args = min_args


class TooManyArgs(InterpretError):
    def __init__(self, name, max_args):
        super().__init__(f"{ERROR_MESSAGES['3002']}'{name}' expects at most {max_args}", code="3002")
        self.name = name
        self.max_args = max_args


class VarDoesNotExist(InterpretError):
    def __init__(self, name):
        super().__init__(ERROR_MESSAGES["3003"] + name, code="3003")
        self.name = name


class VarIsNotFunction(InterpretError):
    def __init__(self, name):
        super().__init__(ERROR_MESSAGES["3004"] + name, code="3004")
        self.name = name


class FunctionNameUsedLikeVar(InterpretError):
    def __init__(self, name):
        super().__init__(ERROR_MESSAGES["3005"] + name, code="3005")
        self.name = name


class UnsupportedAssignment(InterpretError):
    def __init__(self, target):
        super().__init__(ERROR_MESSAGES["3006"] + str(target), code="3006")
        self.target = target


class InvalidFactorialArgument(InterpretError):
    def __init__(self, value):
        super().__init__(ERROR_MESSAGES["3007"] + str(value), code="3007")
        self.value = value


class DivisionByZero(InterpretError):
    def __init__(self):
        super().__init__(ERROR_MESSAGES["3008"], code="3008")


class NumberTooLarge(InterpretError):
    def __init__(self, detail=""):
        super().__init__(ERROR_MESSAGES["3009"] + str(detail), code="3009")


class MathDomainError(InterpretError):
    def __init__(self, detail=""):
        super().__init__(ERROR_MESSAGES["3010"] + str(detail), code="3010")


class EvaluationTooDeep(InterpretError, TooDeepError):
    """The tree is deeper than the interpreter's recursion allows."""

    def __init__(self):
        super().__init__(ERROR_MESSAGES["3011"], code="3011")


Error_Dictionary = {

    "1": "Tokenizer Error",
    "2": "Parser Error",
    "3": "Interpreter Error",
    "5": "Configuration Error",
    "9": "Runtime Error"

}

# Error Messages are structured in:
# 1. Digit: Main Error
# 2. Digit: Specification
# 3. and 4. Digit: Error Number

ERROR_MESSAGES = {
    "1001": "Invalid number: ",  # + offending slice
    "1002": "Unrecognized character: ",  # + char

    "2001": "Expected a value.",
    "2002": "Expected ')' but found: ",  # + token
    "2003": "Unexpected token: ",  # + token
    "2004": "Unexpected trailing token: ",  # + token
    "2005": "Unexpected end of input.",
    "2006": "Expression is nested too deeply.",

    "3001": "Too few arguments: ",  # + function
    "3002": "Too many arguments: ",  # + function
    "3003": "Variable does not exist: ",  # + name
    "3004": "Variable is not a function: ",  # + name
    "3005": "Function used like a variable: ",  # + name
    "3006": "Only a variable can be assigned to: ",  # + target
    "3007": "Factorial needs a whole, non-negative number: ",  # + value
    "3008": "Division by zero",
    "3009": "Number too big. ",
    "3010": "Math domain error. ",
    "3011": "Expression is nested too deeply to evaluate.",

    "5001": "Unknown numeric type: ",  # + name
    "5002": "Invalid setting: ",  # + key

    "9999": "Unexpected Error: "  # + error
}
