"""Tree-walking interpreter for minilang statements.

There is exactly one environment per run: a plain dict of variable name to value (float, str or bool). if bodies
run against the same dict as the statements around them, so assignments inside a body are visible afterwards.
"""

from minilang.expr.lexical import BinaryExpression, Literal, LogicalExpression, UnaryExpression
from minilang.lang.error import ScriptRuntimeError
from minilang.lang.lexical import AssignStmt, IfStmt, PrintStmt
from minilang.lang.numerical import format_value


def _type_name(value):
    if isinstance(value, bool):
        return "boolean"
    elif isinstance(value, float):
        return "number"
    return "string"


def _check_operands(operator, left, right, *types):
    """Raises a ScriptRuntimeError unless left and right are both one of types. bools never count as numbers."""
    for typ in types:
        if all(isinstance(value, typ) and not isinstance(value, bool) for value in (left, right)):
            return
    msg = "unsupported operand types for '{}': {} and {}"
    raise ScriptRuntimeError(msg, (operator, _type_name(left), _type_name(right)), diagnosis=False)


def _divide(left, right):
    if right == 0:
        raise ScriptRuntimeError("division by zero", diagnosis=False)
    return left / right


def _strict_equals(left, right):
    return type(left) is type(right) and left == right


ARITHMETIC = {
    "+": lambda left, right: left + right,
    "-": lambda left, right: left - right,
    "*": lambda left, right: left * right,
    "/": _divide,
}

COMPARISON = {
    ">": lambda left, right: left > right,
    "<": lambda left, right: left < right,
    ">=": lambda left, right: left >= right,
    "<=": lambda left, right: left <= right,
}

EQUALITY = {
    "==": _strict_equals,
    "!=": lambda left, right: not _strict_equals(left, right),
}


def apply_binary(operator, left, right):
    """Applies an arithmetic/comparison operator to two evaluated operands."""
    if operator == "+":
        _check_operands(operator, left, right, float, str)
    elif operator in ARITHMETIC:
        _check_operands(operator, left, right, float)
    elif operator in COMPARISON:
        _check_operands(operator, left, right, float, str)
    elif operator not in EQUALITY:
        raise ScriptRuntimeError("unknown operator '{}'", operator, diagnosis=False)

    apply = ARITHMETIC.get(operator) or COMPARISON.get(operator) or EQUALITY[operator]
    return apply(left, right)


def apply_logical(operator, left, right):
    """Combines two evaluated operands. Both sides have always been evaluated already."""
    if operator == "AND":
        return left and right
    elif operator == "OR":
        return left or right
    raise ScriptRuntimeError("unknown logical operator '{}'", operator, diagnosis=False)


class Interpreter:
    """Executes statements against one environment. output is called with every printed value (emit if not given).
    If legacy_strings, string literals that match a bound variable name evaluate to that variable (and warn is called
    with the name).
    """

    def __init__(self, environment=None, output=None, legacy_strings=False, warn=None):
        self.environment = {} if environment is None else environment
        self.output = emit if output is None else output
        self.legacy_strings = legacy_strings
        self.warn = warn

        self._statements = {
            PrintStmt: self.execute_print,
            AssignStmt: self.execute_assignment,
            IfStmt: self.execute_if,
        }
        self._expressions = {
            Literal: self.evaluate_literal,
            BinaryExpression: self.evaluate_binary,
            LogicalExpression: self.evaluate_logical,
            UnaryExpression: self.evaluate_unary,
        }

    def run(self, statements):
        """Executes statements in order. The first error aborts the run."""
        for statement in statements:
            self.execute(statement)

    def execute(self, statement):
        execute = self._statements.get(type(statement))
        if execute is None:
            raise ScriptRuntimeError("unknown statement type '{}'", type(statement).__name__, internal=True)

        try:
            execute(statement)
        except ScriptRuntimeError as error:
            if error.line_num is None:
                error.line_num = statement.line_num
            raise

    def execute_print(self, statement):
        self.output(self.evaluate(statement.value))

    def execute_assignment(self, statement):
        self.environment[statement.variable] = self.evaluate(statement.value)

    def execute_if(self, statement):
        if self.evaluate(statement.condition):
            self.run(statement.body)  # same environment: no block scoping

    def evaluate(self, node):
        """Evaluates an expression tree to a float, str or bool."""
        evaluate = self._expressions.get(type(node))
        if evaluate is None:
            raise ScriptRuntimeError("unknown expression type '{}'", type(node).__name__, internal=True)
        return evaluate(node)

    def evaluate_literal(self, node):
        if node.is_name:
            return self.environment.get(node.value, node.value)  # unbound names evaluate to themselves

        if self.legacy_strings and isinstance(node.value, str) and node.value in self.environment:
            if self.warn is not None:
                self.warn("string \"{}\" is read as the variable of the same name", node.value, diagnosis=False)
            return self.environment[node.value]

        return node.value

    def evaluate_binary(self, node):
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return apply_binary(node.operator, left, right)

    def evaluate_logical(self, node):
        left = self.evaluate(node.left)
        right = self.evaluate(node.right)
        return apply_logical(node.operator, left, right)

    def evaluate_unary(self, node):
        operand = self.evaluate(node.operand)
        if node.operator == "NOT":
            return not operand
        raise ScriptRuntimeError("unknown operator '{}'", node.operator, diagnosis=False)


def run(statements, environment, output=None):
    """Executes statements against environment, which is mutated in place."""
    Interpreter(environment, output).run(statements)


def emit(value):
    """Default output collaborator: prints value the way minilang displays it."""
    print(format_value(value))
