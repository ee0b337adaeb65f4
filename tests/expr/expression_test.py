import unittest

from minilang.expr.lexical import (BinaryExpression, Literal, LogicalExpression, UnaryExpression, build_tree,
                                   parse_expression, to_postfix)
from minilang.lang.error import ScriptSyntaxError
from minilang.lang.lexer import lex


def parse(expr):
    return parse_expression(lex(expr))


def postfix(expr):
    return [token.value for token in to_postfix(lex(expr))]


class ToPostfixTestCase(unittest.TestCase):

    def test_to_postfix(self):
        cases = {
            "1": [1.0],
            "1 + 2": [1.0, 2.0, "+"],
            "1 + 2 * 3": [1.0, 2.0, 3.0, "*", "+"],
            "(1 + 2) * 3": [1.0, 2.0, "+", 3.0, "*"],
            "1 - 2 - 3": [1.0, 2.0, "-", 3.0, "-"],
            "8 / 4 / 2": [8.0, 4.0, "/", 2.0, "/"],
            "a > 1 AND b < 2 OR c": ["a", 1.0, ">", "b", 2.0, "<", "AND", "c", "OR"],
            "a == b != c": ["a", "b", "==", "c", "!="],
            "NOT a == b": ["a", "b", "==", "NOT"],
            "NOT a AND b": ["a", "NOT", "b", "AND"],
            "NOT NOT a": ["a", "NOT", "NOT"],
            "((x))": ["x"],
        }
        for case, expected in cases.items():
            self.assertEqual(expected, postfix(case), case)

    def test_mismatched_parentheses(self):
        should_raise = ["(1 + 2", "1 + 2)", "((1)", ")(", "1 + 2) )"]
        for case in should_raise:
            self.assertRaises(ScriptSyntaxError, to_postfix, lex(case))

    def test_invalid_tokens(self):
        should_raise = ["x = 1", "{ 1 }", "print", "if"]
        for case in should_raise:
            self.assertRaises(ScriptSyntaxError, to_postfix, lex(case))


class BuildTreeTestCase(unittest.TestCase):

    def test_missing_operands(self):
        should_raise = ["+", "1 +", "* 2", "1 2", "1 + 2 3", "NOT", "1 NOT 2", "", "()"]
        for case in should_raise:
            self.assertRaises(ScriptSyntaxError, build_tree, to_postfix(lex(case)))

    def test_error_line(self):
        with self.assertRaises(ScriptSyntaxError) as context:
            parse_expression(lex("1 +", line_num=9))
        self.assertEqual(9, context.exception.line_num)


class ParseExpressionTestCase(unittest.TestCase):

    def test_literals(self):
        cases = {
            "12": Literal(12.0),
            "\"twelve\"": Literal("twelve"),
            "twelve": Literal("twelve", is_name=True),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

        self.assertNotEqual(Literal("x"), Literal("x", is_name=True))

    def test_trees(self):
        cases = {
            "1 + 2 * 3": BinaryExpression("+", Literal(1.0), BinaryExpression("*", Literal(2.0), Literal(3.0))),
            "1 - 2 - 3": BinaryExpression("-", BinaryExpression("-", Literal(1.0), Literal(2.0)), Literal(3.0)),
            "a >= 1 AND \"s\" != b": LogicalExpression(
                "AND",
                BinaryExpression(">=", Literal("a", is_name=True), Literal(1.0)),
                BinaryExpression("!=", Literal("s"), Literal("b", is_name=True))),
            "NOT x OR y": LogicalExpression(
                "OR", UnaryExpression("NOT", Literal("x", is_name=True)), Literal("y", is_name=True)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case), case)

    def test_expr(self):
        cases = {
            "1 + 2 * 3": "(1 + (2 * 3))",
            "(1 + 2) * 3": "((1 + 2) * 3)",
            "x / 0.5 == \"a\"": "((x / 0.5) == \"a\")",
            "NOT a AND b OR c": "(((NOT a) AND b) OR c)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).expr, case)

    def test_logical_nodes(self):
        self.assertIsInstance(parse("a AND b"), LogicalExpression)
        self.assertIsInstance(parse("a OR b"), LogicalExpression)
        self.assertNotIsInstance(parse("a + b"), LogicalExpression)

    def test_display(self):
        expected = ("BinaryExpression(expr='(1 + x)', nodes=[\n"
                    "    Literal(expr='1'),\n"
                    "    Literal(expr='x')\n"
                    "])")
        self.assertEqual(expected, parse("1 + x").display())


if __name__ == '__main__':
    unittest.main()
