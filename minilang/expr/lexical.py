"""Expression syntax tree and parser for minilang.

Expressions are parsed with the shunting-yard algorithm: tokens are first reordered into postfix (reverse Polish)
order using an explicit operator stack, and the postfix sequence is then reduced to a tree with a node stack.

```
<expr> ::= <number> | <string> | <identifier>      ; "literal"
         | <expr> <binary_op> <expr>               ; "binary expression"
         | <expr> ("AND" | "OR") <expr>            ; "logical expression"
         | "NOT" <expr>                            ; "unary expression"
         | "(" <expr> ")"
```

All binary operators are left-associative. Precedence, from loosest to tightest:

```
OR  <  AND  <  NOT  <  == !=  <  > < >= <=  <  + -  <  * /
```
"""

from abc import ABC, abstractmethod

from minilang.lang.error import ScriptSyntaxError
from minilang.lang.lexer import TokenType
from minilang.lang.numerical import format_number


PRECEDENCE = {
    "OR": 1,
    "AND": 2,
    "NOT": 3,
    "==": 4,
    "!=": 4,
    ">": 5,
    "<": 5,
    ">=": 5,
    "<=": 5,
    "+": 6,
    "-": 6,
    "*": 7,
    "/": 7,
}

OPERANDS = (TokenType.NUMBER, TokenType.IDENTIFIER, TokenType.STRING)
OPERATORS = (TokenType.OPERATOR, TokenType.COMPARISON_OPERATOR, TokenType.LOGICAL)
UNARY = ["NOT"]


class Expression(ABC):
    """Superclass that represents any node of a minilang expression tree."""

    def __init__(self):
        self._cls = type(self).__name__

    @property
    @abstractmethod
    def nodes(self):
        """Child expressions of this node, in evaluation order."""

    @property
    @abstractmethod
    def expr(self):
        """Source-like rendering of this node. Compound nodes are fully parenthesized."""

    def display(self, indents=0):
        """Recursively displays Expression tree with readable format.

        Format:
        <Expression>(expr='<expr>', nodes=[
            <Expression>(expr='<expr>', nodes=[
                ...
                <Expression>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.expr == other.expr and self.nodes == other.nodes

    def __hash__(self):
        return hash(self.expr)


class Literal(Expression):
    """A number, string or identifier. Identifiers (is_name) are looked up in the environment when evaluated."""

    def __init__(self, value, is_name=False):
        super().__init__()
        self.value = value
        self.is_name = is_name

    @classmethod
    def from_token(cls, token):
        return cls(token.value, is_name=token.type is TokenType.IDENTIFIER)

    @property
    def nodes(self):
        return []

    @property
    def expr(self):
        if self.is_name:
            return self.value
        elif isinstance(self.value, str):
            return f"\"{self.value}\""
        return format_number(self.value)

    def __eq__(self, other):
        return isinstance(other, Literal) and (self.value, self.is_name) == (other.value, other.is_name)

    def __hash__(self):
        return hash((self.value, self.is_name))


class BinaryExpression(Expression):
    """Arithmetic or comparison operator applied to two operands."""

    def __init__(self, operator, left, right):
        super().__init__()
        self.operator = operator
        self.left = left
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    @property
    def expr(self):
        return f"({self.left.expr} {self.operator} {self.right.expr})"


class LogicalExpression(BinaryExpression):
    """AND/OR applied to two operands."""


class UnaryExpression(Expression):
    """Prefix operator (only NOT) applied to one operand."""

    def __init__(self, operator, operand):
        super().__init__()
        self.operator = operator
        self.operand = operand

    @property
    def nodes(self):
        return [self.operand]

    @property
    def expr(self):
        return f"({self.operator} {self.operand.expr})"


def _render(tokens):
    """Returns the source-like text of tokens, for error messages."""
    words = []
    for token in tokens:
        if token.type is TokenType.STRING:
            words.append(f"\"{token.value}\"")
        elif token.type is TokenType.NUMBER:
            words.append(format_number(token.value))
        else:
            words.append(str(token.value))
    return " ".join(words)


def is_operator(token):
    return token.type in OPERATORS


def to_postfix(tokens):
    """Reorders infix tokens into postfix order using the shunting-yard algorithm. Parentheses are dropped."""
    stack = []
    output = []

    for token in tokens:
        if token.type in OPERANDS:
            output.append(token)

        elif is_operator(token) and token.value in UNARY:
            stack.append(token)  # prefix operators never pop: their operand has not been read yet

        elif is_operator(token):
            while stack and is_operator(stack[-1]) and PRECEDENCE[stack[-1].value] >= PRECEDENCE[token.value]:
                output.append(stack.pop())
            stack.append(token)

        elif token.type is TokenType.LEFT_PAREN:
            stack.append(token)

        elif token.type is TokenType.RIGHT_PAREN:
            while stack and stack[-1].type is not TokenType.LEFT_PAREN:
                output.append(stack.pop())
            if not stack:
                raise ScriptSyntaxError("mismatched parentheses in '{}'", _render(tokens), diagnosis=False,
                                        line_num=token.line_num)
            stack.pop()

        else:
            raise ScriptSyntaxError("invalid token in expression: '{}'", str(token.value), diagnosis=False,
                                    line_num=token.line_num)

    while stack:
        token = stack.pop()
        if token.type is TokenType.LEFT_PAREN:
            raise ScriptSyntaxError("mismatched parentheses in '{}'", _render(tokens), diagnosis=False,
                                    line_num=token.line_num)
        output.append(token)

    return output


def build_tree(postfix):
    """Reduces a postfix token sequence to a single Expression."""
    stack = []

    for token in postfix:
        if token.type in OPERANDS:
            stack.append(Literal.from_token(token))

        elif token.value in UNARY:
            if not stack:
                raise ScriptSyntaxError("'{}' is missing an operand", token.value, diagnosis=False,
                                        line_num=token.line_num)
            stack.append(UnaryExpression(token.value, stack.pop()))

        else:
            if len(stack) < 2:
                raise ScriptSyntaxError("'{}' is missing an operand", token.value, diagnosis=False,
                                        line_num=token.line_num)
            right = stack.pop()
            left = stack.pop()

            cls = LogicalExpression if token.type is TokenType.LOGICAL else BinaryExpression
            stack.append(cls(token.value, left, right))

    if len(stack) != 1:
        msg = "empty expression" if not stack else "invalid expression '{}'"
        raise ScriptSyntaxError(msg, _render(postfix), diagnosis=False,
                                line_num=postfix[0].line_num if postfix else None)

    return stack[0]


def parse_expression(tokens):
    """Parses tokens into an Expression tree. Raises a ScriptSyntaxError on malformed input."""
    return build_tree(to_postfix(tokens))
