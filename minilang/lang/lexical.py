"""Statement parsing for minilang. Note that this module does not group source lines (see grouper.py) or parse
expressions (see expr/lexical.py), but rather turns the token list of one logical statement into a statement node.

Statement grammar can be loosely defined as follows:

```
<print_stmt>  ::= "print" "(" <expr> ")"
<assign_stmt> ::= <identifier> "=" <expr>            ; creates or overwrites the variable
<if_stmt>     ::= "if" "(" <expr> ")" "{" <stmt>* "}"  ; condition ends at the first ")"
                                                     ; body may span lines and contain nested ifs
```

Every statement records the source line it started on, for error messages.
"""

from abc import abstractmethod, ABC

from minilang.expr.lexical import parse_expression
from minilang.lang.error import ScriptSyntaxError
from minilang.lang.lexer import TokenType


class Grammar(ABC):
    """Superclass representing any statement in the minilang language."""

    def __init__(self, line_num):
        """Assumes check_grammar has been run."""
        self.line_num = line_num
        self._cls = type(self).__name__

    @staticmethod
    @abstractmethod
    def check_grammar(tokens):
        """This method should check the first tokens of a statement and return whether or not they introduce this kind
        of statement. Malformed statements are reported by parse, not here.
        """

    @classmethod
    @abstractmethod
    def parse(cls, tokens, line_num):
        """This method should build a statement from tokens, raising a ScriptSyntaxError if they are malformed."""

    @property
    @abstractmethod
    def nodes(self):
        """Child expressions and statements of this statement."""

    @classmethod
    def infer(cls, tokens, line_num):
        """Infers the type of statement that tokens represent and returns a parsed object of the correct subclass."""
        for subclass in cls.__subclasses__():
            if subclass.check_grammar(tokens):
                return subclass.parse(tokens, line_num)

        raise ScriptSyntaxError("unknown statement starting with '{}'", str(tokens[0].value), diagnosis=False,
                                line_num=line_num)

    def display(self, indents=0):
        """Recursively displays statement tree, in the same format as Expression.display."""
        result = f"{'    ' * indents}{self._cls}({self._header()}"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def _header(self):
        return f"line={self.line_num}"

    def __repr__(self):
        return f"{self._cls}({', '.join(repr(node) for node in self.nodes)})"

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.nodes == other.nodes


class PrintStmt(Grammar):
    """print(<expr>): hands the value of <expr> to the output."""

    def __init__(self, value, line_num=None):
        super().__init__(line_num)
        self.value = value

    @staticmethod
    def check_grammar(tokens):
        return tokens[0].type is TokenType.KEYWORD and tokens[0].value == "print"

    @classmethod
    def parse(cls, tokens, line_num):
        __, *rest = tokens
        if not rest or rest[0].type is not TokenType.LEFT_PAREN or rest[-1].type is not TokenType.RIGHT_PAREN:
            raise ScriptSyntaxError("'print' syntax must use parentheses", diagnosis=False, line_num=line_num)

        argument = rest[1:-1]
        if not argument:
            raise ScriptSyntaxError("'print' requires an argument", diagnosis=False, line_num=line_num)

        return cls(parse_expression(argument), line_num)

    @property
    def nodes(self):
        return [self.value]


class AssignStmt(Grammar):
    """<identifier> = <expr>: binds the value of <expr> to the variable."""

    def __init__(self, variable, value, line_num=None):
        super().__init__(line_num)
        self.variable = variable
        self.value = value

    @staticmethod
    def check_grammar(tokens):
        return starts_assignment(tokens, 0)

    @classmethod
    def parse(cls, tokens, line_num):
        name, __, *rest = tokens
        if not rest:
            raise ScriptSyntaxError("assignment to '{}' requires a value", name.value, diagnosis=False,
                                    line_num=line_num)
        return cls(name.value, parse_expression(rest), line_num)

    @property
    def nodes(self):
        return [self.value]

    def _header(self):
        return f"variable='{self.variable}', {super()._header()}"

    def __eq__(self, other):
        return super().__eq__(other) and self.variable == other.variable


class IfStmt(Grammar):
    """if (<expr>) { <stmt>* }: runs the body if <expr> is truthy."""

    def __init__(self, condition, body, line_num=None):
        super().__init__(line_num)
        self.condition = condition
        self.body = body

    @staticmethod
    def check_grammar(tokens):
        return tokens[0].type is TokenType.IF

    @classmethod
    def parse(cls, tokens, line_num):
        __, *rest = tokens
        if not rest or rest[0].type is not TokenType.LEFT_PAREN:
            raise ScriptSyntaxError("'if' condition must start with '('", diagnosis=False, line_num=line_num)

        condition_end = find(rest, TokenType.RIGHT_PAREN)
        if condition_end == -1:
            raise ScriptSyntaxError("missing closing parenthesis for 'if' condition", diagnosis=False,
                                    line_num=line_num)
        condition = parse_expression(rest[1:condition_end])

        body_start = find(rest, TokenType.LEFT_BRACE, condition_end + 1)
        if body_start == -1:
            raise ScriptSyntaxError("missing opening brace for 'if' body", diagnosis=False, line_num=line_num)

        body_end = matching_brace(rest, body_start)
        if body_end == -1:
            raise ScriptSyntaxError("missing closing brace for 'if' body", diagnosis=False, line_num=line_num)

        if body_end != len(rest) - 1:
            trailing = rest[body_end + 1]
            raise ScriptSyntaxError("unexpected '{}' after 'if' body", str(trailing.value), diagnosis=False,
                                    line_num=trailing.line_num)

        body = [parse_statement(stmt_tokens) for stmt_tokens in split_body(rest[body_start + 1:body_end])]
        return cls(condition, body, line_num)

    @property
    def nodes(self):
        return [self.condition, *self.body]


def find(tokens, typ, start=0):
    """Index of the first token of type typ at or after start, or -1."""
    for idx in range(start, len(tokens)):
        if tokens[idx].type is typ:
            return idx
    return -1


def matching_brace(tokens, start):
    """Index of the RightBrace that closes the LeftBrace at tokens[start], or -1."""
    depth = 0
    for idx in range(start, len(tokens)):
        if tokens[idx].type is TokenType.LEFT_BRACE:
            depth += 1
        elif tokens[idx].type is TokenType.RIGHT_BRACE:
            depth -= 1
            if depth == 0:
                return idx
    return -1


def starts_assignment(tokens, idx):
    """Whether tokens[idx:] begins with <identifier> "="."""
    return (idx + 1 < len(tokens)
            and tokens[idx].type is TokenType.IDENTIFIER
            and tokens[idx + 1].type is TokenType.ASSIGNMENT)


def starts_statement(tokens, idx):
    """Whether tokens[idx] can only be the first token of a statement."""
    return tokens[idx].type in (TokenType.KEYWORD, TokenType.IF) or starts_assignment(tokens, idx)


def split_body(tokens):
    """Splits the tokens between the braces of an if body into per-statement token lists. A new statement begins at
    every statement-starting token that is not nested inside an inner block.
    """
    statements = []
    current = []
    depth = 0

    for idx, token in enumerate(tokens):
        if depth == 0 and current and starts_statement(tokens, idx):
            statements.append(current)
            current = []

        if token.type is TokenType.LEFT_BRACE:
            depth += 1
        elif token.type is TokenType.RIGHT_BRACE:
            depth -= 1
        current.append(token)

    if current:
        statements.append(current)
    return statements


def parse_statement(tokens, line_num=None):
    """Parses the tokens of one statement. line_num defaults to the line of the first token."""
    if not tokens:
        raise ScriptSyntaxError("empty statement", diagnosis=False, line_num=line_num)

    if line_num is None:
        line_num = tokens[0].line_num

    try:
        return Grammar.infer(tokens, line_num)
    except ScriptSyntaxError as error:
        if error.line_num is None:
            error.line_num = line_num
        raise
