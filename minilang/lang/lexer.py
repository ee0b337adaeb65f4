"""Tokenization of single minilang source lines. The lexer keeps no state between lines: grouping lines into
statements is handled in grouper.py.

Every lexeme on a line is classified as one of the following, in this order:

```
<logical>     ::= "AND" | "OR" | "NOT"             ; whole words only
<brace>       ::= "{" | "}"
<if>          ::= "if"
<operator>    ::= "+" | "-" | "*" | "/"
<comparison>  ::= ">" | "<" | ">=" | "<=" | "==" | "!="
<assignment>  ::= "="
<paren>       ::= "(" | ")"
<string>      ::= '"' <char>* '"'                  ; no escape sequences
<keyword>     ::= "print"
<number>      ::= decimal literal, ex: 12, 1.5, .5, 1e3, 1e-7   ; a leading sign is an operator
<identifier>  ::= [A-Za-z_][A-Za-z0-9_]*
```
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from minilang.lang.error import LexError


class TokenType(Enum):
    LOGICAL = "Logical"
    LEFT_BRACE = "LeftBrace"
    RIGHT_BRACE = "RightBrace"
    IF = "If"
    OPERATOR = "Operator"
    COMPARISON_OPERATOR = "ComparisonOperator"
    ASSIGNMENT = "Assignment"
    LEFT_PAREN = "LeftParen"
    RIGHT_PAREN = "RightParen"
    STRING = "String"
    KEYWORD = "Keyword"
    NUMBER = "Number"
    IDENTIFIER = "Identifier"


@dataclass(frozen=True)
class Token:
    """A classified lexeme. line_num is 1-based, col is the 0-based offset of the lexeme in its line."""
    type: TokenType
    value: object
    line_num: int = field(default=1, compare=False)
    col: int = field(default=0, compare=False)

    def __repr__(self):
        return f"{self.type.value}({self.value!r})"


LOGICAL = ["AND", "OR", "NOT"]
KEYWORDS = ["print", "if"]
OPERATORS = ["+", "-", "*", "/"]
COMPARISONS = [">", "<", ">=", "<=", "==", "!="]

# two-character comparisons must come before the single-character class, or "==" would lex as "=" "="
# signed exponents must come before the operator class, or "1e-7" would lex as "1e" "-" "7"
SCANNER = re.compile(r'"[^"]*"|\b(?:AND|OR|NOT)\b|>=|<=|==|!='
                     r'|(?:\d+\.?\d*|\.\d+)[eE][+\-]\d+(?![^\s+\-*/=<>!(){}])'
                     r'|[+\-*/=<>!(){}]|[^\s+\-*/=<>!(){}]+')
NUMBER = re.compile(r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
IDENTIFIER = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

SINGLE = {
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    "if": TokenType.IF,
    "=": TokenType.ASSIGNMENT,
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
}


def classify(word):
    """Returns (TokenType, value) of word, or None if word is not a valid lexeme."""
    if word in LOGICAL:
        return TokenType.LOGICAL, word
    elif word in SINGLE:
        return SINGLE[word], word
    elif word in OPERATORS:
        return TokenType.OPERATOR, word
    elif word in COMPARISONS:
        return TokenType.COMPARISON_OPERATOR, word
    elif len(word) > 1 and word.startswith("\"") and word.endswith("\""):
        return TokenType.STRING, word[1:-1]
    elif is_keyword(word):
        return TokenType.KEYWORD, word
    elif is_number(word):
        return TokenType.NUMBER, float(word)
    elif is_identifier(word):
        return TokenType.IDENTIFIER, word
    return None


def is_keyword(word):
    return word in KEYWORDS


def is_number(word):
    return NUMBER.fullmatch(word) is not None


def is_identifier(word):
    return IDENTIFIER.fullmatch(word) is not None


def lex(line, line_num=1):
    """Converts one line of source into a list of Tokens. Raises a LexError on the first unrecognized lexeme."""
    tokens = []
    for match in SCANNER.finditer(line):
        word = match.group()
        classified = classify(word)
        if classified is None:
            start = match.start()
            raise LexError("'{}' contains unrecognized token '{}'", (line, word), start=start,
                           end=start + len(word), line_num=line_num)

        typ, value = classified
        tokens.append(Token(typ, value, line_num, match.start()))
    return tokens
