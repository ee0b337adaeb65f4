"""minilang: a small scripting language front end and tree-walking evaluator.

Basic program flow:
    1. Lexer: splits each source line into tokens (lang/lexer.py)
    2. Grouper: merges the lines of brace blocks into single statements (lang/grouper.py)
    3. Parser: builds a statement tree per statement (lang/lexical.py); expressions are parsed with the
       shunting-yard algorithm (expr/lexical.py)
    4. Interpreter: walks the statement trees against a single, flat environment (lang/interpreter.py)

lang/session.py ties these together, and lang/error.py reports errors.
"""

__version__ = "0.1.0"
