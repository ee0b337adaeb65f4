"""Groups raw source lines into logical statements. A line that opens a brace block is merged with the following
lines until every brace it opened is closed again, so that an entire `if` (nested bodies included) reaches the parser
as one token list. Splitting a block back into sub-statements is the parser's job.

Comments start with '#' (outside of string literals) and run to the end of the line.
"""

from dataclasses import dataclass

from minilang.lang.error import BlockError
from minilang.lang.lexer import TokenType, lex


@dataclass
class Chunk:
    """Tokens of one logical statement, the source line it starts on and its (joined) source text."""
    line_num: int
    tokens: list
    text: str


def strip_comment(line):
    """Removes a trailing '#' comment from line, ignoring '#' inside string literals."""
    in_string = False
    for idx, char in enumerate(line):
        if char == "\"":
            in_string = not in_string
        elif char == "#" and not in_string:
            return line[:idx]
    return line


def preprocess(source_lines):
    """Yields (line_num, line) for every trimmed, non-empty, non-comment line. line_num is 1-based."""
    for line_num, line in enumerate(source_lines, start=1):
        line = strip_comment(line).strip()
        if line:
            yield line_num, line


def brace_depth(tokens):
    """Number of braces opened minus number of braces closed in tokens."""
    depth = 0
    for token in tokens:
        if token.type is TokenType.LEFT_BRACE:
            depth += 1
        elif token.type is TokenType.RIGHT_BRACE:
            depth -= 1
    return depth


def group(source_lines):
    """Returns a list of Chunks, one per logical statement. Raises BlockError if braces are unbalanced by the end of
    source_lines.
    """
    chunks = []
    lines = list(preprocess(source_lines))

    idx = 0
    while idx < len(lines):
        line_num, line = lines[idx]
        tokens = lex(line, line_num)
        idx += 1

        if any(token.type is TokenType.LEFT_BRACE for token in tokens):
            text = [line]
            depth = brace_depth(tokens)

            while depth > 0 and idx < len(lines):
                block_num, block_line = lines[idx]
                block_tokens = lex(block_line, block_num)

                tokens += block_tokens
                text.append(block_line)
                depth += brace_depth(block_tokens)
                idx += 1

            if depth > 0:
                msg = "block starting on line {} is missing a closing '}}'"
                raise BlockError(msg, str(line_num), diagnosis=False, line_num=line_num)
            elif depth < 0:
                msg = "block starting on line {} has an unmatched '}}'"
                raise BlockError(msg, str(line_num), diagnosis=False, line_num=line_num)

            chunks.append(Chunk(line_num, tokens, " ".join(text)))
        else:
            chunks.append(Chunk(line_num, tokens, line))

    return chunks
