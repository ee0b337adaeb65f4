import unittest

from minilang.lang.error import BlockError
from minilang.lang.grouper import brace_depth, group, strip_comment
from minilang.lang.lexer import TokenType, lex


def lines(source):
    return source.split("\n")


class StripCommentTestCase(unittest.TestCase):

    def test_strip_comment(self):
        cases = {
            "x = 1": "x = 1",
            "x = 1 # one": "x = 1 ",
            "# whole line": "",
            "print(\"#1\") # first": "print(\"#1\") ",
            "print(\"a # b\")": "print(\"a # b\")",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, strip_comment(case), case)


class GroupTestCase(unittest.TestCase):

    def test_single_lines(self):
        chunks = group(lines("x = 1\n\n   print(x)   \n"))

        self.assertEqual([1, 3], [chunk.line_num for chunk in chunks])
        self.assertEqual(["x = 1", "print(x)"], [chunk.text for chunk in chunks])
        self.assertEqual(lex("x = 1"), chunks[0].tokens)

    def test_comments_are_ignored(self):
        chunks = group(lines("# header\nx = 1 # set x\n  # indented comment\nprint(x)"))
        self.assertEqual([2, 4], [chunk.line_num for chunk in chunks])

    def test_block_spanning_lines(self):
        source = "if (x > 1) {\n    print(x)\n    x = 2\n}\nprint(x)"
        chunks = group(lines(source))

        self.assertEqual(2, len(chunks))
        self.assertEqual(1, chunks[0].line_num)
        self.assertEqual(5, chunks[1].line_num)
        self.assertEqual(TokenType.IF, chunks[0].tokens[0].type)
        self.assertEqual(TokenType.RIGHT_BRACE, chunks[0].tokens[-1].type)
        self.assertEqual("if (x > 1) { print(x) x = 2 }", chunks[0].text)

    def test_block_on_one_line(self):
        chunks = group(lines("if (1 == 1) { print(1) }\nprint(2)"))
        self.assertEqual(2, len(chunks))
        self.assertEqual(0, brace_depth(chunks[0].tokens))
        self.assertEqual("if (1 == 1) { print(1) }", chunks[0].text)

    def test_nested_blocks(self):
        source = "if (a) {\n  if (b) {\n    print(1)\n  }\n  print(2)\n}\nprint(3)"
        chunks = group(lines(source))

        self.assertEqual([1, 7], [chunk.line_num for chunk in chunks])
        self.assertEqual(0, brace_depth(chunks[0].tokens))

    def test_tokens_keep_their_lines(self):
        chunks = group(lines("if (a) {\n\n  print(1)\n}"))
        self.assertEqual([1, 1, 1, 1, 1, 3, 3, 3, 3, 4], [token.line_num for token in chunks[0].tokens])

    def test_unbalanced(self):
        should_raise = [
            "if (1==1) { print(1)",
            "if (1==1) {\n  print(1)\n",
            "if (a) {\n  if (b) {\n    print(1)\n}",
            "if (a) { print(1) } }",
        ]
        for case in should_raise:
            self.assertRaises(BlockError, group, lines(case))

        with self.assertRaises(BlockError) as context:
            group(lines("x = 1\nif (x == 1) {\n  print(x)"))
        self.assertEqual(2, context.exception.line_num)

    def test_stray_closing_brace_is_left_to_the_parser(self):
        chunks = group(lines("}"))
        self.assertEqual(1, len(chunks))


if __name__ == '__main__':
    unittest.main()
