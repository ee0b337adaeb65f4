"""Handles interactive/command-line mode for the minilang interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """minilang interpreter shell."""
    intro = "minilang interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    def default(self, line):
        """Executes arbitrary minilang statement(s)."""
        pending, self._tmp_line = self._tmp_line, ""
        self.prompt = self._tmp_prompt

        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line, add_to_prev = self.sess.preprocess_line(line, pending)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self.sess.add(line)
                self.sess.run()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return self.default(f"help {arg}")  # ex: 'help = 1' is an assignment, not a command
        print("Welcome to the minilang interpreter!\n\n"
              "minilang has numbers, double-quoted strings and three kinds of statement: \n"
              "assignments ('x = 1 + 2'), prints ('print(x)') and if blocks \n"
              "('if (x > 2) { print(\"big\") }'). Conditions can use == != > < >= <= and \n"
              "AND, OR, NOT. A block whose braces are still open continues on the next line.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        if arg:
            return self.default(f"exit {arg}")  # ex: 'exit = 1' is an assignment, not a command
        return True
