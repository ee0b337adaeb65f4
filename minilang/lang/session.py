"""Session control for the minilang language. Ties grouping, parsing and interpretation together to run minilang,
either in command-line mode or file interpretation mode.
"""

from minilang.lang.error import GenericException
from minilang.lang.grouper import brace_depth, group, strip_comment
from minilang.lang.interpreter import Interpreter
from minilang.lang.lexer import lex
from minilang.lang.lexical import parse_statement
from minilang.lang.numerical import format_value


class Session:
    """Governs a minilang session: one environment, shared by every statement that is run in it."""
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path=SH_FILE, cmd_line=False, legacy_strings=False, output=print):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.output = output      # called with the text of every printed value

        self.environment = {}  # variable name: value, for the whole session
        self.to_exec = []      # list of (line num, line text, statement) that have not been run yet
        self.interpreter = Interpreter(self.environment, self.emit, legacy_strings, self.error_handler.warn)

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

            self.add(source)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, pending=""):
        """Preprocesses a line from the command-line. pending is the text of the previous lines of an unfinished
        block. Returns the updated text and whether or not a line continuation is necessary (braces still open).
        """
        text = f"{pending}\n{line}" if pending else line
        depth = sum(brace_depth(lex(strip_comment(source_line))) for source_line in text.split("\n"))
        return text, depth > 0

    def add(self, source):
        """Groups and parses source, queueing its statements. Statements are not run until run is called."""
        for chunk in group(source.split("\n")):
            self.error_handler.register_line(self.path, chunk.text, chunk.line_num)  # in case error is raised

            statement = parse_statement(chunk.tokens, chunk.line_num)
            self.to_exec.append((chunk.line_num, chunk.text, statement))

            self.error_handler.remove_line(self.path)  # error was not raised

    @property
    def statements(self):
        """Statements waiting to be run."""
        return [statement for __, __, statement in self.to_exec]

    def run(self):
        """Runs this session's queued statements in order. Will raise any errors that are encountered."""
        try:
            while self.to_exec:
                line_num, text, statement = self.to_exec.pop(0)
                self.error_handler.register_line(self.path, text, line_num)
                self.interpreter.execute(statement)
                self.error_handler.remove_line(self.path)
        finally:
            if self.cmd_line:
                self.to_exec = []  # a failed command does not leave statements behind

    def emit(self, value):
        """Output collaborator for print statements."""
        self.output(format_value(value))
