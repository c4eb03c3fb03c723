"""Line-oriented text input and output for the console game."""

import logging
import sys
from typing import TextIO

logger = logging.getLogger(__name__)

END_OF_INPUT = "!END OF INPUT"


class EndOfInputError(EOFError):
    """Raised when the input stream ends while the game is waiting for input."""

    def __init__(self, message: str = END_OF_INPUT) -> None:
        super().__init__(message)


class UserIo:
    """
    Prompt/response I/O over a pair of text streams.

    Nothing here knows about blackjack; the game passes text in and reads
    raw lines back.
    """

    def __init__(
        self,
        in_stream: TextIO | None = None,
        out_stream: TextIO | None = None,
    ) -> None:
        """
        Initialize the transport.

        Args:
            in_stream: Where answers are read from (defaults to stdin)
            out_stream: Where prompts and messages go (defaults to stdout)
        """
        self._in = in_stream if in_stream is not None else sys.stdin
        self._out = out_stream if out_stream is not None else sys.stdout

    def print(self, text: str = "") -> None:
        """Write text without a line break."""
        self._out.write(text)
        self._out.flush()

    def println(self, text: str = "") -> None:
        """Write a line of text."""
        self.print(text + "\n")

    def prompt(self, text: str) -> str:
        """
        Show a prompt and read one line of input.

        Returns:
            The line with its trailing newline removed

        Raises:
            EndOfInputError: If the input stream is exhausted
        """
        self.print(text)
        line = self._in.readline()
        if not line:
            logger.debug("Input stream exhausted at prompt %r", text)
            raise EndOfInputError()
        return line.rstrip("\r\n")

    def prompt_int(self, text: str) -> int:
        """Prompt until the answer is a whole number."""
        while True:
            answer = self.prompt(text).strip()
            try:
                return int(answer)
            except ValueError:
                self.println("!NUMBER EXPECTED - RETRY INPUT LINE")

    def prompt_yes_no(self, text: str) -> bool:
        """Prompt for a yes/no answer; anything starting with Y counts as yes."""
        return self.prompt(text).strip().upper().startswith("Y")
