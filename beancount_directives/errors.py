import dataclasses


@dataclasses.dataclass(frozen=True)
class Location:
    # UTF-8 byte offset into the document
    offset: int
    # 1-based line number
    line: int
    # 1-based column, counted in characters
    column: int

    @classmethod
    def from_pos(cls, text: str, pos: int) -> "Location":
        """Locate a character position of `text`"""
        pos = max(0, min(pos, len(text)))
        line_start = text.rfind("\n", 0, pos) + 1
        return cls(
            offset=len(text[:pos].encode("utf-8")),
            line=text.count("\n", 0, pos) + 1,
            column=pos - line_start + 1,
        )

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column} (byte {self.offset})"


class ParseError(Exception):
    """Base class of every error raised while parsing a document"""

    def __init__(self, message: str, location: Location, context: str = ""):
        self.message = message
        self.location = location
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if not self.context:
            return f"{self.message} at {self.location}"
        return (
            f"{self.message} at {self.location}\n"
            f"{self.context}\n" + ((self.location.column - 1) * " ") + "^"
        )

    @classmethod
    def at(cls, message: str, text: str, pos: int) -> "ParseError":
        pos = max(0, min(pos, len(text)))
        line_start = text.rfind("\n", 0, pos) + 1
        line_end = text.find("\n", line_start)
        if line_end == -1:
            line_end = len(text)
        return cls(
            message,
            Location.from_pos(text, pos),
            context=text[line_start:line_end].rstrip("\r"),
        )


class UnexpectedToken(ParseError):
    """The document does not match the grammar"""


class InvalidDate(ParseError):
    pass


class InvalidEscape(ParseError):
    pass


class InvalidAmount(ParseError):
    pass


class InvalidAccountType(ParseError):
    pass


class InvalidFlag(ParseError):
    pass
