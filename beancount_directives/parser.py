import functools
import logging

from lark import Lark, Token
from lark.exceptions import UnexpectedCharacters, UnexpectedInput, VisitError
from lark.exceptions import UnexpectedToken as LarkUnexpectedToken

from beancount_directives import constants
from beancount_directives.data_types import Directive
from beancount_directives.errors import ParseError, UnexpectedToken
from beancount_directives.transformer import DirectiveTransformer


@functools.cache
def make_parser() -> Lark:
    return Lark.open_from_package(
        constants.PACKAGE_NAME,
        constants.GRAMMAR_FILE,
        (constants.GRAMMAR_FOLDER,),
        parser="lalr",
        lexer="basic",
        maybe_placeholders=True,
    )


def to_parse_error(text: str, exc: UnexpectedInput) -> UnexpectedToken:
    if isinstance(exc, UnexpectedCharacters):
        return UnexpectedToken.at(
            f"Unexpected character {exc.char!r}", text, exc.pos_in_stream
        )
    if isinstance(exc, LarkUnexpectedToken):
        token = exc.token
        expected = ", ".join(sorted(exc.expected))
        if token.type == constants.END_TOKEN_TYPE:
            return UnexpectedToken.at(
                f"Unexpected end of document, expected one of {expected}",
                text,
                len(text),
            )
        return UnexpectedToken.at(
            f"Unexpected {token.type} token {token.value!r}, expected one of {expected}",
            text,
            token.start_pos,
        )
    pos = exc.pos_in_stream if exc.pos_in_stream is not None else len(text)
    return UnexpectedToken.at(str(exc), text, pos)


def tokenize(text: str) -> list[Token]:
    """Split a document into lark tokens.

    Whitespace, line breaks and indentation are kept as tokens of their own,
    `///` comment lines are dropped.
    """
    logger = logging.getLogger(__name__)
    try:
        tokens = list(make_parser().lex(text))
    except UnexpectedInput as exc:
        raise to_parse_error(text, exc) from exc
    for token in tokens:
        logger.log(
            constants.VERBOSE_LOG_LEVEL,
            "Token %s %r at %s:%s",
            token.type,
            token.value,
            token.line,
            token.column,
        )
    logger.debug("Tokenized %s tokens", len(tokens))
    return tokens


def parse(text: str) -> list[Directive]:
    """Parse a whole document into its directives, in document order.

    The first error ends parsing and is raised as a `ParseError` subclass
    carrying the location of the offending input.
    """
    logger = logging.getLogger(__name__)
    try:
        tree = make_parser().parse(text)
    except UnexpectedInput as exc:
        raise to_parse_error(text, exc) from exc
    try:
        directives = DirectiveTransformer(text).transform(tree)
    except VisitError as exc:
        if isinstance(exc.orig_exc, ParseError):
            raise exc.orig_exc
        raise
    logger.debug("Parsed %s directives", len(directives))
    return directives
