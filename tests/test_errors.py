import textwrap

import pytest
from lark import Token

from beancount_directives.errors import InvalidAccountType
from beancount_directives.errors import InvalidAmount
from beancount_directives.errors import InvalidDate
from beancount_directives.errors import InvalidEscape
from beancount_directives.errors import InvalidFlag
from beancount_directives.errors import Location
from beancount_directives.errors import ParseError
from beancount_directives.errors import UnexpectedToken
from beancount_directives.parser import parse
from beancount_directives.transformer import DirectiveTransformer


@pytest.mark.parametrize(
    "text, pos, expected",
    [
        ("", 0, Location(offset=0, line=1, column=1)),
        ("abc", 2, Location(offset=2, line=1, column=3)),
        ("abc\ndef", 4, Location(offset=4, line=2, column=1)),
        ("abc\ndef", 6, Location(offset=6, line=2, column=3)),
        ("中文\nab", 4, Location(offset=8, line=2, column=2)),
        ("abc", 10, Location(offset=3, line=1, column=4)),
    ],
)
def test_location_from_pos(text: str, pos: int, expected: Location):
    assert Location.from_pos(text, pos) == expected


def test_parse_error_message():
    error = ParseError.at("Boom", "first\nsecond line\nthird", 9)
    assert error.location == Location(offset=9, line=2, column=4)
    assert error.context == "second line"
    assert str(error) == "Boom at line 2, column 4 (byte 9)\nsecond line\n   ^"


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "2021-13-01 close Assets:A",
            Location(offset=0, line=1, column=1),
        ),
        (
            "2021-02-30 close Assets:A",
            Location(offset=0, line=1, column=1),
        ),
        (
            "2021-01-01 close Assets:A\n2021-00-10 open Assets:B",
            Location(offset=26, line=2, column=1),
        ),
        (
            textwrap.dedent(
                """\
                2021-01-01 * "ok"
                  Assets:A  1 USD
                2021-04-31 balance Assets:A 1 USD
                """
            ),
            Location(offset=36, line=3, column=1),
        ),
    ],
)
def test_invalid_date(text: str, expected: Location):
    with pytest.raises(InvalidDate) as exc_info:
        parse(text)
    assert exc_info.value.location == expected


@pytest.mark.parametrize(
    "date",
    [
        "2020-02-29",
        "2021-1-1",
        "2021-12-31",
        "0001-01-01",
        "9999-12-31",
    ],
)
def test_valid_date(date: str):
    (close,) = parse(f"{date} close Assets:A")
    year, month, day = map(int, date.split("-"))
    assert (close.date.year, close.date.month, close.date.day) == (year, month, day)


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            r'2021-01-01 note Assets:A "bad \q escape"',
            Location(offset=30, line=1, column=31),
        ),
        (
            r'2021-01-01 note Assets:A "中文 \q"',
            Location(offset=33, line=1, column=30),
        ),
        (
            r'2021-01-01 note Assets:A "\u12"',
            Location(offset=26, line=1, column=27),
        ),
    ],
)
def test_invalid_escape(text: str, expected: Location):
    with pytest.raises(InvalidEscape) as exc_info:
        parse(text)
    assert exc_info.value.location == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        (
            "2021-01-01 open",
            Location(offset=15, line=1, column=16),
        ),
        (
            "2021-01-01 close Assets:A $",
            Location(offset=26, line=1, column=27),
        ),
        (
            "2021-01-01 close Savings:A",
            Location(offset=17, line=1, column=18),
        ),
        (
            "2021-01-01 balance Assets:A 10.50",
            Location(offset=28, line=1, column=29),
        ),
        (
            "2021-01-01 open Assets:A ; trailing comment",
            Location(offset=25, line=1, column=26),
        ),
        (
            '2021-01-01 ? "Unknown flag"',
            Location(offset=11, line=1, column=12),
        ),
        (
            '2021-01-01 * "Cost"\n  Assets:A  1 STOCK {1 USD',
            Location(offset=46, line=2, column=27),
        ),
        (
            '2021-01-01 * "Indented"\n Assets:A  1 USD',
            Location(offset=24, line=2, column=1),
        ),
        (
            'option "only-key"',
            Location(offset=17, line=1, column=18),
        ),
    ],
)
def test_unexpected_token(text: str, expected: Location):
    with pytest.raises(UnexpectedToken) as exc_info:
        parse(text)
    assert exc_info.value.location == expected


def test_errors_are_parse_errors():
    with pytest.raises(ParseError):
        parse("2021-02-30 close Assets:A")
    with pytest.raises(ParseError):
        parse("2021-01-01 open")


@pytest.mark.parametrize(
    "method, token, error_type",
    [
        ("FLAG", Token("FLAG", "?", start_pos=3), InvalidFlag),
        ("ACCOUNT", Token("ACCOUNT", "Savings:Cash", start_pos=3), InvalidAccountType),
        ("AMOUNT", Token("AMOUNT", "1..0 USD", start_pos=3), InvalidAmount),
        ("AMOUNT", Token("AMOUNT", "10", start_pos=3), InvalidAmount),
    ],
)
def test_checked_conversions(method: str, token: Token, error_type: type):
    text = "   " + token.value
    transformer = DirectiveTransformer(text)
    with pytest.raises(error_type) as exc_info:
        getattr(transformer, method)(token)
    assert exc_info.value.location == Location(offset=3, line=1, column=4)
