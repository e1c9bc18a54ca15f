import dataclasses
import datetime
import decimal
import enum
import typing


@enum.unique
class AccountType(str, enum.Enum):
    ASSETS = "Assets"
    LIABILITIES = "Liabilities"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSES = "Expenses"


@enum.unique
class Flag(str, enum.Enum):
    # "*", the transaction is complete
    CLEARED = "*"
    # "!", the transaction needs attention
    PENDING = "!"


@dataclasses.dataclass(frozen=True)
class Account:
    type: AccountType
    # name segments after the account type, never empty
    segments: tuple[str, ...]

    def __str__(self) -> str:
        return ":".join((self.type.value, *self.segments))


@dataclasses.dataclass(frozen=True)
class Amount:
    # exact value as written, `10.50` keeps its trailing zero
    number: decimal.Decimal
    currency: str

    def __str__(self) -> str:
        return f"{self.number} {self.currency}"


@dataclasses.dataclass(frozen=True)
class Cost:
    amount: Amount
    label: str | None = None


@dataclasses.dataclass(frozen=True)
class Posting:
    flag: Flag
    account: Account
    amount: Amount | None = None
    cost: Cost | None = None
    # per-unit price, written as `@ 1.2 USD`
    price: Amount | None = None
    # total price, written as `@@ 12 USD`
    total_price: Amount | None = None


@dataclasses.dataclass(frozen=True)
class Transaction:
    date: datetime.date
    flag: Flag
    payee: str | None = None
    narration: str | None = None
    tags: tuple[str, ...] = ()
    links: tuple[str, ...] = ()
    postings: tuple[Posting, ...] = ()


@dataclasses.dataclass(frozen=True)
class Option:
    key: str
    value: str


@dataclasses.dataclass(frozen=True)
class Plugin:
    module: str
    config: str | None = None


@dataclasses.dataclass(frozen=True)
class Include:
    path: str


@dataclasses.dataclass(frozen=True)
class Open:
    date: datetime.date
    account: Account
    # constraint currencies, None when the directive lists none
    currencies: tuple[str, ...] | None = None


@dataclasses.dataclass(frozen=True)
class Close:
    date: datetime.date
    account: Account


@dataclasses.dataclass(frozen=True)
class Note:
    date: datetime.date
    account: Account
    comment: str


@dataclasses.dataclass(frozen=True)
class Commodity:
    date: datetime.date
    currency: str
    # (key, value) pairs in order of first appearance
    metadata: tuple[tuple[str, str], ...] = ()


@dataclasses.dataclass(frozen=True)
class Balance:
    date: datetime.date
    account: Account
    amount: Amount


@dataclasses.dataclass(frozen=True)
class Pad:
    date: datetime.date
    account: Account
    source_account: Account


@dataclasses.dataclass(frozen=True)
class Document:
    date: datetime.date
    account: Account
    path: str


@dataclasses.dataclass(frozen=True)
class Price:
    date: datetime.date
    currency: str
    amount: Amount


@dataclasses.dataclass(frozen=True)
class Event:
    date: datetime.date
    type: str
    description: str


@dataclasses.dataclass(frozen=True)
class Custom:
    date: datetime.date
    type: str
    values: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class Comment:
    # the whole line including the leading `;`
    content: str


Directive = typing.Union[
    Option,
    Plugin,
    Include,
    Open,
    Close,
    Note,
    Commodity,
    Balance,
    Pad,
    Document,
    Price,
    Event,
    Custom,
    Comment,
    Transaction,
]

DIRECTIVE_TYPES: tuple[type, ...] = typing.get_args(Directive)


# Intermediates captured by the grammar before they are folded into the
# canonical transaction shape by `post_processor`.


@dataclasses.dataclass(frozen=True)
class PayeeNarration:
    first: str
    second: str | None = None


@dataclasses.dataclass(frozen=True)
class PricedAmount:
    amount: Amount
    cost: Cost | None = None
    price: Amount | None = None
    total_price: Amount | None = None


@dataclasses.dataclass(frozen=True)
class RawPosting:
    flag: Flag | None
    account: Account
    amount_info: PricedAmount | None = None
