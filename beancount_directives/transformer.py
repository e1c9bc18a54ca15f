import datetime
import decimal
import json
import typing

from lark import Token, Transformer, v_args

from beancount_directives.data_types import (
    Account,
    AccountType,
    Amount,
    Balance,
    Close,
    Comment,
    Commodity,
    Cost,
    Custom,
    Directive,
    Document,
    Event,
    Flag,
    Include,
    Note,
    Open,
    Option,
    Pad,
    PayeeNarration,
    Plugin,
    Price,
    PricedAmount,
    RawPosting,
    Transaction,
)
from beancount_directives.errors import (
    InvalidAccountType,
    InvalidAmount,
    InvalidDate,
    InvalidEscape,
    InvalidFlag,
)
from beancount_directives.post_processor import fold_transaction


@v_args(inline=True)
class DirectiveTransformer(Transformer):
    """Turn the parse tree of a document into directive records.

    Scalar tokens are converted by the upper case callbacks, each conversion is
    checked and raises a located `ParseError` subclass on failure. Lark wraps
    those into `VisitError`, `parser.parse` unwraps them again.
    """

    def __init__(self, text: str):
        super().__init__()
        self.text = text

    # scalars

    def DATE(self, token: Token) -> datetime.date:
        year, month, day = map(int, token.value.split("-"))
        try:
            return datetime.date(year, month, day)
        except ValueError as exc:
            raise InvalidDate.at(
                f"Invalid date {token.value!r}: {exc}", self.text, token.start_pos
            ) from exc

    def STRING(self, token: Token) -> str:
        try:
            # literal line breaks are allowed inside strings
            return json.loads(token.value, strict=False)
        except json.JSONDecodeError as exc:
            # point at the backslash opening the bad escape
            pos = token.value.rfind("\\", 0, exc.pos + 1)
            if pos == -1:
                pos = exc.pos
            raise InvalidEscape.at(
                f"Invalid string literal: {exc.msg}",
                self.text,
                token.start_pos + pos,
            ) from exc

    def ACCOUNT(self, token: Token) -> Account:
        type_name, *segments = token.value.split(":")
        try:
            account_type = AccountType(type_name)
        except ValueError as exc:
            raise InvalidAccountType.at(
                f"Invalid account type {type_name!r}", self.text, token.start_pos
            ) from exc
        return Account(type=account_type, segments=tuple(segments))

    def AMOUNT(self, token: Token) -> Amount:
        try:
            number, currency = token.value.split(maxsplit=1)
            return Amount(number=decimal.Decimal(number), currency=currency)
        except (ValueError, decimal.InvalidOperation) as exc:
            raise InvalidAmount.at(
                f"Invalid amount {token.value!r}", self.text, token.start_pos
            ) from exc

    def FLAG(self, token: Token) -> Flag:
        try:
            return Flag(token.value)
        except ValueError as exc:
            raise InvalidFlag.at(
                f"Invalid flag {token.value!r}", self.text, token.start_pos
            ) from exc

    def TAG(self, token: Token) -> str:
        return token.value[1:].rstrip(" \t")

    def LINK(self, token: Token) -> str:
        return token.value[1:].rstrip(" \t")

    def CURRENCY(self, token: Token) -> str:
        return token.value

    def KEY(self, token: Token) -> str:
        return token.value

    # keywords written where a bare word is expected
    OPTION = PLUGIN = INCLUDE = OPEN = CLOSE = NOTE = COMMODITY = KEY
    BALANCE = PAD = DOCUMENT = PRICE = EVENT = CUSTOM = KEY

    def COMMENT(self, token: Token) -> str:
        return token.value

    # document

    def start(self, *directives: Directive) -> list[Directive]:
        return list(directives)

    def option(self, key: str, value: str) -> Option:
        return Option(key=key, value=value)

    def plugin(self, module: str, config: str | None) -> Plugin:
        return Plugin(module=module, config=config)

    def include(self, path: str) -> Include:
        return Include(path=path)

    def open(
        self,
        date: datetime.date,
        account: Account,
        currencies: tuple[str, ...] | None,
    ) -> Open:
        return Open(date=date, account=account, currencies=currencies)

    def currency_list(self, *currencies: str) -> tuple[str, ...]:
        return currencies

    def close(self, date: datetime.date, account: Account) -> Close:
        return Close(date=date, account=account)

    def note(self, date: datetime.date, account: Account, comment: str) -> Note:
        return Note(date=date, account=account, comment=comment)

    def commodity(
        self,
        date: datetime.date,
        currency: str,
        *items: tuple[str, str],
    ) -> Commodity:
        # a repeated key keeps its first position and takes the last value
        metadata = tuple(dict(items).items())
        return Commodity(date=date, currency=currency, metadata=metadata)

    def metadata_item(self, key: str, value: str) -> tuple[str, str]:
        return key, value

    def balance(self, date: datetime.date, account: Account, amount: Amount) -> Balance:
        return Balance(date=date, account=account, amount=amount)

    def pad(self, date: datetime.date, account: Account, source: Account) -> Pad:
        return Pad(date=date, account=account, source_account=source)

    def document(self, date: datetime.date, account: Account, path: str) -> Document:
        return Document(date=date, account=account, path=path)

    def price(self, date: datetime.date, currency: str, amount: Amount) -> Price:
        return Price(date=date, currency=currency, amount=amount)

    def event(self, date: datetime.date, type: str, description: str) -> Event:
        return Event(date=date, type=type, description=description)

    def custom(
        self,
        date: datetime.date,
        type: str,
        *values: typing.Union[str, Account, Amount],
    ) -> Custom:
        return Custom(date=date, type=type, values=tuple(map(str, values)))

    def comment(self, content: str) -> Comment:
        return Comment(content=content)

    # transactions

    def transaction(
        self,
        date: datetime.date,
        flag: Flag,
        first: str | None,
        second: str | None,
        tags: tuple[str, ...] | None,
        links: tuple[str, ...] | None,
        *postings: RawPosting,
    ) -> Transaction:
        payee_narration = None
        if first is not None:
            payee_narration = PayeeNarration(first=first, second=second)
        return fold_transaction(
            date=date,
            flag=flag,
            payee_narration=payee_narration,
            tags=tags,
            links=links,
            postings=postings,
        )

    def tags(self, *tags: str) -> tuple[str, ...]:
        return tags

    def links(self, *links: str) -> tuple[str, ...]:
        return links

    def posting(
        self,
        flag: Flag | None,
        account: Account,
        amount: Amount | None,
        cost: Cost | None,
        price: Amount | None,
        total_price: Amount | None,
    ) -> RawPosting:
        amount_info = None
        if amount is not None:
            amount_info = PricedAmount(
                amount=amount,
                cost=cost,
                price=price,
                total_price=total_price,
            )
        return RawPosting(flag=flag, account=account, amount_info=amount_info)

    def cost(self, amount: Amount, label: str | None) -> Cost:
        return Cost(amount=amount, label=label)

    def unit_price(self, amount: Amount) -> Amount:
        return amount

    def total_price(self, amount: Amount) -> Amount:
        return amount
