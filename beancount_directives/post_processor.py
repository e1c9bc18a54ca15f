import datetime
import typing

from beancount_directives.data_types import (
    Flag,
    PayeeNarration,
    Posting,
    RawPosting,
    Transaction,
)


def fold_payee_narration(
    payee_narration: PayeeNarration | None,
) -> tuple[str | None, str | None]:
    """Turn the quoted strings of a transaction header into (payee, narration).

    A lone string is the narration, two strings are payee then narration.
    """
    if payee_narration is None:
        return None, None
    if payee_narration.second is None:
        return None, payee_narration.first
    return payee_narration.first, payee_narration.second


def fold_posting(raw: RawPosting) -> Posting:
    flag = raw.flag if raw.flag is not None else Flag.CLEARED
    amount_info = raw.amount_info
    if amount_info is None:
        return Posting(flag=flag, account=raw.account)
    return Posting(
        flag=flag,
        account=raw.account,
        amount=amount_info.amount,
        cost=amount_info.cost,
        price=amount_info.price,
        total_price=amount_info.total_price,
    )


def fold_transaction(
    date: datetime.date,
    flag: Flag,
    payee_narration: PayeeNarration | None,
    tags: typing.Sequence[str] | None,
    links: typing.Sequence[str] | None,
    postings: typing.Iterable[RawPosting],
) -> Transaction:
    payee, narration = fold_payee_narration(payee_narration)
    return Transaction(
        date=date,
        flag=flag,
        payee=payee,
        narration=narration,
        tags=tuple(tags or ()),
        links=tuple(links or ()),
        postings=tuple(map(fold_posting, postings)),
    )
