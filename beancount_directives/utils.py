import typing

from pydantic import TypeAdapter

from beancount_directives.constants import DIRECTIVE_TYPE_KEY
from beancount_directives.data_types import DIRECTIVE_TYPES, Commodity, Directive

DIRECTIVE_ADAPTERS: dict[type, TypeAdapter] = {
    directive_type: TypeAdapter(directive_type) for directive_type in DIRECTIVE_TYPES
}


def directive_kind(directive: Directive) -> str:
    """Name of the directive kind, like `open` or `transaction`"""
    return type(directive).__name__.lower()


def directive_to_dict(directive: Directive) -> dict[str, typing.Any]:
    """Convert a directive into JSON compatible plain values.

    Decimals become strings so no precision is lost, dates become ISO strings
    and enums their values. Commodity metadata pairs become an object. The
    kind of the directive goes under `DIRECTIVE_TYPE_KEY`.
    """
    adapter = DIRECTIVE_ADAPTERS[type(directive)]
    payload = adapter.dump_python(directive, mode="json")
    if isinstance(directive, Commodity):
        payload["metadata"] = dict(directive.metadata)
    return {DIRECTIVE_TYPE_KEY: directive_kind(directive), **payload}
