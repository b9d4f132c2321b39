from dataclasses import dataclass
from typing import Any, Optional

from errors import InvalidFieldValue, MissingRequiredField, SymbolTooLong, UnknownField
from statics import MAX_DECIMALS, MAX_SYMBOL_LENGTH


@dataclass(frozen=True)
class FieldRule:
    name: str
    type: type
    required: bool = False
    non_empty: bool = False
    max_length: Optional[int] = None
    min_value: Optional[int] = None
    max_value: Optional[int] = None


@dataclass(frozen=True)
class Violation:
    field: str
    kind: str
    message: str

    def __str__(self):
        return f"{self.field}: {self.message}"


METADATA_SCHEMA = [
    FieldRule("name", str, required=True, non_empty=True),
    FieldRule("symbol", str, non_empty=True, max_length=MAX_SYMBOL_LENGTH),
    FieldRule("decimals", int, min_value=0, max_value=MAX_DECIMALS),
    FieldRule("logo", str, required=True, non_empty=True),
    FieldRule("erc20", bool),
    FieldRule("spl", bool),
]

PERMITTED_FIELDS = [rule.name for rule in METADATA_SCHEMA]


def _is_instance(value, type_):
    if type_ is int:
        return is_integral(value)
    return isinstance(value, type_)


def is_integral(value):
    # JSON 18.0 is the integer 18:
    if isinstance(value, float):
        return value.is_integer()
    # bool is a subclass of int, but True is not a decimals value:
    return isinstance(value, int) and not isinstance(value, bool)


def check_rule(rule: FieldRule, value: Any):
    if not _is_instance(value, rule.type):
        yield Violation(rule.name, InvalidFieldValue.__name__,
                        f"expected {rule.type.__name__}, got {type(value).__name__} ({value!r})")
        return

    if rule.non_empty and rule.type is str and not value.strip():
        yield Violation(rule.name, MissingRequiredField.__name__, "must not be empty")

    if rule.max_length is not None and len(value) > rule.max_length:
        kind = SymbolTooLong if rule.name == "symbol" else InvalidFieldValue
        yield Violation(rule.name, kind.__name__,
                        f"'{value}' has {len(value)} characters, at most {rule.max_length} allowed")

    if (rule.min_value is not None and value < rule.min_value) or \
            (rule.max_value is not None and value > rule.max_value):
        yield Violation(rule.name, InvalidFieldValue.__name__,
                        f"{value} not in the {rule.min_value}-{rule.max_value} range")


def validate_metadata(metadata: dict, schema=METADATA_SCHEMA):
    rules = {rule.name: rule for rule in schema}

    for rule in schema:
        if rule.required and metadata.get(rule.name) in (None, ""):
            yield Violation(rule.name, MissingRequiredField.__name__, "is required")

    for key in metadata:
        if key not in rules:
            yield Violation(key, UnknownField.__name__,
                            f"is not a permitted field (permitted: {', '.join(rules)})")

    for rule in schema:
        if rule.name not in metadata:
            continue
        value = metadata[rule.name]
        # Already reported as missing:
        if rule.required and value in (None, ""):
            continue
        yield from check_rule(rule, value)
