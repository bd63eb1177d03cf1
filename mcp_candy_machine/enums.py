"""
Configuration document enumerations.

These are the tokens a user writes in the configuration document. The program
side counterparts live in program_types; bridge maps one to the other.
"""
from enum import Enum
from typing import Any

from mcp_candy_machine.errors import TypeMismatchError, UnknownEnumValueError


def _match_token(enum_cls, value: Any, case_sensitive: bool):
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str):
        raise TypeMismatchError(f"Expected a string for {enum_cls.__name__}, got {type(value).__name__}", value=value)
    token = value if case_sensitive else value.lower()
    for member in enum_cls:
        candidate = member.value if case_sensitive else member.value.lower()
        if candidate == token:
            return member
    allowed = ", ".join(member.value for member in enum_cls)
    raise UnknownEnumValueError(f"Unknown {enum_cls.__name__} '{value}' (expected one of: {allowed})", value=value)


class DocumentEnum(str, Enum):
    """String enum parsed from a case-insensitive document token."""

    @classmethod
    def parse(cls, value: Any):
        return _match_token(cls, value, case_sensitive=False)


class UploadMethod(DocumentEnum):
    metaplex = "metaplex"
    bundlr = "bundlr"
    arloader = "arloader"


class WhitelistMintMode(DocumentEnum):
    burn_every_time = "burnEveryTime"
    never_burn = "neverBurn"


class EndSettingType(DocumentEnum):
    date = "Date"
    amount = "Amount"

    @classmethod
    def parse(cls, value: Any):
        # Variant names are matched exactly.
        return _match_token(cls, value, case_sensitive=True)
