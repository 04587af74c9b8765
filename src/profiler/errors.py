"""Exceptions raised while building profiling reports."""
from typing import Any, Iterable, List


class ProfileReportError(Exception):
    """Base class for profile report errors."""


class ConfigurationError(ProfileReportError):
    """A log route setting has an unrecognized value."""

    def __init__(self, setting: str, value: Any, valid: Iterable[str] = ()):
        self.setting = setting
        self.value = value
        self.valid = list(valid)
        message = f'{setting} "{value}" is invalid.'
        if self.valid:
            quoted = ", ".join(f'"{v}"' for v in self.valid)
            message += f" Valid values include {quoted}."
        super().__init__(message)


class MismatchError(ProfileReportError):
    """
    An end marker did not close the most recently opened code block.

    Attributes:
        token: Token carried by the offending end marker
        open_tokens: Tokens still open when it arrived, outermost first
    """

    def __init__(self, token: str, open_tokens: List[str]):
        self.token = token
        self.open_tokens = list(open_tokens)
        expected = f'"{self.open_tokens[-1]}"' if self.open_tokens else "no open block"
        super().__init__(
            f'Found a mismatching code block "{token}" (expected {expected}). '
            f"Make sure the calls to begin_profile() and end_profile() are properly nested."
        )
