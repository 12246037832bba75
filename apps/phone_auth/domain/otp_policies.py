from __future__ import annotations

import random
import secrets
import string
from dataclasses import dataclass
from typing import Mapping

DEFAULT_OTP_LENGTH = 6

DIGITS = string.digits
UPPER_CASE_ALPHABETS = string.ascii_uppercase
LOWER_CASE_ALPHABETS = string.ascii_lowercase
SPECIAL_CHARS = "#!&@"

_KEY_ALIASES = {
    "length": "length",
    "digits": "digits",
    "upper_case_alphabets": "upper_case_alphabets",
    "upperCaseAlphabets": "upper_case_alphabets",
    "lower_case_alphabets": "lower_case_alphabets",
    "lowerCaseAlphabets": "lower_case_alphabets",
    "special_chars": "special_chars",
    "specialChars": "special_chars",
}


def _as_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


@dataclass(frozen=True)
class OtpGeneratorOptions:
    length: int = DEFAULT_OTP_LENGTH
    digits: bool = True
    upper_case_alphabets: bool = False
    lower_case_alphabets: bool = False
    special_chars: bool = False

    @classmethod
    def from_mapping(cls, raw: Mapping | None) -> "OtpGeneratorOptions":
        if not raw:
            return cls()
        values = {}
        for key, value in raw.items():
            field = _KEY_ALIASES.get(key)
            if field is None:
                raise ValueError(f"Unknown OTP generator option '{key}'.")
            values[field] = int(value) if field == "length" else _as_bool(value)
        return cls(**values)

    def alphabet(self) -> str:
        chars = ""
        if self.digits:
            chars += DIGITS
        if self.upper_case_alphabets:
            chars += UPPER_CASE_ALPHABETS
        if self.lower_case_alphabets:
            chars += LOWER_CASE_ALPHABETS
        if self.special_chars:
            chars += SPECIAL_CHARS
        # no enabled class falls back to digits only
        return chars or DIGITS


_system_random = secrets.SystemRandom()


def generate_otp_code(options: OtpGeneratorOptions | None = None, *, rng: random.Random | None = None) -> str:
    options = options or OtpGeneratorOptions()
    if options.length < 1:
        raise ValueError("OTP length must be at least 1.")
    alphabet = options.alphabet()
    chooser = rng or _system_random
    return "".join(chooser.choice(alphabet) for _ in range(options.length))
