from __future__ import annotations

from pydantic import ValidationError


class TaxmatError(ValueError):
    """Base class for errors caused by bad input or bad configuration."""


class ConfigurationError(TaxmatError):
    pass


class ParseError(TaxmatError):
    def __init__(self, message: str, *, row_ref: str | None = None) -> None:
        self.row_ref = row_ref
        if row_ref is not None:
            message = f"{row_ref}: {message}"
        super().__init__(message)


def describe_validation_error(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"])
        message = error["msg"].removeprefix("Value error, ")
        parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts)
