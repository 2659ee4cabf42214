"""Domain-level exception primitives with stable numeric codes.

These are the collaborator contracts the expectation helpers check against:
an immutable ``ErrorDescriptor`` per distinguishable error condition, and the
``DomainError`` raised by code under test with the descriptor's template
already rendered.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Iterator

from pydantic import BaseModel, ConfigDict, Field

_VARIABLE_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9]*$")
_TAG_OR_ESCAPE = re.compile(r"%%|%([a-zA-Z][a-zA-Z0-9]*)%")


class ErrorDescriptor(BaseModel):
    """Registry entry identifying one error condition."""

    code: int = Field(ge=0)
    message_template: str = Field(min_length=1)
    model_config = ConfigDict(frozen=True)


def render_message_template(template: str, **params: Any) -> str:
    """Replace ``%name%`` tags with ``params`` and unescape ``%%``.

    Tags without a matching parameter are left untouched so that a missed
    interpolation stays visible in the rendered message.
    """
    for name in params:
        if not _VARIABLE_NAME.match(name):
            raise ValueError(f"Invalid template variable name: {name!r}")
        if f"%{name}%" not in template:
            raise ValueError(f"Template has no variable {name!r}: {template!r}")

    def _substitute(match: re.Match[str]) -> str:
        name = match.group(1)
        if name is None:
            return "%"
        if name in params:
            return str(params[name])
        return match.group(0)

    return _TAG_OR_ESCAPE.sub(_substitute, template)


@dataclass(eq=False)
class DomainError(Exception):
    """Application error with stable numeric code and rendered message."""

    # Discriminant used by the expectation helpers instead of isinstance.
    is_domain_error: ClassVar[bool] = True

    code: int
    message: str

    def __str__(self) -> str:
        return self.message

    @classmethod
    def from_descriptor(
        cls,
        descriptor: ErrorDescriptor,
        /,
        **params: Any,
    ) -> DomainError:
        return cls(
            code=descriptor.code,
            message=render_message_template(descriptor.message_template, **params),
        )


def is_domain_error(value: object) -> bool:
    """Capability check: does ``value`` look like a DomainError."""
    if getattr(value, "is_domain_error", False) is not True:
        return False
    code = getattr(value, "code", None)
    return isinstance(code, int) and not isinstance(code, bool)


class ErrorRegistry:
    """In-memory lookup of error descriptors by code."""

    def __init__(self, descriptors: list[ErrorDescriptor] | None = None) -> None:
        self._by_code: dict[int, ErrorDescriptor] = {}
        for descriptor in descriptors or []:
            self.register(descriptor)

    def register(self, descriptor: ErrorDescriptor) -> ErrorDescriptor:
        existing = self._by_code.get(descriptor.code)
        if existing is not None:
            raise ValueError(
                f"Error code {descriptor.code} already registered for {existing.message_template!r}"
            )
        self._by_code[descriptor.code] = descriptor
        return descriptor

    def get(self, code: int) -> ErrorDescriptor:
        try:
            return self._by_code[code]
        except KeyError:
            raise KeyError(f"Unknown error code: {code}") from None

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def __iter__(self) -> Iterator[ErrorDescriptor]:
        return iter(self._by_code[code] for code in sorted(self._by_code))

    def __len__(self) -> int:
        return len(self._by_code)
