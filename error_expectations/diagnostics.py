"""Assertion failures raised by the error expectation helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .domain_errors import ErrorDescriptor, is_domain_error


@dataclass(eq=False)
class ExpectationFailure(AssertionError):
    """Failed error expectation with the observed and expected values."""

    message: str
    expected: Any = None
    actual: Any = None

    def __str__(self) -> str:
        return self.message


class NoErrorThrown(ExpectationFailure):
    pass


class NoRejectionOccurred(NoErrorThrown):
    """Awaited operation settled without raising."""


class WrongErrorKind(ExpectationFailure):
    pass


class CodeMismatch(ExpectationFailure):
    pass


class UnresolvedFormatArtifact(ExpectationFailure):
    """Rendered message still carries a template tag."""


class MessageMismatch(ExpectationFailure):
    pass


def message_of(value: object) -> str:
    """``value.message``, else the single str argument, else ``str(value)``."""
    message = getattr(value, "message", None)
    if isinstance(message, str):
        return message
    args = getattr(value, "args", None)
    if isinstance(args, tuple) and len(args) == 1 and isinstance(args[0], str):
        return args[0]
    return str(value)


def describe_error(value: object) -> str:
    """Render a caught value for a failure message."""
    if is_domain_error(value):
        return f"{type(value).__name__}(code={value.code}, message={message_of(value)!r})"
    if isinstance(value, BaseException):
        return f"{type(value).__name__}({str(value)!r})"
    return repr(value)


def no_error_thrown(descriptor: ErrorDescriptor | None = None) -> NoErrorThrown:
    if descriptor is None:
        return NoErrorThrown("Error expected but not thrown")
    return NoErrorThrown(
        f"DomainError number {descriptor.code} expected, but no Error was thrown",
        expected=descriptor.code,
    )


def no_rejection_occurred(descriptor: ErrorDescriptor | None = None) -> NoRejectionOccurred:
    if descriptor is None:
        return NoRejectionOccurred("Async error expected but not thrown")
    return NoRejectionOccurred(
        f"DomainError number {descriptor.code} expected, but no Error was thrown",
        expected=descriptor.code,
    )


def wrong_error_kind(value: object, descriptor: ErrorDescriptor) -> WrongErrorKind:
    return WrongErrorKind(
        f"DomainError number {descriptor.code} expected, but got {describe_error(value)}",
        expected=descriptor.code,
        actual=value,
    )


def code_mismatch(actual_code: int, descriptor: ErrorDescriptor, message: str) -> CodeMismatch:
    return CodeMismatch(
        f"DomainError number {descriptor.code} expected, but got number {actual_code}: {message!r}",
        expected=descriptor.code,
        actual=actual_code,
    )


def unresolved_format_artifact(
    artifact: str, message: str, *, legacy: bool
) -> UnresolvedFormatArtifact:
    kind = "an old-style format tag" if legacy else "a non-replaced variable tag"
    return UnresolvedFormatArtifact(
        f"DomainError has {kind} {artifact!r}: {message!r}",
        expected="fully rendered message",
        actual=message,
    )


@dataclass(frozen=True)
class MismatchPrefixes:
    """Message-mismatch texts built before the operation runs."""

    literal: str
    pattern: str


def mismatch_prefixes(expected: Any, *, exact: bool, subject: str) -> MismatchPrefixes:
    pattern_text = getattr(expected, "pattern", expected)
    if exact:
        literal = f'{subject} should have had message "{expected}" but got "'
    else:
        literal = f'{subject} was correct, but should have included "{expected}" but got "'
    return MismatchPrefixes(
        literal=literal,
        pattern=f'{subject} should have matched regex {pattern_text!r} but got "',
    )


def message_mismatch(prefix: str, expected: Any, actual: str) -> MessageMismatch:
    return MessageMismatch(f'{prefix}{actual}"', expected=expected, actual=actual)
