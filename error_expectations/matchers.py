"""Identity, code and message matchers for caught errors."""

from __future__ import annotations

import logging
import re
from typing import Union

from .diagnostics import (
    MismatchPrefixes,
    code_mismatch,
    message_mismatch,
    message_of,
    mismatch_prefixes,
    wrong_error_kind,
)
from .domain_errors import ErrorDescriptor, is_domain_error

logger = logging.getLogger(__name__)

ExpectedMessage = Union[str, re.Pattern[str]]


def validate_expected_message(expected: object) -> None:
    if expected is None or isinstance(expected, str):
        return
    if isinstance(expected, re.Pattern) and isinstance(expected.pattern, str):
        return
    raise TypeError(
        f"expected_message must be a str or a compiled str pattern, got {type(expected).__name__}"
    )


def ensure_domain_error(value: object, descriptor: ErrorDescriptor) -> None:
    """Fail unless ``value`` is a DomainError carrying ``descriptor.code``."""
    if not is_domain_error(value):
        logger.info("expect.kind expected=%s actual=%s", descriptor.code, type(value).__name__)
        raise wrong_error_kind(value, descriptor)

    actual_code = value.code
    if actual_code != descriptor.code:
        logger.info("expect.code expected=%s actual=%s", descriptor.code, actual_code)
        raise code_mismatch(actual_code, descriptor, message_of(value))


def _ensure_pattern(message: str, expected: re.Pattern[str], prefixes: MismatchPrefixes) -> None:
    if expected.search(message) is None:
        logger.info("expect.message pattern=%r actual=%r", expected.pattern, message)
        raise message_mismatch(prefixes.pattern, expected, message)


def ensure_message_contains(
    message: str,
    expected: ExpectedMessage | None,
    *,
    prefixes: MismatchPrefixes | None = None,
) -> None:
    """Literal: ``expected`` is a substring of ``message``. Pattern: search."""
    if expected is None:
        return
    if prefixes is None:
        prefixes = mismatch_prefixes(expected, exact=False, subject="DomainError")

    if isinstance(expected, str):
        if expected not in message:
            logger.info("expect.message included=%r actual=%r", expected, message)
            raise message_mismatch(prefixes.literal, expected, message)
        return
    _ensure_pattern(message, expected, prefixes)


def ensure_message_equals(
    message: str,
    expected: ExpectedMessage | None,
    *,
    prefixes: MismatchPrefixes | None = None,
) -> None:
    """Literal: ``expected == message``. Pattern: search."""
    if expected is None:
        return
    if prefixes is None:
        prefixes = mismatch_prefixes(expected, exact=True, subject="Error")

    if isinstance(expected, str):
        if message != expected:
            logger.info("expect.message exact=%r actual=%r", expected, message)
            raise message_mismatch(prefixes.literal, expected, message)
        return
    _ensure_pattern(message, expected, prefixes)
