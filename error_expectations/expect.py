"""Expect an operation to fail with a specific error.

Every check runs the operation once and captures at most one raised
``Exception``. The descriptor-based checks then validate, in order:

1. the message has no unresolved template tags,
2. the error is a DomainError with the descriptor's code,
3. the message satisfies ``expected_message`` (substring or pattern).

The first failed stage raises an ``ExpectationFailure``; later stages are
skipped. ``expect_error`` and ``expect_error_async`` only check the message,
and compare literal messages for exact equality. An async operation that
returns something other than an awaitable counts as settling normally.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from .diagnostics import (
    message_of,
    mismatch_prefixes,
    no_error_thrown,
    no_rejection_occurred,
)
from .domain_errors import ErrorDescriptor
from .format_checks import ensure_rendered
from .matchers import (
    ExpectedMessage,
    ensure_domain_error,
    ensure_message_contains,
    ensure_message_equals,
    validate_expected_message,
)

logger = logging.getLogger(__name__)


def _check_domain_error(
    error: Exception,
    descriptor: ErrorDescriptor,
    expected_message: ExpectedMessage | None,
    **matcher_kwargs: Any,
) -> None:
    message = message_of(error)
    ensure_rendered(message)
    ensure_domain_error(error, descriptor)
    ensure_message_contains(message, expected_message, **matcher_kwargs)


def expect_error(
    op: Callable[[], Any],
    expected_message: ExpectedMessage | None = None,
) -> None:
    """Fail unless ``op()`` raises; a literal message must match exactly."""
    validate_expected_message(expected_message)
    try:
        op()
    except Exception as error:
        logger.debug("expect.caught %r", error)
        ensure_message_equals(message_of(error), expected_message)
        return

    logger.info("expect.no_error")
    raise no_error_thrown()


async def expect_error_async(
    op: Callable[[], Awaitable[Any]],
    expected_message: ExpectedMessage | None = None,
) -> None:
    """Await ``op()`` and fail unless it raises; a literal message must match exactly."""
    validate_expected_message(expected_message)
    no_rejection = no_rejection_occurred()
    prefixes = mismatch_prefixes(expected_message, exact=True, subject="Async error")

    try:
        result = op()
        if inspect.isawaitable(result):
            await result
    except Exception as error:
        logger.debug("expect.caught %r", error)
        ensure_message_equals(message_of(error), expected_message, prefixes=prefixes)
        return

    logger.info("expect.no_rejection")
    raise no_rejection


def expect_domain_error(
    op: Callable[[], Any],
    descriptor: ErrorDescriptor,
    expected_message: ExpectedMessage | None = None,
) -> None:
    """Fail unless ``op()`` raises the DomainError described by ``descriptor``."""
    validate_expected_message(expected_message)
    try:
        op()
    except Exception as error:
        logger.debug("expect.caught code=%s %r", descriptor.code, error)
        _check_domain_error(error, descriptor, expected_message)
        return

    logger.info("expect.no_error code=%s", descriptor.code)
    raise no_error_thrown(descriptor)


async def expect_domain_error_async(
    op: Callable[[], Awaitable[Any]],
    descriptor: ErrorDescriptor,
    expected_message: ExpectedMessage | None = None,
) -> None:
    """Await ``op()`` and fail unless it raises the DomainError described by ``descriptor``."""
    validate_expected_message(expected_message)
    # Failures are built before the await, while the expected code and message
    # are still bound to the caller's frame.
    no_rejection = no_rejection_occurred(descriptor)
    prefixes = mismatch_prefixes(expected_message, exact=False, subject="DomainError")

    try:
        result = op()
        if inspect.isawaitable(result):
            await result
    except Exception as error:
        logger.debug("expect.caught code=%s %r", descriptor.code, error)
        _check_domain_error(error, descriptor, expected_message, prefixes=prefixes)
        return

    logger.info("expect.no_rejection code=%s", descriptor.code)
    raise no_rejection
