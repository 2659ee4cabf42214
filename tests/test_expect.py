from __future__ import annotations

import re

import pytest

from error_expectations.diagnostics import (
    CodeMismatch,
    MessageMismatch,
    NoErrorThrown,
    UnresolvedFormatArtifact,
    WrongErrorKind,
)
from error_expectations.domain_errors import DomainError, ErrorDescriptor
from error_expectations.expect import expect_domain_error, expect_error

COMPILATION_FAILED = ErrorDescriptor(code=7, message_template="Compilation failed: %file%")


def _raise(error: BaseException):
    def _op():
        raise error

    return _op


def _compile(file: str):
    raise DomainError.from_descriptor(COMPILATION_FAILED, file=file)


def test_matching_domain_error_passes() -> None:
    expect_domain_error(lambda: _compile("foo.ts"), COMPILATION_FAILED)


def test_literal_message_is_matched_by_containment() -> None:
    expect_domain_error(lambda: _compile("foo.ts"), COMPILATION_FAILED, "foo.ts")

    with pytest.raises(MessageMismatch, match='included "bar.ts"'):
        expect_domain_error(lambda: _compile("foo.ts"), COMPILATION_FAILED, "bar.ts")


def test_pattern_message_is_searched() -> None:
    expect_domain_error(lambda: _compile("foo.ts"), COMPILATION_FAILED, re.compile(r"\.ts$"))

    with pytest.raises(MessageMismatch, match="should have matched regex"):
        expect_domain_error(lambda: _compile("foo.ts"), COMPILATION_FAILED, re.compile(r"^foo"))


def test_returning_normally_fails_with_expected_code() -> None:
    calls = []

    with pytest.raises(NoErrorThrown, match="DomainError number 7 expected, but no Error was thrown"):
        expect_domain_error(lambda: calls.append("ran"), COMPILATION_FAILED)

    assert calls == ["ran"]


def test_code_mismatch_names_both_codes() -> None:
    with pytest.raises(CodeMismatch, match="number 7 expected, but got number 42"):
        expect_domain_error(_raise(DomainError(code=42, message="Other failure")), COMPILATION_FAILED)


def test_unrelated_exception_is_wrong_kind() -> None:
    with pytest.raises(WrongErrorKind, match="RuntimeError"):
        expect_domain_error(_raise(RuntimeError("boom")), COMPILATION_FAILED)


def test_unrendered_variable_fails_even_with_correct_code() -> None:
    with pytest.raises(UnresolvedFormatArtifact, match="%file%"):
        expect_domain_error(_raise(DomainError(code=7, message="Compilation failed: %file%")), COMPILATION_FAILED)


def test_format_check_runs_before_code_and_message_checks() -> None:
    error = DomainError(code=42, message="Compilation failed: %s")

    with pytest.raises(UnresolvedFormatArtifact, match="old-style format tag"):
        expect_domain_error(_raise(error), COMPILATION_FAILED, "something else")


def test_code_check_runs_before_message_check() -> None:
    with pytest.raises(CodeMismatch):
        expect_domain_error(_raise(DomainError(code=42, message="Other failure")), COMPILATION_FAILED, "bar.ts")


def test_base_exceptions_are_not_captured() -> None:
    with pytest.raises(KeyboardInterrupt):
        expect_domain_error(_raise(KeyboardInterrupt()), COMPILATION_FAILED)


def test_invalid_expected_message_is_rejected_before_running() -> None:
    calls = []

    with pytest.raises(TypeError):
        expect_domain_error(lambda: calls.append("ran"), COMPILATION_FAILED, 7)

    assert calls == []


def test_expect_error_accepts_any_exception() -> None:
    expect_error(_raise(ValueError("X")))
    expect_error(_raise(ValueError("X")), "X")
    expect_error(_raise(ValueError("Compilation failed: foo.ts")), re.compile(r"\.ts$"))


def test_expect_error_compares_literal_exactly() -> None:
    with pytest.raises(MessageMismatch, match='should have had message "X" but got "X "'):
        expect_error(_raise(ValueError("X ")), "X")

    with pytest.raises(MessageMismatch):
        expect_error(_raise(ValueError("Compilation failed: foo.ts")), "foo.ts")


def test_expect_error_fails_when_nothing_is_raised() -> None:
    with pytest.raises(NoErrorThrown, match="Error expected but not thrown"):
        expect_error(lambda: None)


def test_expect_error_uses_single_string_argument_as_message() -> None:
    expect_error(_raise(KeyError("X")), "X")


def test_bytes_pattern_is_rejected_before_running() -> None:
    calls = []

    with pytest.raises(TypeError, match="compiled str pattern"):
        expect_error(lambda: calls.append("ran"), re.compile(b"y"))

    assert calls == []
