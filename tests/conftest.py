"""Shared test fixtures and stub oracles for Faultline."""

from __future__ import annotations

import textwrap

import pytest

from faultline.oracle.base import Oracle
from faultline.oracle.lexical import LexicalOracle
from faultline.service.validation import ValidationService


class StubOracle(Oracle):
    """Rejects any document with a line containing one of *bad_tokens*.

    Every judgement is recorded in ``calls`` so tests can count oracle use.
    """

    def __init__(self, bad_tokens: tuple[str, ...] = ("BAD",), message: str = "syntax error") -> None:
        self.bad_tokens = bad_tokens
        self.message = message
        self.calls: list[str] = []

    @property
    def name(self) -> str:
        return "stub"

    def errors(self, source: str) -> list[str]:
        self.calls.append(source)
        for lineno, line in enumerate(source.split("\n"), start=1):
            for token in self.bad_tokens:
                if token in line:
                    return [f"{self.message} near '{token}' at line {lineno}"]
        return []


class CrashingOracle(Oracle):
    """Raises whenever the text contains *trigger* (always, by default)."""

    def __init__(self, trigger: str = "", error: str = "verifier exploded") -> None:
        self.trigger = trigger
        self.error = error

    @property
    def name(self) -> str:
        return "crashing"

    def errors(self, source: str) -> list[str]:
        if self.trigger in source:
            raise RuntimeError(self.error)
        return []


class SilentOracle(Oracle):
    """Rejects text containing ``BAD`` without saying why."""

    @property
    def name(self) -> str:
        return "silent"

    def errors(self, source: str) -> list[str]:
        return [""] if "BAD" in source else []


def drl(text: str) -> str:
    """Dedent a triple-quoted DRL snippet and drop the leading newline."""
    return textwrap.dedent(text).lstrip("\n")


VALID_DRL = drl(
    """
    package com.example;

    declare Person
        name : String
        age : int
    end

    rule "test rule"
    when
        $person : Person(age > 18)
    then
        System.out.println("Adult: " + $person.getName());
    end
    """
)

UNCLOSED_PATTERN_DRL = drl(
    """
    package com.example;

    rule "adults"
    when
        $p : Person(age > 18
    then
        System.out.println("x");
    end
    """
)


@pytest.fixture
def stub_oracle() -> StubOracle:
    return StubOracle()


@pytest.fixture
def lexical_oracle() -> LexicalOracle:
    return LexicalOracle()


@pytest.fixture
def validation_service(lexical_oracle: LexicalOracle) -> ValidationService:
    return ValidationService(lexical_oracle)
