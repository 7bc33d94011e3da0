# tests/unit/test_replacement.py
"""
Tests for $-style replacement templates.
"""

from __future__ import annotations

import re

import pytest

from rxpipe.core.replacement import compile_template, expand_template

KEY_VALUE = re.compile(r"(\w+)=(\d+)")


@pytest.mark.parametrize(
    "template, expected",
    [
        ("$2=$1", "1=foo"),
        ("[$&]", "[foo=1]"),
        ("$$", "$"),
        ("$$1", "$1"),
        ("cost 5$", "cost 5$"),
        ("$0", "$0"),
        ("$3", "$3"),
        ("$01", "foo"),
        ("$10", "foo0"),
        ("$<name>", "$<name>"),
        ("no refs", "no refs"),
        ("", ""),
    ],
)
def test_expand_against_two_groups(template, expected):
    match = KEY_VALUE.search("foo=1")

    assert expand_template(match, template) == expected


def test_before_and_after_match():
    match = re.search("=", "foo=1")

    assert expand_template(match, "[$`|$']") == "[foo|1]"


def test_named_groups():
    match = re.search(r"(?P<key>\w+)=(?P<val>\d+)", "foo=1")

    assert expand_template(match, "$<val>:$<key>") == "1:foo"
    assert expand_template(match, "<$<missing>>") == "<>"


def test_unmatched_group_renders_empty():
    match = re.search(r"(a)|(b)", "b")

    assert expand_template(match, "$1-$2") == "-b"


def test_compiled_template_works_with_sub():
    render = compile_template("$2$1", re.compile(r"(\w)(\d)"))

    assert re.sub(r"(\w)(\d)", render, "a1 b2 c3") == "1a 2b 3c"


def test_two_digit_group_when_available():
    regex = re.compile("".join(f"({c})" for c in "abcdefghijkl"))
    match = regex.search("abcdefghijkl")

    assert expand_template(match, "$12$11") == "lk"
