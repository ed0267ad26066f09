import pytest

from shline import ContextError
from shline.context import build_context, environ_context, parse_assignments


def test_parse_assignments_splits_on_first_equals():
    assert parse_assignments(["A=1", "B=x=y", "C="]) == {"A": "1", "B": "x=y", "C": ""}


@pytest.mark.parametrize("entry", ["novalue", "=value"])
def test_parse_assignments_rejects_bad_entries(entry):
    with pytest.raises(ContextError):
        parse_assignments([entry])


def test_build_context_assignments_override_environment():
    context = build_context(environ={"A": "env", "B": "b"}, assignments=["A=cli"])
    assert context == {"A": "cli", "B": "b"}


def test_build_context_without_environment(monkeypatch):
    monkeypatch.setenv("SHLINE_TEST_VAR", "x")
    assert build_context(use_environ=False, assignments=["A=1"]) == {"A": "1"}
    assert environ_context()["SHLINE_TEST_VAR"] == "x"
