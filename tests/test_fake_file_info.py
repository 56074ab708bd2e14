from datetime import datetime, timezone

import pytest

from winfs_injector.fakes.file_info import FileInfo

METHODS = ["is_dir", "mod_time", "mode", "name", "size", "sys"]


def _invoke(info, method):
    return getattr(info, method)()


def test_defaults_are_zero_values():
    info = FileInfo()
    assert info.is_dir() is False
    assert info.mode() == 0
    assert info.name() == ""
    assert info.size() == 0
    assert info.sys() is None
    assert info.mod_time().year == 1


@pytest.mark.parametrize(
    "method, value",
    [
        ("is_dir", True),
        ("mod_time", datetime(2020, 5, 17, tzinfo=timezone.utc)),
        ("mode", 0o644),
        ("name", "top-level-file"),
        ("size", 3333333333),
        ("sys", {"uid": 7}),
    ],
)
def test_set_returns(method, value):
    info = FileInfo()
    info.set_returns(method, value)
    assert _invoke(info, method) == value
    assert _invoke(info, method) == value


def test_returns_on_call_overrides_only_that_call():
    info = FileInfo()
    info.set_returns("name", "default-name")
    info.set_returns_on_call("name", 1, "second-name")
    assert [info.name(), info.name(), info.name()] == [
        "default-name",
        "second-name",
        "default-name",
    ]


@pytest.mark.parametrize("method", METHODS)
def test_call_count_and_invocations(method):
    info = FileInfo()
    _invoke(info, method)
    _invoke(info, method)
    assert info.call_count(method) == 2
    assert info.invocations() == {method: [[], []]}


def test_call_counts_are_independent():
    info = FileInfo()
    info.is_dir()
    info.size()
    info.size()
    assert info.call_count("is_dir") == 1
    assert info.call_count("size") == 2
    assert info.call_count("mode") == 0


def test_stub_takes_precedence_until_returns_is_set():
    info = FileInfo()
    info.set_returns("size", 5)
    info.stubs["size"] = lambda: 42
    assert info.size() == 42
    info.set_returns("size", 9)
    assert info.size() == 9
    assert info.call_count("size") == 2


def test_invocations_returns_copy():
    info = FileInfo()
    info.mode()
    snapshot = info.invocations()
    snapshot["mode"].append(["extra"])
    assert info.invocations() == {"mode": [[]]}


@pytest.mark.parametrize("call", ["set_returns", "call_count", "set_returns_on_call"])
def test_unknown_method_is_rejected(call):
    info = FileInfo()
    with pytest.raises(ValueError, match="unknown file info method"):
        if call == "set_returns":
            info.set_returns("owner", 1)
        elif call == "call_count":
            info.call_count("owner")
        else:
            info.set_returns_on_call("owner", 0, 1)