import asyncio
import os
import threading
from types import SimpleNamespace

import pytest

from things_api import apple_script_client as client
from things_api.errors import ApplicationNotRunning, ScriptError, UrlSchemeError


def _patch_subprocess(monkeypatch, expected_assertion, returncode=0, stdout="OK\n", stderr=""):
    """Patch subprocess.run to intercept the command list and simulate a reply."""
    seen = []

    def _fake_run(cmd, capture_output=True, text=True, check=False):  # noqa: D401
        # Delegate assertion to caller-provided function so each test can verify the cmd
        expected_assertion(cmd)
        seen.append(list(cmd))
        return SimpleNamespace(returncode=returncode, stdout=stdout, stderr=stderr)

    monkeypatch.setattr("subprocess.run", _fake_run)
    return seen


def test_default_path_uses_osascript(monkeypatch):
    monkeypatch.delenv("THINGSCLI_OSASCRIPT", raising=False)

    def _assert_cmd(cmd):
        assert cmd[0] == "osascript" and cmd[1].endswith(".applescript"), cmd

    _patch_subprocess(monkeypatch, _assert_cmd)

    assert client.execute_things_applescript('return "OK"') == "OK"


def test_interpreter_override(monkeypatch):
    monkeypatch.setenv("THINGSCLI_OSASCRIPT", "/usr/local/bin/fake-osascript")

    def _assert_cmd(cmd):
        assert cmd[0] == "/usr/local/bin/fake-osascript", cmd

    _patch_subprocess(monkeypatch, _assert_cmd)
    client.execute_things_applescript('return "OK"')


def test_script_file_holds_script_and_is_removed(monkeypatch):
    contents = []

    def _assert_cmd(cmd):
        with open(cmd[1], encoding="utf-8") as fh:
            contents.append(fh.read())

    seen = _patch_subprocess(monkeypatch, _assert_cmd)
    client.execute_things_applescript('tell application "Things3" to return "é"')

    assert contents == ['tell application "Things3" to return "é"']
    assert not os.path.exists(seen[0][1])


def test_missing_object_is_script_error_with_number(monkeypatch):
    _patch_subprocess(
        monkeypatch, lambda cmd: None, returncode=1,
        stderr='execution error: Things3 got an error: Can’t get to do id "x". (-1728)\n',
    )
    with pytest.raises(ScriptError) as excinfo:
        client.execute_things_applescript("anything")
    assert excinfo.value.number == -1728
    assert "Can’t get to do id" in excinfo.value.message
    assert str(excinfo.value).startswith("AppleScript error: ")


def test_failure_removes_script_file(monkeypatch):
    seen = _patch_subprocess(monkeypatch, lambda cmd: None, returncode=1, stderr="boom")
    with pytest.raises(ScriptError):
        client.execute_things_applescript("anything")
    assert not os.path.exists(seen[0][1])


def test_missing_interpreter_is_not_running(monkeypatch):
    def _fake_run(cmd, capture_output=True, text=True, check=False):
        raise FileNotFoundError(cmd[0])

    monkeypatch.setattr("subprocess.run", _fake_run)
    with pytest.raises(ApplicationNotRunning):
        client.execute_things_applescript("anything")


@pytest.mark.parametrize("message", [
    "execution error: Application isn’t running. (-600)",
    "execution error: Things3 got an error: Application isn't running.",
    "LSOpenURLsWithRole() failed with error -10810 (-10810)",
    "execution error: Can’t get application \"Things3\".",
])
def test_classify_not_running(message):
    assert isinstance(client.classify_failure(message), ApplicationNotRunning)


def test_classify_other_failures_keep_message():
    error = client.classify_failure("syntax error: Expected end of line. (-2741)")
    assert isinstance(error, ScriptError)
    assert error.number == -2741
    assert error.message == "syntax error: Expected end of line. (-2741)"


def test_classify_without_number():
    error = client.classify_failure("something odd happened")
    assert isinstance(error, ScriptError)
    assert error.number is None


def test_open_things_url_failure(monkeypatch):
    _patch_subprocess(monkeypatch, lambda cmd: None, returncode=1, stderr="no handler")
    with pytest.raises(UrlSchemeError):
        client.open_things_url("things:///update?id=x")


def test_open_things_url_uses_open(monkeypatch):
    def _assert_cmd(cmd):
        assert cmd == ["open", "things:///show?id=today"], cmd

    _patch_subprocess(monkeypatch, _assert_cmd, stdout="")
    client.open_things_url("things:///show?id=today")


class TestAppleScriptRunner:
    def test_run_happens_on_worker_thread(self):
        threads = []

        def fake_execute(script):
            threads.append(threading.current_thread().name)
            return script.upper()

        runner = client.AppleScriptRunner(execute=fake_execute)
        try:
            assert asyncio.run(runner.run("return 1")) == "RETURN 1"
        finally:
            runner.close()
        assert threads[0].startswith("things-applescript")

    def test_calls_are_serialized_in_order(self):
        active = []
        overlaps = []
        order = []

        def fake_execute(script):
            active.append(script)
            if len(active) > 1:
                overlaps.append(script)
            order.append(script)
            active.remove(script)
            return script

        runner = client.AppleScriptRunner(execute=fake_execute)

        async def many():
            return await asyncio.gather(*(runner.run(str(i)) for i in range(5)))

        try:
            assert asyncio.run(many()) == ["0", "1", "2", "3", "4"]
        finally:
            runner.close()
        assert overlaps == []
        assert order == ["0", "1", "2", "3", "4"]

    def test_errors_propagate(self):
        def fake_execute(script):
            raise ScriptError("nope", number=-1728)

        runner = client.AppleScriptRunner(execute=fake_execute)
        try:
            with pytest.raises(ScriptError):
                asyncio.run(runner.run("x"))
        finally:
            runner.close()

    def test_open_url_uses_opener(self):
        opened = []
        runner = client.AppleScriptRunner(execute=lambda s: "", opener=opened.append)
        try:
            asyncio.run(runner.open_url("things:///update?id=1"))
        finally:
            runner.close()
        assert opened == ["things:///update?id=1"]


@pytest.mark.parametrize("message", [
    'execution error: Things3 got an error: Can’t get project id "Server isn\'t running". (-1728)',
    'execution error: Things3 got an error: Can’t get project "Can\'t get application list". (-1728)',
    'execution error: Things3 got an error: Can’t get tag "application isn’t running". (-1719)',
])
def test_quoted_user_text_does_not_change_classification(message):
    error = client.classify_failure(message)
    assert type(error) is ScriptError
    assert error.number in client.MISSING_OBJECT_ERROR_NUMBERS


def test_not_running_number_wins_over_wording():
    error = client.classify_failure('execution error: Can’t get to do id "x". (-600)')
    assert isinstance(error, ApplicationNotRunning)
