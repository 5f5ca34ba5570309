"""Shared pytest fixtures: a ThingsManager wired to a recording fake osascript."""
import pytest

from things_api.apple_script_client import AppleScriptRunner
from things_api.task_operations import ThingsManager


class ScriptRecorder:
    """Stands in for osascript/open. Replies are consumed in order; an
    exception instance in ``responses`` is raised instead of returned."""

    def __init__(self):
        self.scripts = []
        self.urls = []
        self.responses = []

    def execute(self, script):
        self.scripts.append(script)
        if not self.responses:
            return ""
        reply = self.responses.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply

    def open(self, url):
        self.urls.append(url)


@pytest.fixture
def recorder():
    return ScriptRecorder()


@pytest.fixture
def manager(recorder):
    runner = AppleScriptRunner(execute=recorder.execute, opener=recorder.open)
    things = ThingsManager(runner=runner, auth_token="")
    yield things
    runner.close()
