"""Shared pytest fixtures for devdeploy tests.

The ``commands`` fixture intercepts every external command devdeploy runs
(``subprocess.run``, ``subprocess.Popen``, ``shutil.which`` and
``os.execvp``) and answers with canned, pattern-matched responses.
"""

import os
import re
import shutil
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Pattern, Sequence, Union

import pytest


@dataclass
class CommandResponse:
    """A mocked command result."""
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


OK = CommandResponse()
FAIL = CommandResponse(stderr="error", returncode=1)


class FakePopen:
    """Stand-in for a long running background process."""

    def __init__(self, cmd, **kwargs):
        self.args = list(cmd)
        self.returncode: Optional[int] = None
        self.terminated = False

    def poll(self) -> Optional[int]:
        return self.returncode

    def terminate(self) -> None:
        self.terminated = True
        self.returncode = -15

    def kill(self) -> None:
        self.returncode = -9

    def wait(self, timeout=None) -> int:
        return self.returncode


@dataclass
class CommandMocker:
    """Pattern-matched responses for external commands.

    Later registrations take precedence over earlier ones. A list of
    responses is consumed in order and its last entry repeats.
    """

    tools: set = field(default_factory=lambda: {"minishift", "oc", "xdg-open"})
    calls: List[List[str]] = field(default_factory=list)
    watches: List[FakePopen] = field(default_factory=list)
    execs: List[List[str]] = field(default_factory=list)
    default: CommandResponse = field(default_factory=CommandResponse)
    _responses: list = field(default_factory=list)

    def register(
        self,
        pattern: Union[str, Pattern],
        response: Union[CommandResponse, Sequence[CommandResponse]],
    ) -> None:
        if isinstance(response, CommandResponse):
            response = [response]
        self._responses.insert(0, (pattern, list(response)))

    def respond(self, pattern: Union[str, Pattern], stdout: str = "", returncode: int = 0) -> None:
        self.register(pattern, CommandResponse(stdout=stdout, returncode=returncode))

    def _match(self, command: str) -> CommandResponse:
        for pattern, responses in self._responses:
            if isinstance(pattern, str):
                matched = command.startswith(pattern)
            else:
                matched = pattern.search(command) is not None
            if matched:
                return responses.pop(0) if len(responses) > 1 else responses[0]
        return self.default

    def run(self, cmd, check=False, **kwargs) -> subprocess.CompletedProcess:
        cmd = list(cmd)
        self.calls.append(cmd)
        if cmd[0] not in self.tools:
            raise FileNotFoundError(cmd[0])
        response = self._match(" ".join(cmd))
        if check and response.returncode != 0:
            raise subprocess.CalledProcessError(
                response.returncode, cmd, response.stdout, response.stderr
            )
        return subprocess.CompletedProcess(
            cmd, response.returncode, response.stdout, response.stderr
        )

    def popen(self, cmd, **kwargs) -> FakePopen:
        process = FakePopen(cmd)
        self.watches.append(process)
        return process

    def which(self, name, *args, **kwargs) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.tools else None

    def execvp(self, file, args) -> None:
        self.execs.append(list(args))

    def commands(self, prefix: str = "") -> List[str]:
        """Joined commands run so far, optionally filtered by prefix."""
        joined = [" ".join(call) for call in self.calls]
        return [c for c in joined if c.startswith(prefix)]

    def was_called(self, prefix: str) -> bool:
        return bool(self.commands(prefix))


@pytest.fixture
def commands(monkeypatch) -> CommandMocker:
    """Intercept external commands."""
    mocker = CommandMocker()
    monkeypatch.setattr(subprocess, "run", mocker.run)
    monkeypatch.setattr(subprocess, "Popen", mocker.popen)
    monkeypatch.setattr(shutil, "which", mocker.which)
    monkeypatch.setattr(os, "execvp", mocker.execvp)
    return mocker


@pytest.fixture
def sleeps(monkeypatch) -> List[float]:
    """Record sleeps instead of sleeping."""
    recorded: List[float] = []
    monkeypatch.setattr("time.sleep", recorded.append)
    return recorded


@pytest.fixture
def clean_settings(monkeypatch) -> None:
    """Drop DEVDEPLOY_* overrides from the environment."""
    for key in list(os.environ):
        if key.startswith("DEVDEPLOY_"):
            monkeypatch.delenv(key)
