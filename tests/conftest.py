# tests/conftest.py
import os
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Set, Tuple

import pytest

from setup.config_models import AppSettings

DEFAULT_RESPONSES: Dict[Tuple[str, ...], Tuple[int, str]] = {
    ("lsb_release", "-cs"): (0, "jammy\n"),
    ("dpkg", "--print-architecture"): (0, "amd64\n"),
    ("curl",): (0, "#!/bin/sh\necho installing\n"),
}


class FakeHost:
    """
    Stands in for ``subprocess.run``. Records every command, answers from a
    prefix table and performs ``tee -a`` appends for real so source-list
    files can be inspected.
    """

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.inputs: List[Optional[str]] = []
        self.responses: Dict[Tuple[str, ...], Tuple[int, str]] = dict(DEFAULT_RESPONSES)
        self.missing_commands: Set[str] = set()

    def respond(self, prefix: Sequence[str], returncode: int = 0, stdout: str = "") -> None:
        self.responses[tuple(prefix)] = (returncode, stdout)

    @staticmethod
    def effective(command: Sequence[str]) -> List[str]:
        """The command without sudo/-E, with an absolute program path reduced to its name."""
        cmd = list(command)
        if cmd and cmd[0] == "sudo":
            cmd = cmd[1:]
            if cmd and cmd[0] == "-E":
                cmd = cmd[1:]
        if cmd and os.path.isabs(cmd[0]):
            cmd[0] = os.path.basename(cmd[0])
        return cmd

    def _lookup(self, cmd: List[str]) -> Tuple[int, str]:
        best: Optional[Tuple[str, ...]] = None
        for prefix in self.responses:
            if tuple(cmd[: len(prefix)]) == prefix and (best is None or len(prefix) > len(best)):
                best = prefix
        return self.responses[best] if best is not None else (0, "")

    def which(self, name: str) -> Optional[str]:
        return None if name in self.missing_commands else f"/usr/bin/{name}"

    def ran(self, *prefix: str) -> List[List[str]]:
        """Effective commands starting with ``prefix``."""
        return [
            self.effective(c) for c in self.calls
            if tuple(self.effective(c)[: len(prefix)]) == prefix
        ]

    def index_of(self, *prefix: str) -> int:
        for i, c in enumerate(self.calls):
            if tuple(self.effective(c)[: len(prefix)]) == prefix:
                return i
        return -1

    def __call__(self, command, check=False, capture_output=False, text=True, input=None):
        cmd = list(command)
        self.calls.append(cmd)
        self.inputs.append(input)
        effective = self.effective(cmd)

        if effective[0] in self.missing_commands:
            raise FileNotFoundError(2, "No such file or directory", effective[0])

        returncode, stdout = self._lookup(effective)
        if returncode == 0 and effective[:2] == ["tee", "-a"]:
            target = Path(effective[2])
            target.parent.mkdir(parents=True, exist_ok=True)
            with open(target, "a", encoding="utf-8") as f:
                f.write(input or "")

        if check and returncode != 0:
            raise subprocess.CalledProcessError(returncode, cmd, output=stdout, stderr="")
        return subprocess.CompletedProcess(
            cmd,
            returncode,
            stdout=stdout if capture_output else None,
            stderr="" if capture_output else None,
        )


@pytest.fixture
def home_dir(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("PATH", "/usr/bin:/bin")
    return home


@pytest.fixture
def fake_host(mocker, monkeypatch, home_dir):
    """A non-root host where every command succeeds unless told otherwise."""
    host = FakeHost()
    monkeypatch.setattr(subprocess, "run", host)
    mocker.patch("os.geteuid", return_value=1000)
    mocker.patch("shutil.which", side_effect=host.which)
    mocker.patch("getpass.getuser", return_value="dev")
    return host


@pytest.fixture
def app_settings(tmp_path, home_dir):
    """Settings pointing every file the setup writes into tmp_path."""
    return AppSettings(
        shell_profile_path=home_dir / ".bashrc",
        apt_keyrings_dir=tmp_path / "keyrings",
        apt_sources_dir=tmp_path / "sources.list.d",
    )


@pytest.fixture
def settings_env(tmp_path, home_dir, monkeypatch):
    """The same redirections as ``app_settings``, supplied through the environment."""
    monkeypatch.setenv("WORKSTATION_SHELL_PROFILE_PATH", str(home_dir / ".bashrc"))
    monkeypatch.setenv("WORKSTATION_APT_KEYRINGS_DIR", str(tmp_path / "keyrings"))
    monkeypatch.setenv("WORKSTATION_APT_SOURCES_DIR", str(tmp_path / "sources.list.d"))
    monkeypatch.delenv("WORKSTATION_DEDUPLICATE_APPENDS", raising=False)
    return tmp_path
