import logging
import os
import subprocess
from unittest.mock import MagicMock

import pytest

from installer.poetry_installer import install_poetry
from installer.uv_installer import install_uv


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


def test_install_poetry(fake_host, app_settings, home_dir, mock_logger):
    fake_host.respond(["curl"], stdout="print('poetry installer')\n")

    install_poetry(app_settings, mock_logger)

    assert fake_host.ran("curl", "-sSL", "https://install.python-poetry.org")
    script_index = fake_host.index_of("python3", "-")
    assert fake_host.calls[script_index] == ["python3", "-"]
    assert fake_host.inputs[script_index] == "print('poetry installer')\n"
    assert app_settings.shell_profile_path.read_text() == 'export PATH="$HOME/.local/bin:$PATH"\n'
    assert os.environ["PATH"].split(os.pathsep)[0] == str(home_dir / ".local" / "bin")
    assert fake_host.calls[-1] == [str(home_dir / ".local" / "bin" / "poetry"), "--version"]


def test_install_poetry_version_check_is_best_effort(fake_host, app_settings, mock_logger):
    fake_host.missing_commands.add("poetry")

    install_poetry(app_settings, mock_logger)

    mock_logger.warning.assert_called_with(
        "⚠️ Poetry installed but may need terminal restart", exc_info=False
    )


def test_install_poetry_installer_failure_propagates(fake_host, app_settings, mock_logger):
    fake_host.respond(["python3", "-"], returncode=1)

    with pytest.raises(subprocess.CalledProcessError):
        install_poetry(app_settings, mock_logger)

    assert not app_settings.shell_profile_path.exists()


def test_install_uv(fake_host, app_settings, home_dir, mock_logger):
    install_uv(app_settings, mock_logger)

    assert fake_host.ran("curl", "-LsSf", "https://astral.sh/uv/install.sh")
    assert fake_host.calls[fake_host.index_of("sh")] == ["sh"]
    assert app_settings.shell_profile_path.read_text() == 'export PATH="$HOME/.cargo/bin:$PATH"\n'
    assert fake_host.calls[-1] == [str(home_dir / ".cargo" / "bin" / "uv"), "--version"]


def test_install_uv_version_check_is_best_effort(fake_host, app_settings, mock_logger):
    fake_host.respond(["uv"], returncode=127)

    install_uv(app_settings, mock_logger)

    mock_logger.warning.assert_called_with(
        "⚠️ UV installed but may need terminal restart", exc_info=False
    )


def test_install_uv_download_failure_propagates(fake_host, app_settings, mock_logger):
    fake_host.respond(["curl"], returncode=7)

    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        install_uv(app_settings, mock_logger)

    assert excinfo.value.returncode == 7
    assert not fake_host.ran("sh")
