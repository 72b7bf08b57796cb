import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from installer.nodejs_installer import install_nodejs


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


def test_install_nodejs_runs_nodesource_script_then_apt(fake_host, app_settings, mock_logger):
    fake_host.respond(["curl"], stdout="#!/bin/bash\necho nodesource\n")
    fake_host.respond(["node", "--version"], stdout="v20.11.1\n")

    install_nodejs(app_settings, mock_logger)

    assert fake_host.ran("curl", "-fsSL", "https://deb.nodesource.com/setup_20.x")
    script_index = fake_host.index_of("bash", "-")
    assert fake_host.calls[script_index] == ["sudo", "-E", "bash", "-"]
    assert fake_host.inputs[script_index] == "#!/bin/bash\necho nodesource\n"
    assert script_index < fake_host.index_of("apt-get", "install", "-y", "nodejs")
    assert fake_host.ran("node", "--version")
    assert fake_host.ran("npm", "--version")
    mock_logger.info.assert_any_call("   node --version: v20.11.1", exc_info=False)


def test_install_nodejs_major_version_setting(fake_host, app_settings, mock_logger):
    settings = app_settings.model_copy(
        update={"nodejs": app_settings.nodejs.model_copy(update={"major_version": 22})}
    )

    install_nodejs(settings, mock_logger)

    assert fake_host.ran("curl", "-fsSL", "https://deb.nodesource.com/setup_22.x")


def test_install_nodejs_script_failure_stops(fake_host, app_settings, mock_logger):
    fake_host.respond(["bash"], returncode=1)

    with pytest.raises(subprocess.CalledProcessError):
        install_nodejs(app_settings, mock_logger)

    assert not fake_host.ran("apt-get", "install")
    mock_logger.error.assert_called()


def test_install_nodejs_missing_node_fails(fake_host, app_settings, mock_logger):
    fake_host.missing_commands.add("node")

    with pytest.raises(FileNotFoundError):
        install_nodejs(app_settings, mock_logger)
