import logging
import subprocess
from unittest.mock import MagicMock

import pytest

from installer.docker_installer import install_docker_engine
from setup import config as static_config


@pytest.fixture
def mock_logger():
    return MagicMock(spec=logging.Logger)


def test_install_docker_engine_full_sequence(fake_host, app_settings, mock_logger):
    install_docker_engine(app_settings, mock_logger)

    keyring = app_settings.keyring_path("docker.gpg")
    source_list = app_settings.source_list_path("docker")
    assert fake_host.ran("apt-get", "remove", "-y", *static_config.DOCKER_CONFLICTING_PACKAGES)
    assert fake_host.ran("curl", "-fsSL", "https://download.docker.com/linux/ubuntu/gpg")
    assert source_list.read_text() == (
        f"deb [arch=amd64 signed-by={keyring}] https://download.docker.com/linux/ubuntu jammy stable\n"
    )
    assert fake_host.ran("apt-get", "install", "-y", *static_config.DOCKER_PACKAGES)
    assert fake_host.ran("usermod", "-aG", "docker", "dev")

    order = [
        fake_host.index_of("apt-get", "remove"),
        fake_host.index_of("gpg", "--batch"),
        fake_host.index_of("tee", "-a", str(source_list)),
        fake_host.index_of("apt-get", "update"),
        fake_host.index_of("apt-get", "install"),
        fake_host.index_of("usermod"),
        fake_host.index_of("docker", "--version"),
        fake_host.index_of("docker", "compose", "version"),
    ]
    assert -1 not in order
    assert order == sorted(order)
    mock_logger.warning.assert_called_with(
        "⚠️ You may need to log out and back in for Docker group membership to take effect",
        exc_info=False,
    )


def test_version_checks_run_elevated(fake_host, app_settings, mock_logger):
    install_docker_engine(app_settings, mock_logger)

    assert ["sudo", "docker", "--version"] in fake_host.calls
    assert ["sudo", "docker", "compose", "version"] in fake_host.calls


def test_conflicting_package_removal_failure_is_ignored(fake_host, app_settings, mock_logger):
    fake_host.respond(["apt-get", "remove"], returncode=100)

    install_docker_engine(app_settings, mock_logger)

    assert fake_host.ran("usermod", "-aG", "docker", "dev")


def test_arm64_architecture_in_source_line(fake_host, app_settings, mock_logger):
    fake_host.respond(["dpkg", "--print-architecture"], stdout="arm64\n")

    install_docker_engine(app_settings, mock_logger)

    assert "[arch=arm64 " in app_settings.source_list_path("docker").read_text()


def test_missing_codename_aborts_before_repository(fake_host, app_settings, mock_logger):
    fake_host.respond(["lsb_release", "-cs"], returncode=1)

    with pytest.raises(EnvironmentError):
        install_docker_engine(app_settings, mock_logger)

    assert not app_settings.source_list_path("docker").exists()
    assert not fake_host.ran("apt-get", "install")


def test_gpg_failure_aborts(fake_host, app_settings, mock_logger):
    fake_host.respond(["gpg"], returncode=2)

    with pytest.raises(subprocess.CalledProcessError):
        install_docker_engine(app_settings, mock_logger)

    assert not fake_host.ran("tee")


def test_usermod_failure_propagates(fake_host, app_settings, mock_logger):
    fake_host.respond(["usermod"], returncode=6)

    with pytest.raises(subprocess.CalledProcessError) as excinfo:
        install_docker_engine(app_settings, mock_logger)

    assert excinfo.value.returncode == 6
    assert not fake_host.ran("docker", "--version")


def test_debian_distribution_setting(fake_host, app_settings, mock_logger):
    settings = app_settings.model_copy(
        update={"docker": app_settings.docker.model_copy(update={"distribution": "debian"})}
    )
    fake_host.respond(["lsb_release", "-cs"], stdout="bookworm\n")

    install_docker_engine(settings, mock_logger)

    assert fake_host.ran("curl", "-fsSL", "https://download.docker.com/linux/debian/gpg")
    assert settings.source_list_path("docker").read_text().endswith(
        "https://download.docker.com/linux/debian bookworm stable\n"
    )
