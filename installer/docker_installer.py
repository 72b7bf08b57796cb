# installer/docker_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of Docker Engine and the Compose plugin.
"""

import logging
from typing import Optional

from common.command_utils import (
    get_symbols,
    log_command_version,
    log_setup,
    run_elevated_command,
)
from common.debian.apt_manager import AptManager
from common.system_utils import (
    get_current_user,
    get_distro_codename,
    get_dpkg_architecture,
)
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_docker_engine(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Sets up Docker Engine from Docker's official apt repository.

    This function:
    - Removes conflicting distribution packages (best-effort).
    - Downloads Docker's GPG key into the apt keyrings directory.
    - Appends the Docker apt source for the system architecture and codename,
      then refreshes the package index.
    - Installs `docker-ce`, `docker-ce-cli`, `containerd.io`,
      `docker-buildx-plugin` and `docker-compose-plugin`.
    - Adds the invoking user to the docker group. Membership only applies
      after the next login.
    - Prints `docker --version` and `docker compose version`.

    Parameters:
        app_settings (AppSettings): Application settings.
        current_logger (Optional[logging.Logger]): An optional logger instance. If
            not provided, a module-level logger is used.

    Raises:
        Exception: Raised for failures in any required step.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    docker_settings = app_settings.docker
    log_setup(
        f"{symbols.get('step', '➡️')} Installing Docker...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    apt_manager.remove(static_config.DOCKER_CONFLICTING_PACKAGES, app_settings)

    key_dest_final = app_settings.keyring_path(docker_settings.keyring_name)
    try:
        apt_manager.add_gpg_key_from_url(
            docker_settings.gpg_url, key_dest_final, app_settings
        )
        log_setup(
            f"{symbols.get('success', '✅')} Docker GPG key installed.",
            "success",
            logger_to_use,
            app_settings,
        )
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} Failed to download/install Docker GPG key: {e}",
            "error",
            logger_to_use,
            app_settings,
            exc_info=True,
        )
        raise

    try:
        arch = get_dpkg_architecture(app_settings, current_logger=logger_to_use)
        codename = get_distro_codename(
            app_settings, current_logger=logger_to_use
        )
        if not codename:
            raise EnvironmentError(
                "Could not determine distribution codename for Docker."
            )
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} Could not get system arch/codename for Docker: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    docker_source_line = (
        f"deb [arch={arch} signed-by={key_dest_final}] "
        f"{docker_settings.repo_url} {codename} stable"
    )
    try:
        apt_manager.add_repository(
            docker_source_line,
            app_settings.source_list_path(docker_settings.source_list_name),
            app_settings,
            update_after=True,
        )
        log_setup(
            f"{symbols.get('success', '✅')} Docker apt source configured and updated",
            "success",
            logger_to_use,
            app_settings,
        )
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} Failed to configure Docker apt source: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    pkgs = static_config.DOCKER_PACKAGES
    log_setup(
        f"{symbols.get('package', '📦')} Installing Docker packages: {', '.join(pkgs)}...",
        "info",
        logger_to_use,
        app_settings,
    )
    apt_manager.install(pkgs, app_settings)

    user = get_current_user()
    log_setup(
        f"{symbols.get('gear', '⚙️')} Adding user {user} to '{docker_settings.group}' group...",
        "info",
        logger_to_use,
        app_settings,
    )
    run_elevated_command(
        ["usermod", "-aG", docker_settings.group, user],
        app_settings,
        current_logger=logger_to_use,
    )

    log_setup(
        f"{symbols.get('success', '✅')} Docker installed",
        "success",
        logger_to_use,
        app_settings,
    )
    log_command_version(
        ["docker", "--version"], app_settings, logger_to_use, elevated=True
    )
    log_command_version(
        ["docker", "compose", "version"],
        app_settings,
        logger_to_use,
        elevated=True,
    )
    log_setup(
        f"{symbols.get('warning', '!')} You may need to log out and back in for Docker group membership to take effect",
        "warning",
        logger_to_use,
        app_settings,
    )
