# installer/terraform_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of Terraform from the HashiCorp apt repository.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_command_version, log_setup
from common.debian.apt_manager import AptManager
from common.system_utils import get_distro_codename
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_terraform(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    tf_settings = app_settings.terraform
    log_setup(
        f"{symbols.get('step', '➡️')} Installing Terraform...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    keyring_path = app_settings.keyring_path(tf_settings.keyring_name)
    apt_manager.add_gpg_key_from_url(
        str(tf_settings.gpg_url), keyring_path, app_settings
    )

    codename = get_distro_codename(app_settings, current_logger=logger_to_use)
    if not codename:
        raise EnvironmentError(
            "Could not determine distribution codename for the HashiCorp repository."
        )
    repo_url = str(tf_settings.repo_url).rstrip("/")
    apt_manager.add_repository(
        f"deb [signed-by={keyring_path}] {repo_url} {codename} main",
        app_settings.source_list_path(tf_settings.source_list_name),
        app_settings,
        update_after=True,
    )
    apt_manager.install(static_config.TERRAFORM_PACKAGES, app_settings)

    log_setup(
        f"{symbols.get('success', '✅')} Terraform installed",
        "success",
        logger_to_use,
        app_settings,
    )
    log_command_version(["terraform", "--version"], app_settings, logger_to_use)
