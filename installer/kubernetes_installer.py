# installer/kubernetes_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of kubectl, kubeadm and kubelet from pkgs.k8s.io.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_command_version, log_setup
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_kubernetes_tools(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Registers the Kubernetes apt repository for the configured minor
    version, installs the tools and holds them so a later upgrade does not
    move them off that version.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    k8s_settings = app_settings.kubernetes
    log_setup(
        f"{symbols.get('step', '➡️')} Installing Kubernetes tools ({k8s_settings.minor_version})...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    keyring_path = app_settings.keyring_path(k8s_settings.keyring_name)
    apt_manager.add_gpg_key_from_url(
        k8s_settings.gpg_url, keyring_path, app_settings
    )
    apt_manager.add_repository(
        f"deb [signed-by={keyring_path}] {k8s_settings.repo_url} /",
        app_settings.source_list_path(k8s_settings.source_list_name),
        app_settings,
        update_after=True,
    )
    apt_manager.install(static_config.KUBERNETES_PACKAGES, app_settings)
    apt_manager.hold(static_config.KUBERNETES_HELD_PACKAGES, app_settings)

    log_setup(
        f"{symbols.get('success', '✅')} Kubernetes tools installed",
        "success",
        logger_to_use,
        app_settings,
    )
    log_command_version(["kubectl", "version", "--client"], app_settings, logger_to_use)
