# installer/nodejs_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of Node.js and NPM from the NodeSource repository.
"""
import logging
from typing import Optional

from common.command_utils import (
    get_symbols,
    log_command_version,
    log_setup,
    pipe_remote_script,
)
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_nodejs(
        app_settings: AppSettings,
        current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    major_version = app_settings.nodejs.major_version
    log_setup(f"{symbols.get('step', '➡️')} Installing Node.js {major_version}.x and NPM using NodeSource...",
              "info", logger_to_use, app_settings)
    try:
        # The NodeSource script registers its own apt source and refreshes the index.
        pipe_remote_script(app_settings.nodejs.setup_url, ["bash", "-"], app_settings,
                           elevated=True, preserve_env=True, current_logger=logger_to_use)

        apt_manager = AptManager(logger=logger_to_use)
        log_setup(f"{symbols.get('package', '📦')} Installing Node.js...", "info", logger_to_use, app_settings)
        apt_manager.install(static_config.NODEJS_PACKAGES, app_settings)
    except Exception as e:
        log_setup(f"{symbols.get('error', '❌')} Failed to install Node.js: {e}", "error", logger_to_use,
                  app_settings, exc_info=True)
        raise

    log_setup(f"{symbols.get('success', '✅')} Node.js and NPM installed", "success", logger_to_use, app_settings)
    log_command_version(["node", "--version"], app_settings, logger_to_use)
    log_command_version(["npm", "--version"], app_settings, logger_to_use)
