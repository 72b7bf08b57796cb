# installer/build_essentials_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of the compiler toolchain and make.
"""
import logging
from typing import Optional

from common.command_utils import get_symbols, log_command_version, log_setup
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_build_essentials(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Installing build essentials (includes make)...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    apt_manager.install(static_config.BUILD_ESSENTIAL_PACKAGES, app_settings)

    log_setup(
        f"{symbols.get('success', '✅')} Build essentials installed",
        "success",
        logger_to_use,
        app_settings,
    )
    log_command_version(["make", "--version"], app_settings, logger_to_use)
