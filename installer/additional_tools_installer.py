# installer/additional_tools_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of everyday command-line utilities.
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_setup
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_additional_tools(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Installing additional development tools...",
        "info",
        logger_to_use,
        app_settings,
    )
    AptManager(logger=logger_to_use).install(
        static_config.ADDITIONAL_TOOL_PACKAGES, app_settings
    )
    log_setup(
        f"{symbols.get('success', '✅')} Additional tools installed",
        "success",
        logger_to_use,
        app_settings,
    )
