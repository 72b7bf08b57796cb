# setup/core_prerequisites.py
# -*- coding: utf-8 -*-
"""
Refreshes the system and installs the utilities later steps rely on
(HTTPS transport, certificates, key management, codename lookup).
"""

import logging
from typing import Optional

from common.command_utils import get_symbols, log_setup
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def update_system(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Refresh the package index, upgrade installed packages and install the
    prerequisite utilities. Any failure propagates and aborts the run.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Updating system packages...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    apt_manager.update(app_settings)
    apt_manager.upgrade(app_settings)
    apt_manager.install(static_config.SYSTEM_PREREQ_PACKAGES, app_settings)

    log_setup(
        f"{symbols.get('success', '✅')} System packages updated",
        "success",
        logger_to_use,
        app_settings,
    )
