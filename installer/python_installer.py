# installer/python_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of the system Python 3 toolchain.
"""
import logging
from typing import Optional

from common.command_utils import (
    command_exists,
    get_symbols,
    log_command_version,
    log_setup,
    run_elevated_command,
)
from common.debian.apt_manager import AptManager
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_python(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Installs python3, pip, venv and headers, and links ``python`` to
    ``python3`` when no ``python`` command is on PATH.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Installing Python...",
        "info",
        logger_to_use,
        app_settings,
    )

    apt_manager = AptManager(logger=logger_to_use)
    apt_manager.install(static_config.PYTHON_SYSTEM_PACKAGES, app_settings)

    if not command_exists("python"):
        log_setup(
            f"{symbols.get('gear', '⚙️')} Linking {static_config.PYTHON_SYMLINK} -> {static_config.PYTHON3_BINARY}",
            "info",
            logger_to_use,
            app_settings,
        )
        run_elevated_command(
            ["ln", "-sf", static_config.PYTHON3_BINARY, static_config.PYTHON_SYMLINK],
            app_settings,
            current_logger=logger_to_use,
        )

    log_setup(
        f"{symbols.get('success', '✅')} Python installed",
        "success",
        logger_to_use,
        app_settings,
    )
    log_command_version(["python3", "--version"], app_settings, logger_to_use)
    log_command_version(["pip3", "--version"], app_settings, logger_to_use)
