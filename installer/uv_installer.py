# installer/uv_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of UV (Astral's Python package installer).
"""
import logging
from pathlib import Path
from typing import Optional

from common.command_utils import (
    get_symbols,
    log_setup,
    pipe_remote_script,
    try_log_command_version,
)
from common.system_utils import add_directory_to_path
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def install_uv(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Installing UV...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        pipe_remote_script(
            str(app_settings.uv_installer_url),
            ["sh"],
            app_settings,
            curl_flags="-LsSf",
            current_logger=logger_to_use,
        )
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} Failed to install UV: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    bin_dir = Path.home() / static_config.UV_BIN_RELATIVE_DIR
    add_directory_to_path(
        static_config.UV_BIN_PROFILE_DIR, bin_dir, app_settings, logger_to_use
    )

    log_setup(
        f"{symbols.get('success', '✅')} UV installed",
        "success",
        logger_to_use,
        app_settings,
    )
    try_log_command_version(
        [str(bin_dir / "uv"), "--version"],
        app_settings,
        "UV installed but may need terminal restart",
        logger_to_use,
    )
