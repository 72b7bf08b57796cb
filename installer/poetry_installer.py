# installer/poetry_installer.py
# -*- coding: utf-8 -*-
"""
Handles the installation of Poetry using the official installer script.
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


def install_poetry(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> None:
    """
    Runs ``curl -sSL <installer> | python3 -`` as the invoking user, then
    puts ``~/.local/bin`` on PATH. The version check is best-effort since a
    fresh shell may be needed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('step', '➡️')} Installing Poetry...",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        pipe_remote_script(
            str(app_settings.poetry_installer_url),
            ["python3", "-"],
            app_settings,
            curl_flags="-sSL",
            current_logger=logger_to_use,
        )
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} Failed to install Poetry: {e}",
            "error",
            logger_to_use,
            app_settings,
        )
        raise

    bin_dir = Path.home() / static_config.POETRY_BIN_RELATIVE_DIR
    add_directory_to_path(
        static_config.POETRY_BIN_PROFILE_DIR, bin_dir, app_settings, logger_to_use
    )

    log_setup(
        f"{symbols.get('success', '✅')} Poetry installed",
        "success",
        logger_to_use,
        app_settings,
    )
    try_log_command_version(
        [str(bin_dir / "poetry"), "--version"],
        app_settings,
        "Poetry installed but may need terminal restart",
        logger_to_use,
    )
