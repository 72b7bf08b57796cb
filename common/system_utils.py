# common/system_utils.py
# -*- coding: utf-8 -*-
"""
System-level utility functions for the workstation setup.

This module includes functions for inspecting the invoking identity,
determining the distribution codename and package architecture, and
extending the user's PATH.
"""

import getpass
import logging
import os
import subprocess
from pathlib import Path
from typing import Optional

from common.command_utils import get_symbols, log_setup, run_command
from common.file_utils import append_line_to_file
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)


def is_running_as_root() -> bool:
    """Return True when the effective user id is root."""
    return os.geteuid() == 0


def get_current_user() -> str:
    """Name of the invoking user, as used for group membership."""
    return getpass.getuser()


def get_distro_codename(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Get the distribution codename (e.g., 'jammy', 'bookworm') via ``lsb_release -cs``.

    Returns None when it cannot be determined.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    try:
        result: subprocess.CompletedProcess = run_command(
            ["lsb_release", "-cs"],
            app_settings,
            capture_output=True,
            check=True,
            current_logger=logger_to_use,
        )
    except FileNotFoundError:
        log_setup(
            f"{symbols.get('warning', '!')} lsb_release command not found. Cannot determine distribution codename.",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None
    except subprocess.CalledProcessError:
        # run_command has already logged the failure.
        return None

    codename = (result.stdout or "").strip()
    return codename or None


def get_dpkg_architecture(
    app_settings: Optional[AppSettings],
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Get the Debian package architecture (e.g., 'amd64').

    Raises:
        subprocess.CalledProcessError: If dpkg fails.
        EnvironmentError: If dpkg prints nothing.
    """
    result = run_command(
        ["dpkg", "--print-architecture"],
        app_settings,
        capture_output=True,
        check=True,
        current_logger=current_logger,
    )
    arch = (result.stdout or "").strip()
    if not arch:
        raise EnvironmentError("dpkg did not report a package architecture.")
    return arch


def add_directory_to_path(
    profile_directory: str,
    resolved_directory: Path,
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Make a user-local bin directory available now and in future shells.

    Appends ``export PATH="<profile_directory>:$PATH"`` to the shell profile
    and prepends ``resolved_directory`` to this process's PATH so the rest of
    the run can find freshly installed tools.

    Args:
        profile_directory: Directory as written to the profile, e.g. ``$HOME/.local/bin``.
        resolved_directory: The same directory resolved for the current user.
        app_settings: Application settings (profile path, append behaviour).
        current_logger: Optional logger instance.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    export_line = f'export PATH="{profile_directory}:$PATH"'
    append_line_to_file(
        app_settings.shell_profile_path,
        export_line,
        app_settings,
        current_logger=logger_to_use,
    )

    current_path = os.environ.get("PATH", "")
    path_entries = current_path.split(os.pathsep) if current_path else []
    if app_settings.deduplicate_appends and str(resolved_directory) in path_entries:
        return
    os.environ["PATH"] = os.pathsep.join([str(resolved_directory)] + path_entries)
    log_setup(
        f"{symbols.get('info', 'ℹ️')} Added {resolved_directory} to PATH (profile: {app_settings.shell_profile_path}).",
        "info",
        logger_to_use,
        app_settings,
    )
