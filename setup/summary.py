# setup/summary.py
# -*- coding: utf-8 -*-
"""
Prints the end-of-run checklist, follow-up notes and the installed versions.

Everything here is informational: a version query that fails (typically
because the tool needs a new login shell) is shown as a warning and never
changes the exit status.
"""

import logging
import subprocess
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from common.command_utils import (
    get_symbols,
    log_setup,
    run_command,
    run_elevated_command,
)
from setup import config as static_config
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)

INSTALLED_COMPONENTS: List[str] = [
    "Make/Makefile support (build-essential)",
    "Python 3 + pip",
    "Poetry (Python package manager)",
    "UV (Fast Python package installer)",
    "Node.js + NPM",
    "Docker + Docker Compose",
    "Kubernetes tools (kubectl, kubeadm, kubelet)",
    "Terraform",
    "Additional development tools",
]

IMPORTANT_NOTES: List[str] = [
    "Restart your terminal or run 'source {profile}' to update PATH",
    "Log out and back in for Docker group membership to take effect",
    "For Poetry and UV, you may need to restart your terminal",
]


def _version_queries() -> List[Tuple[str, List[str], bool, bool]]:
    """(label, command, elevated, first line only) for each summary line."""
    home = Path.home()
    return [
        ("Make", ["make", "--version"], False, True),
        ("Python", ["python3", "--version"], False, False),
        ("Poetry", [str(home / static_config.POETRY_BIN_RELATIVE_DIR / "poetry"), "--version"], False, False),
        ("UV", [str(home / static_config.UV_BIN_RELATIVE_DIR / "uv"), "--version"], False, False),
        ("Node.js", ["node", "--version"], False, False),
        ("NPM", ["npm", "--version"], False, False),
        ("Docker", ["docker", "--version"], True, False),
        ("Docker Compose", ["docker", "compose", "version"], True, False),
        ("kubectl", ["kubectl", "version", "--client"], False, False),
        ("Terraform", ["terraform", "--version"], False, True),
    ]


def query_version(
    command: List[str],
    app_settings: AppSettings,
    elevated: bool = False,
    first_line_only: bool = False,
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Return a tool's version output, or the "restart terminal" notice if the
    command is missing or fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    runner = run_elevated_command if elevated else run_command
    try:
        result = runner(
            command,
            app_settings,
            capture_output=True,
            check=True,
            current_logger=logger_to_use,
        )
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        log_setup(
            f"{get_symbols(app_settings).get('warning', '!')} Could not query version with '{' '.join(command)}': {e}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return static_config.VERSION_UNAVAILABLE_MESSAGE

    output = (result.stdout or "").strip()
    if not output:
        return static_config.VERSION_UNAVAILABLE_MESSAGE
    if first_line_only:
        return output.splitlines()[0]
    return output


def print_installation_summary(
    app_settings: AppSettings, current_logger: Optional[logging.Logger] = None
) -> Dict[str, str]:
    """
    Print the checklist, the follow-up notes and one line per tool version.

    Returns:
        Mapping of tool label to the version text that was printed.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_setup(
        f"{symbols.get('sparkles', '✨')} All installations completed!",
        "success",
        logger_to_use,
        app_settings,
    )

    print("")
    log_setup("Installation Summary:", "info", logger_to_use, app_settings)
    for component in INSTALLED_COMPONENTS:
        print(f"{symbols.get('success', '✅')} {component}")

    print("")
    log_setup(
        f"{symbols.get('warning', '!')} IMPORTANT NOTES:",
        "warning",
        logger_to_use,
        app_settings,
    )
    for index, note in enumerate(IMPORTANT_NOTES, start=1):
        print(f"{index}. {note.format(profile=app_settings.shell_profile_path)}")

    print("")
    log_setup("Versions installed:", "info", logger_to_use, app_settings)
    versions: Dict[str, str] = {}
    for label, command, elevated, first_line_only in _version_queries():
        versions[label] = query_version(
            command,
            app_settings,
            elevated=elevated,
            first_line_only=first_line_only,
            current_logger=logger_to_use,
        )
        print(f"{label}: {versions[label]}")
    return versions
