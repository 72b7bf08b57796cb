# common/file_utils.py
# -*- coding: utf-8 -*-
"""
File system utility functions for appending configuration lines.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from setup.config_models import AppSettings

from .command_utils import get_symbols, log_setup, run_elevated_command

module_logger = logging.getLogger(__name__)


def file_contains_line(file_path: Union[str, Path], line: str) -> bool:
    """Return True if ``line`` appears verbatim (ignoring trailing whitespace) in the file."""
    path = Path(file_path)
    if not path.is_file():
        return False
    wanted = line.rstrip()
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return any(existing.rstrip() == wanted for existing in f)


def append_line_to_file(
    file_path: Union[str, Path],
    line: str,
    app_settings: AppSettings,
    elevated: bool = False,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Append a single line to a file.

    Unless ``app_settings.deduplicate_appends`` is set, the line is appended
    on every call, so re-running the setup leaves duplicates behind.

    Parameters:
        file_path: Target file. Created if missing.
        line: The line to append, without trailing newline.
        app_settings: Application settings.
        elevated: Append through ``sudo tee -a`` for root-owned files such
            as apt source lists.
        current_logger: Logger instance to use.

    Returns:
        bool: True if the line was written, False if it was skipped as a duplicate.

    Raises:
        subprocess.CalledProcessError: If the elevated append fails.
        OSError: If the direct append fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    if app_settings.deduplicate_appends and file_contains_line(file_path, line):
        log_setup(
            f"{symbols.get('info', 'ℹ️')} '{line}' already present in {file_path}. Skipping append.",
            "info",
            logger_to_use,
            app_settings,
        )
        return False

    if elevated:
        run_elevated_command(
            ["tee", "-a", str(file_path)],
            app_settings,
            cmd_input=f"{line}\n",
            capture_output=True,
            current_logger=logger_to_use,
            log_output=False,
        )
    else:
        with open(file_path, "a", encoding="utf-8") as f:
            f.write(f"{line}\n")

    log_setup(
        f"{symbols.get('success', '✅')} Appended to {file_path}: {line}",
        "debug",
        logger_to_use,
        app_settings,
    )
    return True
