# common/command_utils.py
# -*- coding: utf-8 -*-
"""
Utilities for executing external commands and logging their output.

Every external program the setup touches goes through ``run_command``,
which is the single seam tests replace to stub the host.
"""

import logging
import os
import shutil
import subprocess
from typing import Dict, List, Optional

# Import AppSettings for type hinting and SYMBOLS_DEFAULT for fallback
from setup.config_models import SYMBOLS_DEFAULT, AppSettings

module_logger = logging.getLogger(__name__)


def log_setup(
    message: str,
    level: str = "info",
    current_logger: Optional[logging.Logger] = None,
    app_settings: Optional[AppSettings] = None,
    exc_info: bool = False,
) -> None:
    """
    Logs a setup message at the requested level.

    Args:
        message (str): The log message to be recorded.
        level (str): The severity level of the log message. Defaults to "info". Common options
            include "debug", "info", "success", "warning", "error", and "critical".
            "success" is logged at INFO.
        current_logger (Optional[logging.Logger]): A logger instance to use for logging. If not provided,
            a module-level logger will be used.
        app_settings (Optional[AppSettings]): Optional application settings that can influence logging behavior.
        exc_info (bool): Indicator to include exception details in the log. By default, this is set to False.
    """
    effective_logger = current_logger if current_logger else module_logger

    if level == "warning":
        effective_logger.warning(message, exc_info=exc_info)
    elif level == "error":
        effective_logger.error(message, exc_info=exc_info)
    elif level == "critical":
        effective_logger.critical(message, exc_info=exc_info)
    elif level == "debug":
        effective_logger.debug(message, exc_info=exc_info)
    else:
        effective_logger.info(message, exc_info=exc_info)


def get_symbols(app_settings: Optional[AppSettings]) -> Dict[str, str]:
    """Return the settings' log symbols, falling back to the defaults."""
    if app_settings is not None and getattr(app_settings, "symbols", None):
        return app_settings.symbols
    return SYMBOLS_DEFAULT


def _get_elevated_command_prefix(preserve_env: bool = False) -> List[str]:
    """
    Determines the command prefix that ensures elevated privileges when required.

    Returns an empty list when the effective user is already root, otherwise
    ``["sudo"]`` (``["sudo", "-E"]`` when the caller's environment must be
    preserved).
    """
    if os.geteuid() == 0:
        return []
    return ["sudo", "-E"] if preserve_env else ["sudo"]


def run_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    text: bool = True,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    log_output: bool = True,
) -> subprocess.CompletedProcess:
    """
    Executes a system command and logs the process details and results.

    Args:
        command (List[str]): The program and its arguments. No shell is involved.
        app_settings (Optional[AppSettings]): Settings providing the logging symbols.
        check (bool): Whether to raise a CalledProcessError when a non-zero exit code is returned.
            Defaults to True.
        capture_output (bool): Whether to capture standard output and standard error. Defaults to False.
        text (bool): Indicates if the output streams should be interpreted as text. Defaults to True.
        cmd_input (Optional[str]): Input to be passed to the command's standard input. Defaults to None.
        current_logger (Optional[logging.Logger]): A logger to use for logging details.
        log_output (bool): Whether captured stdout/stderr are echoed to the log. Disable for
            downloaded installer scripts.

    Returns:
        subprocess.CompletedProcess: The completed process instance.

    Raises:
        subprocess.CalledProcessError: Raised if the process returns a non-zero exit code and the check
            parameter is set to True.
        FileNotFoundError: Raised if the specified command is not found on the system.
    """
    effective_logger = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)

    log_setup(
        f"{symbols.get('gear', '⚙️')} Executing: {subprocess.list2cmdline(command)}",
        "info",
        effective_logger,
        app_settings,
    )
    try:
        result = subprocess.run(
            command,
            check=check,
            capture_output=capture_output,
            text=text,
            input=cmd_input,
        )
        if capture_output and log_output:
            if result.stdout and result.stdout.strip():
                log_setup(
                    f"   stdout: {result.stdout.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
            if (
                result.stderr
                and result.stderr.strip()
                and (not check or result.returncode == 0)
            ):
                log_setup(
                    f"   stderr: {result.stderr.strip()}",
                    "debug",
                    effective_logger,
                    app_settings,
                )
        return result
    except subprocess.CalledProcessError as e:
        cmd_executed_str = (
            subprocess.list2cmdline(e.cmd)
            if isinstance(e.cmd, list)
            else str(e.cmd)
        )
        log_setup(
            f"{symbols.get('error', '❌')} Command `{cmd_executed_str}` failed (rc {e.returncode}).",
            "error",
            effective_logger,
            app_settings,
        )
        if log_output:
            if e.stdout and hasattr(e.stdout, "strip") and e.stdout.strip():
                log_setup(
                    f"   stdout: {e.stdout.strip()}",
                    "error",
                    effective_logger,
                    app_settings,
                )
            if e.stderr and hasattr(e.stderr, "strip") and e.stderr.strip():
                log_setup(
                    f"   stderr: {e.stderr.strip()}",
                    "error",
                    effective_logger,
                    app_settings,
                )
        raise
    except FileNotFoundError as e:
        log_setup(
            f"{symbols.get('error', '❌')} Command not found: {e.filename}. Ensure it's installed and in PATH.",
            "error",
            effective_logger,
            app_settings,
        )
        raise


def run_elevated_command(
    command: List[str],
    app_settings: Optional[AppSettings],
    check: bool = True,
    capture_output: bool = False,
    cmd_input: Optional[str] = None,
    current_logger: Optional[logging.Logger] = None,
    preserve_env: bool = False,
    log_output: bool = True,
) -> subprocess.CompletedProcess:
    """
    Executes a command with elevated permissions via ``sudo``.

    Args:
        command: The command to execute, provided as a list of strings.
        app_settings: The application settings.
        check: If True, raises an exception if the command execution fails.
        capture_output: If True, captures the output of the command.
        cmd_input: Input passed to the command via standard input.
        current_logger: Logger for command output and errors.
        preserve_env: Run ``sudo -E`` so the caller's environment survives elevation.
        log_output: Whether captured output is echoed to the log.

    Returns:
        subprocess.CompletedProcess: The result of the command execution.

    Raises:
        subprocess.CalledProcessError: Raised if check is True and the command fails.
    """
    prefix = _get_elevated_command_prefix(preserve_env=preserve_env)
    elevated_command_list = prefix + list(command)
    return run_command(
        elevated_command_list,
        app_settings,
        check=check,
        capture_output=capture_output,
        text=True,
        cmd_input=cmd_input,
        current_logger=current_logger,
        log_output=log_output,
    )


def command_exists(command_name: str) -> bool:
    """
    Check if a command exists in the system's PATH.

    Parameters:
        command_name (str): The name of the command to check for existence.

    Returns:
        bool: True if the command is found in the system's PATH, False otherwise.
    """
    return shutil.which(command_name) is not None


def fetch_url_text(
    url: str,
    app_settings: Optional[AppSettings],
    curl_flags: str = "-fsSL",
    current_logger: Optional[logging.Logger] = None,
) -> str:
    """
    Downloads a text resource (installer script, armored key) with curl.

    No timeout is applied; a hung download blocks the run.

    Raises:
        subprocess.CalledProcessError: If curl fails.
    """
    result = run_command(
        ["curl", curl_flags, url],
        app_settings,
        capture_output=True,
        check=True,
        current_logger=current_logger,
        log_output=False,
    )
    return result.stdout


def log_command_version(
    command: List[str],
    app_settings: AppSettings,
    current_logger: Optional[logging.Logger] = None,
    elevated: bool = False,
) -> str:
    """
    Runs a tool's version command and logs its first output line.

    This is the post-install smoke check; a failure propagates like any
    other required command.

    Returns:
        The full stripped stdout of the version command.
    """
    logger_to_use = current_logger if current_logger else module_logger
    runner = run_elevated_command if elevated else run_command
    result = runner(
        command,
        app_settings,
        capture_output=True,
        check=True,
        current_logger=logger_to_use,
    )
    output = (result.stdout or "").strip()
    first_line = output.splitlines()[0] if output else ""
    log_setup(
        f"   {subprocess.list2cmdline(command)}: {first_line}",
        "info",
        logger_to_use,
        app_settings,
    )
    return output


def try_log_command_version(
    command: List[str],
    app_settings: AppSettings,
    warning_message: str,
    current_logger: Optional[logging.Logger] = None,
) -> Optional[str]:
    """
    Best-effort variant of ``log_command_version``: on failure logs
    ``warning_message`` and returns None instead of raising.
    """
    logger_to_use = current_logger if current_logger else module_logger
    try:
        return log_command_version(command, app_settings, logger_to_use)
    except (subprocess.CalledProcessError, FileNotFoundError):
        log_setup(
            f"{get_symbols(app_settings).get('warning', '!')} {warning_message}",
            "warning",
            logger_to_use,
            app_settings,
        )
        return None


def pipe_remote_script(
    url: str,
    interpreter: List[str],
    app_settings: AppSettings,
    curl_flags: str = "-fsSL",
    elevated: bool = False,
    preserve_env: bool = False,
    current_logger: Optional[logging.Logger] = None,
) -> None:
    """
    Download a vendor installer over HTTPS and feed it to an interpreter on
    stdin, the equivalent of ``curl <url> | <interpreter>``.

    Raises:
        subprocess.CalledProcessError: If the download or the script fails.
    """
    logger_to_use = current_logger if current_logger else module_logger
    symbols = get_symbols(app_settings)
    log_setup(
        f"{symbols.get('gear', '⚙️')} Downloading installer script from {url}...",
        "info",
        logger_to_use,
        app_settings,
    )
    script = fetch_url_text(url, app_settings, curl_flags, logger_to_use)

    log_setup(
        f"{symbols.get('gear', '⚙️')} Executing installer script with {' '.join(interpreter)}...",
        "info",
        logger_to_use,
        app_settings,
    )
    if elevated:
        run_elevated_command(
            interpreter,
            app_settings,
            cmd_input=script,
            current_logger=logger_to_use,
            preserve_env=preserve_env,
        )
    else:
        run_command(
            interpreter,
            app_settings,
            cmd_input=script,
            current_logger=logger_to_use,
        )
