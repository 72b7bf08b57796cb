# setup/step_executor.py
# -*- coding: utf-8 -*-
"""
Provides functionality to execute setup steps.

A setup step is described by an ``InstallStep`` record. ``execute_step``
runs one record and ``run_steps`` runs an ordered list of them, stopping at
the first required step that fails.
"""

import logging
import subprocess
from typing import Any, Callable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from common.command_utils import get_symbols, log_setup
from setup.config_models import AppSettings

module_logger = logging.getLogger(__name__)

StepFunction = Callable[[AppSettings, Optional[logging.Logger]], Any]

EXIT_COMMAND_NOT_FOUND = 127
EXIT_UNEXPECTED_ERROR = 1
EXIT_SIGNAL_BASE = 128


class InstallStep(BaseModel):
    """One entry in the fixed installation sequence."""
    model_config = ConfigDict(frozen=True)

    tag: str = Field(description="Unique identifier, e.g. DOCKER_INSTALL.")
    description: str = Field(description="Human-readable description for logs.")
    function: StepFunction = Field(description="Callable taking (app_settings, logger).")
    required: bool = Field(default=True, description="Whether a failure aborts the run.")


class StepFailedError(Exception):
    """A required step failed; ``returncode`` is the exit status to propagate."""

    def __init__(self, step_tag: str, returncode: int, message: str = ""):
        self.step_tag = step_tag
        self.returncode = returncode
        super().__init__(message or f"Step {step_tag} failed with exit status {returncode}")


def _returncode_for(error: BaseException) -> int:
    if isinstance(error, subprocess.CalledProcessError):
        # A negative returncode is the signal that killed the child.
        if error.returncode < 0:
            return EXIT_SIGNAL_BASE + abs(error.returncode)
        return error.returncode or EXIT_UNEXPECTED_ERROR
    if isinstance(error, FileNotFoundError):
        return EXIT_COMMAND_NOT_FOUND
    return EXIT_UNEXPECTED_ERROR


def execute_step(
    step: InstallStep,
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger] = None,
) -> bool:
    """
    Execute a single setup step.

    Args:
        step: The step record. ``step.function`` should return False to
              indicate failure. Any other return value (including None) is
              considered success. An exception is always a failure.
        app_settings: The application settings object.
        current_logger_instance: The logger instance to use.

    Returns:
        True if the step succeeded, False if a best-effort step failed.

    Raises:
        StepFailedError: If a required step failed.
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    symbols = get_symbols(app_settings)

    log_setup(
        f"--- {symbols.get('step', '➡️')} Executing: {step.description} ({step.tag}) ---",
        "info",
        logger_to_use,
        app_settings,
    )
    try:
        step_result = step.function(app_settings, logger_to_use)
    except Exception as e:
        log_setup(
            f"{symbols.get('error', '❌')} FAILED: {step.description} ({step.tag})",
            "error" if step.required else "warning",
            logger_to_use,
            app_settings,
        )
        log_setup(
            f"   Error details: {str(e)}",
            "error" if step.required else "warning",
            logger_to_use,
            app_settings,
            exc_info=step.required,
        )
        if step.required:
            raise StepFailedError(step.tag, _returncode_for(e), str(e)) from e
        return False

    if step_result is False:
        log_setup(
            f"{symbols.get('error', '❌')} Step function returned False: {step.description} ({step.tag})",
            "error" if step.required else "warning",
            logger_to_use,
            app_settings,
        )
        if step.required:
            raise StepFailedError(step.tag, EXIT_UNEXPECTED_ERROR)
        return False

    log_setup(
        f"--- {symbols.get('success', '✅')} Successfully completed: {step.description} ({step.tag}) ---",
        "success",
        logger_to_use,
        app_settings,
    )
    return True


def run_steps(
    steps: List[InstallStep],
    app_settings: AppSettings,
    current_logger_instance: Optional[logging.Logger] = None,
) -> int:
    """
    Run steps in order, stopping at the first required failure.

    Nothing is rolled back: steps that already ran stay applied.

    Returns:
        0 if every required step succeeded, otherwise the exit status of the
        failing step.
    """
    logger_to_use = (
        current_logger_instance if current_logger_instance else module_logger
    )
    symbols = get_symbols(app_settings)

    for step in steps:
        try:
            execute_step(step, app_settings, logger_to_use)
        except StepFailedError as e:
            log_setup(
                f"{symbols.get('critical', '🔥')} Aborting setup at {e.step_tag} (exit status {e.returncode}). "
                "The system is partially provisioned; re-run after fixing the cause.",
                "critical",
                logger_to_use,
                app_settings,
            )
            return e.returncode
    return 0
