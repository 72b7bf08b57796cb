# setup/main_installer.py
# -*- coding: utf-8 -*-
"""
Main entry point for the workstation setup.

Control flow is fixed: preflight guard, system update, the nine tool
installers in order, then the summary. The first failing required step
ends the run with that step's exit status.
"""

import argparse
import logging
import sys
from typing import List, Optional

from common.command_utils import get_symbols, log_setup
from common.logging_config import setup_logging
from common.system_utils import is_running_as_root
from installer.additional_tools_installer import install_additional_tools
from installer.build_essentials_installer import install_build_essentials
from installer.docker_installer import install_docker_engine
from installer.kubernetes_installer import install_kubernetes_tools
from installer.nodejs_installer import install_nodejs
from installer.poetry_installer import install_poetry
from installer.python_installer import install_python
from installer.terraform_installer import install_terraform
from installer.uv_installer import install_uv
from setup import config as static_config
from setup.config_loader import DEFAULT_CONFIG_FILE, load_app_settings
from setup.config_models import AppSettings
from setup.core_prerequisites import update_system
from setup.step_executor import InstallStep, run_steps
from setup.summary import print_installation_summary

LOGGER_NAME = "workstation_setup"
EXIT_RUNNING_AS_ROOT = 1

logger = logging.getLogger(LOGGER_NAME)


def build_system_update_step() -> InstallStep:
    return InstallStep(
        tag="SYSTEM_UPDATE",
        description="Update system packages and install prerequisites",
        function=update_system,
    )


def build_installer_steps() -> List[InstallStep]:
    """The nine tool installers, in the order they must run."""
    return [
        InstallStep(tag="BUILD_ESSENTIALS", description="Install build essentials (includes make)",
                    function=install_build_essentials),
        InstallStep(tag="PYTHON_INSTALL", description="Install Python 3, pip and venv",
                    function=install_python),
        InstallStep(tag="POETRY_INSTALL", description="Install Poetry",
                    function=install_poetry),
        InstallStep(tag="UV_INSTALL", description="Install UV",
                    function=install_uv),
        InstallStep(tag="NODEJS_INSTALL", description="Install Node.js and NPM",
                    function=install_nodejs),
        InstallStep(tag="DOCKER_INSTALL", description="Install Docker and Docker Compose",
                    function=install_docker_engine),
        InstallStep(tag="KUBERNETES_INSTALL", description="Install Kubernetes tools (kubectl, kubeadm, kubelet)",
                    function=install_kubernetes_tools),
        InstallStep(tag="TERRAFORM_INSTALL", description="Install Terraform",
                    function=install_terraform),
        InstallStep(tag="ADDITIONAL_TOOLS", description="Install additional development tools",
                    function=install_additional_tools),
    ]


def preflight_check(
    app_settings: Optional[AppSettings] = None,
    current_logger: Optional[logging.Logger] = None,
) -> bool:
    """
    Refuse to run as root: tools installed per user would land in root's
    home, and every privileged command already elevates itself via sudo.
    """
    logger_to_use = current_logger if current_logger else logger
    if is_running_as_root():
        log_setup(
            f"{get_symbols(app_settings).get('error', '❌')} This script should not be run as root",
            "error",
            logger_to_use,
            app_settings,
        )
        return False
    return True


def parse_args(args: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Development workstation setup. Installs build tools, Python, Poetry, UV, "
                    "Node.js, Docker, Kubernetes tools, Terraform and common utilities.",
        epilog="Example: python3 ./install.py",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("-c", "--config", default=DEFAULT_CONFIG_FILE,
                        help="YAML settings file. Ignored if it does not exist.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    parser.add_argument("--log-file", default=None, help="Also write JSON-structured logs to this file.")
    parser.add_argument("--deduplicate-appends", action="store_true",
                        help="Do not append shell-profile or apt source lines that are already present.")
    parser.add_argument("--shell-profile", default=None,
                        help="Shell profile that receives PATH exports (default: ~/.bashrc).")
    return parser.parse_args(args)


def main_workstation_entry(args: Optional[List[str]] = None) -> int:
    try:
        parsed_args = parse_args(args)
    except SystemExit as e:
        return e.code if isinstance(e.code, int) else 2

    log_level = "DEBUG" if parsed_args.verbose else None
    # Console only until the root guard passes; the log file is a side effect.
    setup_logging(LOGGER_NAME, log_level=log_level)
    log_setup(
        f"{get_symbols(None).get('sparkles', '✨')} Starting Development Environment Setup "
        f"(Script Version: {static_config.SCRIPT_VERSION})...",
        "info",
        logger,
    )

    if not preflight_check(current_logger=logger):
        return EXIT_RUNNING_AS_ROOT

    app_settings = load_app_settings(
        cli_args=parsed_args,
        config_file_path=parsed_args.config,
        current_logger=logger,
    )
    setup_logging(
        LOGGER_NAME,
        log_level=log_level,
        log_file_path=parsed_args.log_file,
        log_prefix=app_settings.log_prefix,
    )

    steps = [build_system_update_step()] + build_installer_steps()
    exit_code = run_steps(steps, app_settings, logger)
    if exit_code != 0:
        return exit_code

    print_installation_summary(app_settings, logger)
    return 0


if __name__ == "__main__":
    sys.exit(main_workstation_entry())
