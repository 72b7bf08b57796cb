# common/debian/apt_manager.py
# -*- coding: utf-8 -*-
import logging
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from common.command_utils import (
    command_exists,
    fetch_url_text,
    run_command,
    run_elevated_command,
)
from common.file_utils import append_line_to_file
from setup.config_models import AppSettings


class AptManager:
    """
    A centralized manager for Debian apt packages using command-line tools.

    Operations that a setup step depends on raise on failure so the run
    stops; ``remove`` is best-effort and only reports.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initializes the AptManager.
        Args:
            logger: An optional logging object.
        """
        self.logger = logger or logging.getLogger(__name__)
        if not command_exists("apt-get"):
            self.logger.critical(
                "'apt-get' command not found. This manager cannot function."
            )
            raise FileNotFoundError(
                "'apt-get' not found. Is this a Debian-based system?"
            )

    def update(self, app_settings: AppSettings) -> None:
        """Refreshes the package index with 'apt-get update'."""
        self.logger.info("Updating apt package lists via 'apt-get update'...")
        try:
            run_elevated_command(
                ["apt-get", "update"],
                app_settings,
                current_logger=self.logger,
            )
        except Exception as e:
            self.logger.error(f"Failed to update apt cache: {e}")
            raise
        self.logger.info("Apt package lists updated successfully.")

    def upgrade(self, app_settings: AppSettings) -> None:
        """Upgrades all installed packages with 'apt-get upgrade -y'."""
        self.logger.info("Upgrading installed packages...")
        try:
            run_elevated_command(
                ["apt-get", "upgrade", "-y"],
                app_settings,
                current_logger=self.logger,
            )
        except Exception as e:
            self.logger.error(f"Failed to upgrade packages: {e}")
            raise
        self.logger.info("Installed packages upgraded.")

    def _is_installed(self, pkg_name: str, app_settings: AppSettings) -> bool:
        try:
            result = run_command(
                ["dpkg-query", "-W", "-f=${db:Status-Status}", pkg_name],
                app_settings,
                capture_output=True,
                check=True,
                current_logger=self.logger,
            )
        except subprocess.CalledProcessError:
            return False
        # Only a fully installed package is skipped; half-installed or unpacked ones are reinstalled.
        return (result.stdout or "").strip() == "installed"

    def install(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
    ) -> None:
        """
        Installs one or more packages using 'apt-get install -y'.

        Packages already reported installed by dpkg are skipped.

        Args:
            packages: A single package name or a list of package names.
            app_settings: The application settings.

        Raises:
            subprocess.CalledProcessError: If apt-get fails.
        """
        if not isinstance(packages, list):
            packages = [packages]

        packages_to_install = []
        for pkg_name in packages:
            if self._is_installed(pkg_name, app_settings):
                self.logger.info(
                    f"Package '{pkg_name}' is already installed. Skipping."
                )
            else:
                self.logger.info(
                    f"Marking package for installation: {pkg_name}"
                )
                packages_to_install.append(pkg_name)

        if not packages_to_install:
            self.logger.info("All requested packages are already installed.")
            return

        self.logger.info(
            f"Committing installation for: {', '.join(packages_to_install)}"
        )
        try:
            run_elevated_command(
                ["apt-get", "install", "-y"] + packages_to_install,
                app_settings,
                current_logger=self.logger,
            )
        except Exception as e:
            self.logger.error(f"Failed to install packages: {e}")
            raise
        self.logger.info("Packages installed successfully.")

    def remove(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
    ) -> bool:
        """
        Removes packages with 'apt-get remove -y'. Best-effort: failure is
        logged as a warning and reported through the return value.

        Returns:
            True if apt-get succeeded, False otherwise.
        """
        if not isinstance(packages, list):
            packages = [packages]

        self.logger.info(f"Removing packages (best-effort): {', '.join(packages)}")
        try:
            run_elevated_command(
                ["apt-get", "remove", "-y"] + packages,
                app_settings,
                capture_output=True,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.warning(f"Ignoring failure while removing packages: {e}")
            return False
        self.logger.info("Packages removed.")
        return True

    def hold(
        self,
        packages: Union[List[str], str],
        app_settings: AppSettings,
    ) -> None:
        """Pins packages with 'apt-mark hold' so upgrades leave them alone."""
        if not isinstance(packages, list):
            packages = [packages]

        self.logger.info(f"Holding package versions: {', '.join(packages)}")
        try:
            run_elevated_command(
                ["apt-mark", "hold"] + packages,
                app_settings,
                current_logger=self.logger,
            )
        except Exception as e:
            self.logger.error(f"Failed to hold packages: {e}")
            raise

    def add_gpg_key_from_url(
        self,
        key_url: str,
        keyring_path: Union[str, Path],
        app_settings: AppSettings,
    ) -> None:
        """
        Downloads an armored GPG key and stores it dearmored in a keyring.

        Args:
            key_url: The URL of the GPG key.
            keyring_path: The path to save the keyring file.
            app_settings: The application settings.

        Raises:
            subprocess.CalledProcessError: If the download or import fails.
        """
        keyring_path = str(keyring_path)
        keyring_dir = str(Path(keyring_path).parent)
        self.logger.info(f"Adding GPG key from {key_url} to {keyring_path}")

        try:
            run_elevated_command(
                ["install", "-m", "0755", "-d", keyring_dir],
                app_settings,
                current_logger=self.logger,
            )
            armored_key = fetch_url_text(
                key_url, app_settings, current_logger=self.logger
            )
            run_elevated_command(
                ["gpg", "--batch", "--yes", "--dearmor", "-o", keyring_path],
                app_settings,
                cmd_input=armored_key,
                current_logger=self.logger,
            )
            run_elevated_command(
                ["chmod", "a+r", keyring_path],
                app_settings,
                current_logger=self.logger,
            )
        except (subprocess.CalledProcessError, FileNotFoundError) as e:
            self.logger.error(f"Failed to add GPG key: {e}")
            raise
        self.logger.info("GPG key added and permissions set.")

    def add_repository(
        self,
        repo_line: str,
        source_list_path: Union[str, Path],
        app_settings: AppSettings,
        update_after: bool = True,
    ) -> None:
        """
        Registers a repository by appending a one-line 'deb' entry to a
        source list file, then optionally refreshes the package index.

        The entry is appended on every call unless
        ``app_settings.deduplicate_appends`` is set.

        Args:
            repo_line: The full 'deb ...' source line.
            source_list_path: The .list file under sources.list.d.
            app_settings: The application settings.
            update_after: Whether to update package lists after adding.
        """
        self.logger.info(f"Adding repository to {source_list_path}: {repo_line}")
        try:
            append_line_to_file(
                source_list_path,
                repo_line,
                app_settings,
                elevated=True,
                current_logger=self.logger,
            )
        except Exception as e:
            self.logger.error(
                f"Failed to write repository file '{source_list_path}': {e}"
            )
            raise

        if update_after:
            self.update(app_settings)
