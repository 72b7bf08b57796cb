# setup/config_models.py
# -*- coding: utf-8 -*-
"""
Pydantic models for application configuration.

This module defines the structured settings for the workstation setup,
including defaults, type annotations, and descriptions.
It utilizes Pydantic for data validation and settings management.
"""

from pathlib import Path
from typing import Dict, Union

from pydantic import BaseModel, Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Default Static Values (can be overridden by config file/env/cli) ---
LOG_PREFIX_DEFAULT: str = "[DEV-SETUP]"
APT_KEYRINGS_DIR_DEFAULT: str = "/etc/apt/keyrings"
APT_SOURCES_DIR_DEFAULT: str = "/etc/apt/sources.list.d"

POETRY_INSTALLER_URL_DEFAULT: str = "https://install.python-poetry.org"
UV_INSTALLER_URL_DEFAULT: str = "https://astral.sh/uv/install.sh"

NODEJS_MAJOR_VERSION_DEFAULT: int = 20
NODESOURCE_SETUP_URL_TEMPLATE_DEFAULT: str = (
    "https://deb.nodesource.com/setup_{major_version}.x"
)

DOCKER_DISTRIBUTION_DEFAULT: str = "ubuntu"
DOCKER_GROUP_DEFAULT: str = "docker"

KUBERNETES_MINOR_VERSION_DEFAULT: str = "v1.29"

HASHICORP_GPG_URL_DEFAULT: str = "https://apt.releases.hashicorp.com/gpg"
HASHICORP_REPO_URL_DEFAULT: str = "https://apt.releases.hashicorp.com"

SYMBOLS_DEFAULT: Dict[str, str] = {
    "success": "✅",
    "error": "❌",
    "warning": "⚠️",
    "info": "ℹ️",
    "step": "➡️",
    "gear": "⚙️",
    "package": "📦",
    "rocket": "🚀",
    "sparkles": "✨",
    "critical": "🔥",
    "debug": "🐛",
}


class NodejsSettings(BaseSettings):
    """Node.js (NodeSource) settings."""
    model_config = SettingsConfigDict(
        env_prefix="WORKSTATION_NODEJS_",
        extra="ignore",
    )

    major_version: int = Field(default=NODEJS_MAJOR_VERSION_DEFAULT,
                               description="Node.js major release line installed from NodeSource.")
    setup_url_template: str = Field(
        default=NODESOURCE_SETUP_URL_TEMPLATE_DEFAULT,
        description="NodeSource setup script URL. Supports placeholder {major_version}.",
    )

    @property
    def setup_url(self) -> str:
        return self.setup_url_template.format(major_version=self.major_version)


class DockerSettings(BaseSettings):
    """Docker Engine repository settings."""
    model_config = SettingsConfigDict(
        env_prefix="WORKSTATION_DOCKER_",
        extra="ignore",
    )

    distribution: str = Field(default=DOCKER_DISTRIBUTION_DEFAULT,
                              description="Distribution path on download.docker.com (ubuntu or debian).")
    group: str = Field(default=DOCKER_GROUP_DEFAULT,
                       description="Group the invoking user is added to for unelevated docker access.")
    keyring_name: str = Field(default="docker.gpg", description="Keyring file name under apt_keyrings_dir.")
    source_list_name: str = Field(default="docker", description="Source list file name (without .list).")

    @property
    def repo_url(self) -> str:
        return f"https://download.docker.com/linux/{self.distribution}"

    @property
    def gpg_url(self) -> str:
        return f"{self.repo_url}/gpg"


class KubernetesSettings(BaseSettings):
    """Kubernetes apt repository settings."""
    model_config = SettingsConfigDict(
        env_prefix="WORKSTATION_KUBERNETES_",
        extra="ignore",
    )

    minor_version: str = Field(default=KUBERNETES_MINOR_VERSION_DEFAULT,
                               description="Kubernetes stable channel, e.g. v1.29.")
    keyring_name: str = Field(default="kubernetes-apt-keyring.gpg",
                              description="Keyring file name under apt_keyrings_dir.")
    source_list_name: str = Field(default="kubernetes", description="Source list file name (without .list).")

    @property
    def repo_url(self) -> str:
        return f"https://pkgs.k8s.io/core:/stable:/{self.minor_version}/deb/"

    @property
    def gpg_url(self) -> str:
        return f"{self.repo_url}Release.key"


class TerraformSettings(BaseModel):
    """HashiCorp apt repository settings."""

    gpg_url: Union[HttpUrl, str] = Field(default=HASHICORP_GPG_URL_DEFAULT,
                                         description="HashiCorp signing key URL.")
    repo_url: Union[HttpUrl, str] = Field(default=HASHICORP_REPO_URL_DEFAULT,
                                          description="HashiCorp apt repository URL.")
    keyring_name: str = Field(default="hashicorp.gpg", description="Keyring file name under apt_keyrings_dir.")
    source_list_name: str = Field(default="hashicorp", description="Source list file name (without .list).")


class AppSettings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_prefix="WORKSTATION_",
        extra="ignore",
    )

    log_prefix: str = Field(default=LOG_PREFIX_DEFAULT,
                            description="Prefix added to every console log line.")
    shell_profile_path: Path = Field(default_factory=lambda: Path.home() / ".bashrc",
                                     description="Shell profile that receives PATH export lines.")
    apt_keyrings_dir: Path = Field(default=Path(APT_KEYRINGS_DIR_DEFAULT),
                                   description="Directory holding dearmored repository signing keys.")
    apt_sources_dir: Path = Field(default=Path(APT_SOURCES_DIR_DEFAULT),
                                  description="Directory holding apt source list files.")
    deduplicate_appends: bool = Field(
        default=False,
        description="Skip appending profile/source lines that are already present. "
                    "Off by default: re-runs append duplicates.",
    )

    poetry_installer_url: Union[HttpUrl, str] = Field(default=POETRY_INSTALLER_URL_DEFAULT,
                                                      description="Official Poetry installer script.")
    uv_installer_url: Union[HttpUrl, str] = Field(default=UV_INSTALLER_URL_DEFAULT,
                                                  description="Official UV installer script.")

    nodejs: NodejsSettings = Field(default_factory=NodejsSettings)
    docker: DockerSettings = Field(default_factory=DockerSettings)
    kubernetes: KubernetesSettings = Field(default_factory=KubernetesSettings)
    terraform: TerraformSettings = Field(default_factory=TerraformSettings)

    # Static symbols, could also be loaded from a separate static config if preferred
    symbols: Dict[str, str] = Field(default_factory=lambda: dict(SYMBOLS_DEFAULT))

    @field_validator("shell_profile_path")
    @classmethod
    def _expand_profile_home(cls, value: Path) -> Path:
        return Path(value).expanduser()

    def keyring_path(self, keyring_name: str) -> Path:
        return self.apt_keyrings_dir / keyring_name

    def source_list_path(self, source_list_name: str) -> Path:
        return self.apt_sources_dir / f"{source_list_name}.list"
