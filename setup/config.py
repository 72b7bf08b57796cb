# setup/config.py
# -*- coding: utf-8 -*-
"""
Centralized static constants and definitions for the workstation setup.

This module defines truly static values for the setup scripts, such as
default package lists for apt installation and the user-local bin
directories the installers put on PATH.

Mutable runtime configuration (profile path, pinned versions, append
behaviour) is handled by 'setup/config_models.py' and 'setup/config_loader.py'.
"""

SCRIPT_VERSION: str = "1.0"

# Needed by later steps for HTTPS transport, key import and codename lookup.
SYSTEM_PREREQ_PACKAGES: list[str] = [
    "curl",
    "wget",
    "gnupg",
    "lsb-release",
    "software-properties-common",
    "apt-transport-https",
    "ca-certificates",
]

BUILD_ESSENTIAL_PACKAGES: list[str] = [
    "build-essential",
    "make",
    "gcc",
    "g++",
    "libc6-dev",
]

PYTHON_SYSTEM_PACKAGES: list[str] = [
    "python3",
    "python3-pip",
    "python3-venv",
    "python3-dev",
]

PYTHON3_BINARY: str = "/usr/bin/python3"
PYTHON_SYMLINK: str = "/usr/bin/python"

NODEJS_PACKAGES: list[str] = ["nodejs"]

DOCKER_CONFLICTING_PACKAGES: list[str] = [
    "docker",
    "docker-engine",
    "docker.io",
    "containerd",
    "runc",
]

DOCKER_PACKAGES: list[str] = [
    "docker-ce",
    "docker-ce-cli",
    "containerd.io",
    "docker-buildx-plugin",
    "docker-compose-plugin",
]

KUBERNETES_PACKAGES: list[str] = ["kubectl", "kubeadm", "kubelet"]
KUBERNETES_HELD_PACKAGES: list[str] = ["kubelet", "kubeadm", "kubectl"]

TERRAFORM_PACKAGES: list[str] = ["terraform"]

ADDITIONAL_TOOL_PACKAGES: list[str] = [
    "git",
    "vim",
    "nano",
    "htop",
    "tree",
    "jq",
    "unzip",
    "zip",
]

# User-local install directories, as written to the shell profile and as
# resolved against the invoking user's home directory.
POETRY_BIN_PROFILE_DIR: str = "$HOME/.local/bin"
POETRY_BIN_RELATIVE_DIR: str = ".local/bin"
UV_BIN_PROFILE_DIR: str = "$HOME/.cargo/bin"
UV_BIN_RELATIVE_DIR: str = ".cargo/bin"

VERSION_UNAVAILABLE_MESSAGE: str = "Restart terminal to use"
