#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Entry point for the development workstation setup.

Run as a regular user; privileged commands are elevated with sudo.
"""

import sys

from setup.main_installer import main_workstation_entry


def main() -> None:
    sys.exit(main_workstation_entry())


if __name__ == "__main__":
    main()
