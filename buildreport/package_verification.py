#!/usr/bin/env python3
# -*- coding: utf-8 -*-
# ****************************************************************************************************************************************************
# * BSD 3-Clause License
# *
# * Copyright (c) 2025, Mana Battery
# * All rights reserved.
# *
# * Redistribution and use in source and binary forms, with or without modification, are permitted provided that the following conditions are met:
# *
# * 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following disclaimer.
# * 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following disclaimer in the
# *    documentation and/or other materials provided with the distribution.
# * 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote products derived from this
# *    software without specific prior written permission.
# *
# * THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO,
# * THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR
# * CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO,
# * PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# * LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# * EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
# ****************************************************************************************************************************************************
"""Runtime dependency verification for build-report.

Minimum versions are based on Ubuntu 24.04 LTS or actual code requirements,
whichever is higher.
"""

import sys
import logging
from importlib.metadata import PackageNotFoundError, version
from typing import Dict, Optional, Tuple

from packaging.version import parse

from buildreport.color_utils import print_error, print_success
from buildreport.constants import EXIT_RUNTIME_ERROR

logger = logging.getLogger(__name__)

# Package version requirements (minimum versions), in verification order
PACKAGE_REQUIREMENTS: Dict[str, str] = {
    "packaging": "24.0",  # Ubuntu 24.04 LTS (required for this module itself)
    "networkx": "2.8.8",  # Ubuntu 24.04 LTS
    "numpy": "1.26.4",  # Ubuntu 24.04 LTS
    "colorama": "0.4.6",  # Ubuntu 24.04 LTS
    "requests": "2.31.0",  # Ubuntu 24.04 LTS
}


def check_package_version(package_name: str, min_version: Optional[str] = None, raise_on_error: bool = True) -> Tuple[bool, bool, Optional[str]]:
    """Check if a package is installed and meets minimum version requirement.

    Args:
        package_name: PyPI package name (e.g., 'networkx')
        min_version: Minimum required version string. If None, uses PACKAGE_REQUIREMENTS.
        raise_on_error: If True, raises ImportError on failure

    Returns:
        Tuple of (is_installed: bool, meets_version: bool, installed_version: str or None)

    Raises:
        ImportError: If raise_on_error=True and package is missing or too old
        ValueError: If no minimum version is known for the package
    """
    if min_version is None:
        min_version = PACKAGE_REQUIREMENTS.get(package_name)
        if min_version is None:
            raise ValueError(f"No version requirement specified for {package_name}")

    try:
        installed_version = version(package_name)
    except PackageNotFoundError as exc:
        if raise_on_error:
            raise ImportError(f"{package_name} is not installed. Install with: pip install '{package_name}>={min_version}'") from exc
        return False, False, None

    meets_version = parse(installed_version) >= parse(min_version)
    if not meets_version and raise_on_error:
        raise ImportError(
            f"{package_name} {installed_version} is too old. "
            f"Version >={min_version} is required. "
            f"Upgrade with: pip install --upgrade '{package_name}>={min_version}'"
        )

    return True, meets_version, installed_version


def require_package(package_name: str, context: str = "build-report") -> None:
    """Exit with a helpful message if a package is missing or too old.

    Args:
        package_name: PyPI package name
        context: Description of what needs the package

    Exits:
        With EXIT_RUNTIME_ERROR (2) if package is missing or too old
    """
    try:
        check_package_version(package_name)
    except (ImportError, ValueError) as e:
        print_error(f"{e} (needed for {context})")
        sys.exit(EXIT_RUNTIME_ERROR)

    logger.debug("Package %s satisfies requirement for %s", package_name, context)


def verify_requirements(context: str = "build-report") -> None:
    """Require every package in PACKAGE_REQUIREMENTS."""
    for package_name in PACKAGE_REQUIREMENTS:
        require_package(package_name, context)


def check_all_packages() -> bool:
    """Check all runtime packages and display their status.

    Returns:
        True if all packages are installed in a sufficient version
    """
    print("🔍 build-report Package Verification")
    print("=" * 40)

    all_ok = True
    for package_name, min_version in PACKAGE_REQUIREMENTS.items():
        is_installed, meets_version, installed_ver = check_package_version(package_name, min_version, raise_on_error=False)
        if is_installed and meets_version:
            print_success(f"{package_name} {installed_ver}", prefix=False)
        elif is_installed:
            print_error(f"{package_name} {installed_ver} (need >={min_version})", prefix=False)
            all_ok = False
        else:
            print_error(f"{package_name} not installed", prefix=False)
            all_ok = False

    print("=" * 40)
    if all_ok:
        print_success("All required packages are available", prefix=False)
        return True

    requirements = " ".join(f"'{name}>={ver}'" for name, ver in PACKAGE_REQUIREMENTS.items())
    print_error("Some required packages are missing or too old", prefix=False)
    print(f"Install missing packages with:\n  pip install {requirements}")
    return False
