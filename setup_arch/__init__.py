"""Arch Linux ARM chroot setup for GitHub Actions runners.

Downloads the aarch64 bootstrap tarball, extracts it next to the runner's
home directory, configures pacman and a matching user, and publishes the
root path for later workflow steps.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
