# -*- coding: utf-8 -*-
"""
Exceptions raised while inspecting or rewiring repositories.
"""

from typing import List, Optional


class PersonalizeError(Exception):
    """Base class for errors that skip the current repository."""


class CommandError(PersonalizeError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: List[str], returncode: int, stderr: Optional[str] = None):
        self.cmd = cmd
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"{' '.join(cmd)} exited with {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class HostingError(PersonalizeError):
    """The hosting provider returned something we cannot act on."""
