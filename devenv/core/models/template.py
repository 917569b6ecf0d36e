"""
Generated file model — produced by the activation-script generator.
"""

from __future__ import annotations

from pydantic import BaseModel


class GeneratedFile(BaseModel):
    """A file rendered by a generator.

    Attributes:
        path:    Absolute destination path.
        content: Full file content.
        mode:    Permission bits applied after writing.
        reason:  Why this file was generated.
    """

    path: str
    content: str
    mode: int = 0o644
    reason: str = ""
