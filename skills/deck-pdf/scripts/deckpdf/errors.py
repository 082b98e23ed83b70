"""Exceptions raised before any slide is laid out: bad deck JSON and missing assets."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional


class ConfigValidationError(ValueError):
    """Deck JSON failed validation; ``issues`` holds one message per problem found."""

    def __init__(self, issues: Iterable[str], source: Optional[Path] = None):
        self.issues = [text for text in (str(i).strip() for i in issues) if text]
        if not self.issues:
            self.issues = ["Invalid configuration"]
        self.source = source
        where = f" for {source.name}" if source else ""
        summary = "\n".join(f"- {issue}" for issue in self.issues)
        super().__init__(f"Configuration validation failed{where}:\n{summary}")


class FontResourceError(RuntimeError):
    """Raised when a font needed for exact measurement cannot be loaded."""

    def __init__(self, role: str, path: Optional[Path], reason: str):
        self.role = role
        self.path = path
        self.reason = reason
        where = str(path) if path else "<not configured>"
        super().__init__(f"Could not load {role} font from {where}: {reason}")


class LogoResourceError(RuntimeError):
    """Raised when the slide logo file is missing or not a readable image."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load logo from {path}: {reason}")
