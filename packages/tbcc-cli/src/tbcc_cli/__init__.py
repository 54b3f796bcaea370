"""tbcc-cli: Command-line interface for tbcc."""

from __future__ import annotations

__version__ = "0.1.0"
