"""Errors raised by the outer surfaces (config, CLI, API).

The Markdown pipeline itself is total and never raises.
"""


class InkwellError(Exception):
    """Base class for expected failures outside the pipeline."""


class ConfigError(InkwellError):
    """Raised when inkwell.toml cannot be read or holds an invalid value."""

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message
