"""
Custom exception hierarchy for gitversion-build.

Every failure the build step can surface derives from GitVersionBuildError,
so callers (the CLI, or a build script using the library API) can handle
them with a single except clause and still tell them apart by type.
"""

from __future__ import annotations


class GitVersionBuildError(Exception):
    """
    Base exception for all gitversion-build errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, env vars, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether the pipeline may continue after this error
    """

    exit_code: int = 1
    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigError(GitVersionBuildError):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(ConfigError):
    """
    Error reading or parsing an explicitly requested configuration file.

    Config files discovered by walking up from the working directory are
    best-effort; only a file named on purpose raises this.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class MissingConfigError(ConfigError):
    """
    A value the pipeline needs is not provided by the build environment.

    Raised before any subprocess or file I/O takes place, typically when
    the output directory environment variable (OUT_DIR) is unset.
    """

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        env_var: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if env_var:
            ctx["env_var"] = env_var
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Version Source Errors
# =============================================================================


class SubprocessUnavailableError(GitVersionBuildError):
    """
    The version tool could not produce a payload.

    Covers a missing executable, a non-zero exit, a timeout, and output
    that is not UTF-8. The version source catches this itself and reports
    "no payload", so it never reaches the caller of the pipeline.
    """

    recoverable = True

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        returncode: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = " ".join(command)
        if returncode is not None:
            ctx["returncode"] = returncode
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Schema Errors
# =============================================================================


class DecodeError(GitVersionBuildError, ValueError):
    """
    The payload is not a valid version document.

    Raised for malformed JSON, a non-object document, wrongly typed values,
    and a non-empty document lacking Major, Minor or Patch. Inherits from
    ValueError so generic validation handlers catch it too.
    """

    def __init__(
        self,
        message: str,
        *,
        payload: str | None = None,
        errors: list[str] | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if payload is not None:
            ctx["payload"] = payload if len(payload) <= 80 else payload[:77] + "..."
        if errors:
            ctx["errors"] = errors
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Artifact Errors
# =============================================================================


class ArtifactIOError(GitVersionBuildError):
    """
    Reading the previous artifact or writing the new one failed.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        operation: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        if operation:
            ctx["operation"] = operation
        super().__init__(message, context=ctx, cause=cause)
