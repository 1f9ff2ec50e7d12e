"""
Click decorators for gitversion-build CLI commands.

- report_errors: Turns library exceptions into Click errors with exit code 1
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any, TypeVar

import click
from pydantic import ValidationError

from ..core.exceptions import GitVersionBuildError

F = TypeVar("F", bound=Callable[..., Any])


def report_errors(f: F) -> F:
    """Decorator reporting GitVersionBuildError and settings errors via Click.

    Usage:
        @click.command()
        @click.pass_obj
        @report_errors
        def generate(ctx: BuildContext, ...):
            ...
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return f(*args, **kwargs)
        except GitVersionBuildError as e:
            raise click.ClickException(str(e)) from e
        except ValidationError as e:
            raise click.ClickException(f"Invalid configuration: {e}") from e

    return wrapper  # type: ignore[return-value]
