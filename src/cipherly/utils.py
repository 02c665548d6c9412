"""
Helpers shared across the package: console output, timing, invariants.
"""
import time
import functools

import click


class InvariantError(RuntimeError):
    """An internal consistency check failed (solver defect, not bad input)."""


def invariant(condition, message: str) -> None:
    """Raise InvariantError with message when condition is false."""
    if not condition:
        raise InvariantError(message)


def timer(func):
    """Decorator that reports how long the wrapped call took."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        start = time.time()
        result = func(*args, **kwargs)
        elapsed = time.time() - start
        click.echo(f"  ⏱  {func.__name__} completed in {elapsed:.1f}s", err=True)
        return result
    return wrapper


def print_header(title: str):
    """Print a formatted section header."""
    width = 60
    click.echo("\n" + "=" * width)
    click.echo(f"  {title}")
    click.echo("=" * width)


def print_step(step: str):
    """Print a progress step."""
    click.echo(f"\n  -> {step}")
