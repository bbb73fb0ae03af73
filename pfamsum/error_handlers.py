#!/usr/bin/env python3
"""
Error reporting for pfamsum runs.

Turns pfamsum exceptions into short, actionable messages (which columns a
MAF does have, which genes lack totals, which file failed) and maps them to
process exit codes for the command line.
"""
import sys
import traceback
import logging
from functools import wraps
from typing import Callable, TypeVar, Any, Dict, List, Optional, Union

from .exceptions import (
    PfamSumError, ConfigurationError, FieldResolutionError,
    JoinIntegrityError, ValidationError, FileOperationError
)

T = TypeVar('T')

EXIT_ERROR = 1
EXIT_CONFIG = 2
EXIT_UNEXPECTED = 3
EXIT_INTERRUPTED = 130

# Detail keys already rendered as hint lines
_HINT_KEYS = {'available', 'genes', 'missing', 'path'}
_MAX_LISTED = 10


def exit_code_for(error: BaseException) -> int:
    """Exit code for an error raised by a pfamsum run"""
    if isinstance(error, KeyboardInterrupt):
        return EXIT_INTERRUPTED
    if isinstance(error, ConfigurationError):
        return EXIT_CONFIG
    if isinstance(error, PfamSumError):
        return EXIT_ERROR
    return EXIT_UNEXPECTED


def _listing(values: List[Any]) -> str:
    shown = ', '.join(str(v) for v in values[:_MAX_LISTED])
    if len(values) > _MAX_LISTED:
        shown += f" (and {len(values) - _MAX_LISTED} more)"
    return shown


def error_hints(error: PfamSumError) -> List[str]:
    """Lines pointing at the input that caused the error"""
    details = error.details or {}
    hints = []
    if isinstance(error, FieldResolutionError):
        if details.get('candidates'):
            hints.append(f"Tried columns: {', '.join(details['candidates'])}")
        if details.get('available'):
            hints.append(f"Available columns: {_listing(details['available'])}")
        hints.append("Pass --aa-col to name the protein change column")
    elif isinstance(error, JoinIntegrityError):
        if details.get('genes'):
            hints.append(f"Genes without totals: {_listing(details['genes'])}")
    elif isinstance(error, ValidationError):
        if details.get('missing'):
            hints.append(f"Missing columns: {', '.join(details['missing'])}")
    elif isinstance(error, FileOperationError):
        if details.get('path'):
            hints.append(f"Path: {details['path']}")
    return hints


def format_error(error: Exception, verbose: bool = False) -> str:
    """Format an error message for the terminal

    Args:
        error: Exception object
        verbose: Append remaining details, or the traceback of an
            unexpected error

    Returns:
        Formatted message, hint lines indented below the first line
    """
    if not isinstance(error, PfamSumError):
        msg = f"Unexpected Error ({error.__class__.__name__}): {str(error)}"
        if verbose:
            msg += "\n" + ''.join(traceback.format_exception(type(error), error, error.__traceback__))
        return msg

    lines = [f"{error.__class__.__name__}: {error.message}"]
    lines.extend(f"  {hint}" for hint in error_hints(error))
    if verbose:
        extra = {k: v for k, v in (error.details or {}).items() if k not in _HINT_KEYS}
        if extra:
            lines.append(f"  Details: {extra}")
    return '\n'.join(lines)


def handle_exceptions(exit_on_error: bool = False,
                      verbose: bool = False) -> Callable[[Callable[..., T]], Callable[..., Union[T, int]]]:
    """Decorator reporting errors on stderr and returning an exit code

    Args:
        exit_on_error: Call sys.exit with the code instead of returning it
        verbose: Passed to format_error
    """
    def decorator(func: Callable[..., T]) -> Callable[..., Union[T, int]]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Union[T, int]:
            logger = logging.getLogger(func.__module__)
            try:
                return func(*args, **kwargs)
            except KeyboardInterrupt as e:
                logger.info("Run cancelled by user")
                print("\nRun cancelled by user", file=sys.stderr)
                code = exit_code_for(e)
            except PfamSumError as e:
                logger.error(str(e))
                print(format_error(e, verbose=verbose), file=sys.stderr)
                code = exit_code_for(e)
            except Exception as e:
                logger.error(f"Unexpected error: {str(e)}", exc_info=True)
                print(format_error(e, verbose=verbose), file=sys.stderr)
                if not verbose:
                    print("See the log for the traceback.", file=sys.stderr)
                code = exit_code_for(e)
            if exit_on_error:
                sys.exit(code)
            return code
        return wrapper
    return decorator


def cli_error_handler(func: Callable[..., T]) -> Callable[..., T]:
    """Decorator for the pfamsum entry point: report and exit"""
    return handle_exceptions(exit_on_error=True)(func)


def log_exception(logger: logging.Logger,
                  error: Exception,
                  level: int = logging.ERROR,
                  context: Optional[Dict[str, Any]] = None) -> None:
    """Log an error with its details and optional context

    The traceback is attached only when the error has been raised.
    """
    ctx = dict(context or {})
    if isinstance(error, PfamSumError):
        ctx = {**(error.details or {}), **ctx}
        message = f"{error.__class__.__name__}: {error.message}"
    else:
        message = f"Unexpected error: {str(error)}"
    logger.log(level, message,
               extra={"context": ctx} if ctx else None,
               exc_info=error if error.__traceback__ is not None else None)
