"""
sfntmeta.scripting - frame for command-line scripts

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

import os
import sys
import logging
from contextlib import contextmanager


class ScriptStatus:
    """Failures seen by a script that carries on past them."""

    def __init__(self, debug=False):
        self.debug = debug
        self.failures = []

    def fail(self, source, exc):
        """Log a failure on one input and remember it for the exit status."""
        logging.error(
            '%s: %s', source, exc,
            exc_info=exc if self.debug else None
        )
        self.failures.append((source, exc))

    @property
    def exit_code(self):
        return 1 if self.failures else 0


@contextmanager
def wrap_main(debug=False):
    """
    Main script context; yields a ScriptStatus.

    Exits with status 1 if the script raises or reports a failure.
    """
    if debug:
        loglevel = logging.DEBUG
    else:
        loglevel = logging.WARNING
    logging.basicConfig(level=loglevel, format='%(levelname)s: %(message)s', force=True)
    status = ScriptStatus(debug)
    try:
        yield status
    except BrokenPipeError:
        # happens e.g. when piping to `head`
        sys.stdout = os.fdopen(1)
        return
    except Exception as exc:
        logging.error(exc)
        if debug:
            raise
        sys.exit(1)
    if status.exit_code:
        sys.exit(status.exit_code)
