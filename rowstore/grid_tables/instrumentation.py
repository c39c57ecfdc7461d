#!/usr/bin/env python3
"""
Timing instrumentation for grid table operations.

measure_execution_time runs an operation inside a Stopwatch and, when
instrumentation is enabled, emits "<name> executed in <ms> ms" through a
log hook. Return values and exceptions pass through untouched; a raising
operation produces no timing line.
"""

import logging

from rowstore.utils.util_stopwatch import Stopwatch

logger = logging.getLogger( __name__ )


def make_log_hook( debug=False, log_hook=None ):
    """
    Resolve the log hook used by the engine and its sessions.

    Requires:
        - log_hook is None or a callable taking one string

    Ensures:
        - Returns log_hook unchanged when one is given
        - Returns logger.info when debug is on
        - Returns a no-op otherwise
    """
    if log_hook is not None:
        return log_hook

    if debug:
        return logger.info

    return lambda message: None


def measure_execution_time( func, name, enabled=True, log_hook=None ):
    """
    Time one call of func.

    Requires:
        - func is a zero-argument callable
        - name is the operation name used in the log line

    Ensures:
        - Returns func()'s result unchanged
        - Emits "<name> executed in <ms> ms" through log_hook when enabled
        - Exceptions from func propagate unchanged with no timing line
    """
    with Stopwatch( msg=name, silent=not enabled, log_hook=make_log_hook( log_hook=log_hook ) ):
        return func()
