import datetime as dt
from typing import Callable, Optional

class Stopwatch:
    """
    A simple stopwatch utility for timing code execution.

    Used as a context manager around an operation: on a clean exit it
    emits "<msg> executed in <ms> ms" through its log hook. When the
    wrapped block raises, nothing is emitted and the exception propagates.
    """

    def __init__( self, msg: Optional[str]=None, silent: bool=False, log_hook: Optional[Callable[[str], None]]=None ) -> None:
        """
        Initialize a new Stopwatch instance.

        Requires:
            - msg is None or the name of the operation being timed
            - silent is a boolean flag for output suppression
            - log_hook is None or a callable taking one string

        Ensures:
            - Stores message, silent flag and log hook (print when None)
            - Records start time as current datetime
        """
        self.init_msg   = msg
        self.silent     = silent
        self.log_hook   = log_hook if log_hook is not None else print
        self.start_time = dt.datetime.now()
        self.interval   = None

    def __enter__( self ) -> 'Stopwatch':
        """
        Context manager entry point.

        Ensures:
            - Resets start time to current datetime
            - Returns self for context manager usage
        """
        self.start_time = dt.datetime.now()

        return self

    def __exit__( self, exc_type, exc_val, exc_tb ) -> bool:
        """
        Context manager exit point.

        Requires:
            - Standard context manager exception parameters

        Ensures:
            - Records end time and interval in milliseconds
            - Emits the elapsed-time line only when no exception occurred and not silent
            - Returns False so exceptions always propagate unchanged
        """
        self.get_delta_ms()
        self.interval = self.delta_ms

        if exc_type is None and not self.silent:
            self.log_hook( f"{self.init_msg or 'Operation'} executed in {self.interval} ms" )

        return False

    def get_delta_ms( self ) -> int:
        """
        Calculate the time delta in milliseconds.

        Requires:
            - Stopwatch instance has been initialized

        Ensures:
            - Returns elapsed time in milliseconds as integer
            - Updates end_time to current datetime
            - Stores elapsed_time and delta_ms as instance attributes
        """
        self.end_time     = dt.datetime.now()
        self.elapsed_time = self.end_time - self.start_time
        self.delta_ms     = int( self.elapsed_time.total_seconds() * 1000 )

        return self.delta_ms


if __name__ == '__main__':

    with Stopwatch( "Finished doing foo" ):
        sum( range( 100_000 ) )
