"""
pychip8.timer - Delay/sound timer pacing for PyChip8.

The CHIP-8 timers count down at 60Hz of real time, no matter how quickly the
host runs instructions.  The pacer measures the wall-clock time between calls
and converts it into whole timer ticks, carrying the fraction of a tick over
to the next call.
"""

# Standard library imports
import time

# PyChip8 imports
from pychip8.constants import TIMER_FREQUENCY, NANOSECONDS_PER_SECOND

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class TimerPacer(object):
    """
    Converts elapsed wall-clock time into 60Hz timer ticks.
    
    clock must be a callable returning a monotonic time in integer nanoseconds.
    The leftover time is kept in timing_error, scaled by the frequency so the
    arithmetic stays exact: one simulated second always produces exactly
    frequency ticks regardless of how it was divided up between calls.
    """
    def __init__(self, clock = None, frequency = TIMER_FREQUENCY):
        if frequency <= 0:
            raise ValueError("frequency must be positive!")
            
        self.clock = clock if clock is not None else time.monotonic_ns
        self.frequency = frequency
        self.last_time = self.clock()
        self.timing_error = 0
        
    def reset(self):
        """ Restart pacing from the current time, dropping any partial tick. """
        self.last_time = self.clock()
        self.timing_error = 0
        
    def elapsed_ticks(self):
        """ Return the number of whole ticks since the previous call. """
        now = self.clock()
        elapsed = now - self.last_time
        self.last_time = now
        
        # A clock that steps backwards is treated as no time passing.
        if elapsed < 0:
            log.warning("Clock went backwards by %d ns.", -elapsed)
            elapsed = 0
            
        ticks, self.timing_error = divmod(self.timing_error + elapsed * self.frequency, NANOSECONDS_PER_SECOND)
        return ticks
        
# Functions
def decay(value, ticks):
    """ Count an 8-bit timer down by ticks, stopping at zero. """
    return max(0, value - ticks)
