"""
pychip8.tests.utils - Helpers for writing unit tests.
"""

import os
import inspect
from fractions import Fraction

from pychip8.constants import PROGRAM_LOCATION, NANOSECONDS_PER_SECOND

def get_test_file(suite, filename):
    """ Get the path to a test file for a given suite. """
    return os.path.join(
        os.path.dirname(inspect.getfile(suite.__class__)),
        "files",
        filename,
    )
    
def load_words(cpu, words, address = PROGRAM_LOCATION):
    """ Write a sequence of instruction words into memory starting at address. """
    for index, word in enumerate(words):
        cpu.memory.mem_write_word(address + (index * 2), word)
        
class FakeClock(object):
    """
    Stands in for time.monotonic_ns so tests control the passage of time.
    
    Elapsed time is kept as an exact fraction of a second and only truncated
    to nanoseconds when read, so advancing by 1/7 of a second 7 times reads
    as exactly one second.
    """
    def __init__(self, start = 0):
        self.start = start
        self.elapsed = Fraction(0)
        
    def __call__(self):
        return self.start + int(self.elapsed * NANOSECONDS_PER_SECOND)
        
    def advance(self, nanoseconds):
        self.elapsed += Fraction(nanoseconds, NANOSECONDS_PER_SECOND)
        
    def advance_seconds(self, numerator, denominator = 1):
        """ Advance by an exact fraction of a second. """
        self.elapsed += Fraction(numerator, denominator)
        
class ScriptedRandom(object):
    """ Random source that hands out a fixed list of values. """
    def __init__(self, values):
        self.values = list(values)
        self.calls = []
        
    def randint(self, low, high):
        self.calls.append((low, high))
        if not self.values:
            raise IndexError("scripted random source exhausted")
        return self.values.pop(0)
