"""
pychip8.memory - Memory device for PyChip8.
"""

# Standard library imports
import array

# PyChip8 imports
from pychip8.constants import MEMORY_SIZE, PROGRAM_LOCATION
from pychip8.exceptions import MemoryAccessException, ProgramTooLargeException
from pychip8.helpers import bytes_to_word, word_to_bytes

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Classes
class RAM(object):
    """
    A device emulating the 4KB of CHIP-8 RAM.
    
    Every access is bounds checked.  Addresses past the end of memory raise
    MemoryAccessException instead of wrapping, and block accesses are checked
    in full before any byte is touched.
    """
    def __init__(self, size = MEMORY_SIZE):
        self.contents = array.array("B", (0,) * size)
        
    def __repr__(self):
        return "<%s(size=0x%x)>" % (self.__class__.__name__, len(self.contents))
        
    def get_memory_size(self):
        """ Return the size of this memory in bytes. """
        return len(self.contents)
        
    def check_range(self, address, length = 1):
        """ Raise MemoryAccessException if [address, address + length) is not entirely inside memory. """
        if address < 0 or length < 0 or address + length > len(self.contents):
            raise MemoryAccessException(address, length)
            
    def clear(self):
        """ Zero the entire memory. """
        for index in range(len(self.contents)):
            self.contents[index] = 0
            
    def mem_read_byte(self, address):
        self.check_range(address)
        return self.contents[address]
        
    def mem_write_byte(self, address, value):
        self.check_range(address)
        self.contents[address] = value & 0xFF
        
    def mem_read_word(self, address):
        """ Read a big-endian word, this is how instructions are stored. """
        self.check_range(address, 2)
        return bytes_to_word((self.contents[address], self.contents[address + 1]))
        
    def mem_write_word(self, address, value):
        self.check_range(address, 2)
        self.contents[address], self.contents[address + 1] = word_to_bytes(value)
        
    def read_block(self, address, length):
        """ Return a list of length bytes starting at address. """
        self.check_range(address, length)
        return self.contents[address:address + length].tolist()
        
    def write_block(self, address, data):
        """ Write a sequence of bytes starting at address. """
        data = bytearray(data)
        self.check_range(address, len(data))
        for index, byte in enumerate(data, start = address):
            self.contents[index] = byte
            
    def load(self, data, offset = PROGRAM_LOCATION):
        """ Load a program image into memory at offset. """
        data = bytearray(data)
        capacity = len(self.contents) - offset
        if len(data) > capacity:
            raise ProgramTooLargeException(len(data), capacity)
            
        self.write_block(offset, data)
        log.debug("Loaded %d bytes at 0x%03x.", len(data), offset)
        return len(data)
        
    def load_from_file(self, filename, offset = PROGRAM_LOCATION):
        """ Load memory with the contents of a file. """
        with open(filename, "rb") as fileptr:
            data = fileptr.read()
            
        return self.load(data, offset)
