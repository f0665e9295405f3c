"""
pychip8.exceptions - PyChip8-specific exceptions.
"""

# Classes
class PyChip8Exception(Exception):
    """ Base class for all PyChip8 exceptions. """
    
class StackOverflowException(PyChip8Exception):
    """ Exception raised when CALL is executed with every stack entry in use. """
    def __init__(self, pc):
        super(StackOverflowException, self).__init__()
        self.pc = pc
        
    def __str__(self):
        return "Stack overflow on CALL at PC 0x%03x" % self.pc
        
class StackUnderflowException(PyChip8Exception):
    """ Exception raised when RET is executed with an empty stack. """
    def __init__(self, pc):
        super(StackUnderflowException, self).__init__()
        self.pc = pc
        
    def __str__(self):
        return "Stack underflow on RET at PC 0x%03x" % self.pc
        
class MemoryAccessException(PyChip8Exception):
    """ Exception raised when an access touches an address past the end of memory. """
    def __init__(self, address, length = 1):
        super(MemoryAccessException, self).__init__()
        self.address = address
        self.length = length
        
    def __str__(self):
        return "Memory access out of bounds: %d byte(s) at 0x%04x" % (self.length, self.address)
        
class RandomSourceException(PyChip8Exception):
    """ Exception raised when the injected random number generator fails. """
    
class ProgramTooLargeException(PyChip8Exception):
    """ Exception raised when a program image does not fit in memory. """
    def __init__(self, size, capacity):
        super(ProgramTooLargeException, self).__init__()
        self.size = size
        self.capacity = capacity
        
    def __str__(self):
        return "Program is %d bytes, only %d bytes available" % (self.size, self.capacity)
