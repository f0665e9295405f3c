"""
pychip8.helpers - A collection of helper functions used throughout PyChip8.
"""

# Standard library imports
from collections import namedtuple

# Classes
Instruction = namedtuple("Instruction", ["word", "family", "x", "y", "z", "kk", "nnn"])

# Functions
def word_to_bytes(value):
    """ Convert a word into a tuple of 2 bytes in big-endian (memory) order. """
    if value < 0 or value > 0xFFFF:
        raise ValueError("value must be in the range [0, 0xFFFF]!")
    return ((value & 0xFF00) >> 8), (value & 0x00FF)
    
def bytes_to_word(data):
    """ Convert a sequence of 2 bytes in big-endian (memory) order into a word. """
    if len(data) != 2:
        raise ValueError("data must be a sequence of 2 bytes!")
    return ((data[0] & 0xFF) << 8) | (data[1] & 0xFF)
    
def decode_instruction(word):
    """
    Split an instruction word into its operand fields.
    
    Every CHIP-8 instruction is 16 bits wide and the fields overlap:
    
        family  x     y     z
        [1111] [1111] [1111] [1111]
                      [   kk      ]
               [      nnn         ]
               
    Decoding never fails for a valid word, interpreting the fields is up to the dispatcher.
    """
    if word < 0 or word > 0xFFFF:
        raise ValueError("word must be in the range [0, 0xFFFF]!")
        
    return Instruction(
        word,
        (word & 0xF000) >> 12,
        (word & 0x0F00) >> 8,
        (word & 0x00F0) >> 4,
        word & 0x000F,
        word & 0x00FF,
        word & 0x0FFF,
    )
    
def bcd_digits(value):
    """ Return the hundreds, tens, and ones digits of an 8-bit value. """
    if value < 0 or value > 0xFF:
        raise ValueError("value must be in the range [0, 0xFF]!")
    return value // 100, (value // 10) % 10, value % 10
    
def bits_of_byte(value):
    """ Return a tuple of 8 booleans for a byte, most significant bit first. """
    return tuple(bool(value & (0x80 >> column)) for column in range(8))
