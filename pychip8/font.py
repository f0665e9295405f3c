"""
pychip8.font - Built-in hexadecimal font for PyChip8.

Each glyph is 4 pixels wide and 5 rows tall, stored one row per byte in the
upper nibble.  The 16 glyphs are packed back to back at the bottom of memory.
"""

# PyChip8 imports
from pychip8.constants import FONT_LOCATION

# Constants
GLYPH_HEIGHT = 5
GLYPH_COUNT = 16

FONT = (
    0xF0, 0x90, 0x90, 0x90, 0xF0, # 0
    0x20, 0x60, 0x20, 0x20, 0x70, # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0, # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0, # 3
    0x90, 0x90, 0xF0, 0x10, 0x10, # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0, # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0, # 6
    0xF0, 0x10, 0x20, 0x40, 0x40, # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0, # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0, # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90, # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0, # B
    0xF0, 0x80, 0x80, 0x80, 0xF0, # C
    0xE0, 0x90, 0x90, 0x90, 0xE0, # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0, # E
    0xF0, 0x80, 0xF0, 0x80, 0x80, # F
)

assert len(FONT) == GLYPH_HEIGHT * GLYPH_COUNT

# Functions
def glyph_address(digit):
    """ Return the memory address of the glyph for a hex digit, only the low nibble is used. """
    return FONT_LOCATION + (digit & 0x0F) * GLYPH_HEIGHT
    
def install_font(ram):
    """ Copy the font table into a RAM device at its fixed location. """
    ram.write_block(FONT_LOCATION, FONT)
