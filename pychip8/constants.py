"""
pychip8.constants - A collection of constants used throughout PyChip8.
"""

MEMORY_SIZE = 0x1000
ADDRESS_MASK = 0x0FFF

FONT_LOCATION = 0x000
PROGRAM_LOCATION = 0x200
PROGRAM_CAPACITY = MEMORY_SIZE - PROGRAM_LOCATION

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF

STACK_DEPTH = 16

KEY_COUNT = 16

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8

TIMER_FREQUENCY = 60
NANOSECONDS_PER_SECOND = 1000000000

INSTRUCTION_SIZE = 2
