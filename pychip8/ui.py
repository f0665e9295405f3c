"""
pychip8.ui - Pygame wrapper for PyChip8.
"""

# Standard library imports
import sys
from collections import namedtuple

# PyGame Imports
import pygame
from pygame.locals import *

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
DEFAULT_SCALE = 10

Palette = namedtuple("Palette", ["off", "on"])
PALETTES = {
    "white" : Palette((0x00, 0x00, 0x00), (0xFF, 0xFF, 0xFF)),
    "green" : Palette((0x00, 0x00, 0x00), (0x00, 0xAA, 0x00)),
    "amber" : Palette((0x28, 0x28, 0x28), (0xFF, 0xB0, 0x00)),
}

# The COSMAC VIP keypad laid out on the left hand side of a QWERTY keyboard:
#
#   1 2 3 C        1 2 3 4
#   4 5 6 D   ->   Q W E R
#   7 8 9 E        A S D F
#   A 0 B F        Z X C V
PYGAME_KEY_TO_CHIP8_KEYS = {
    # Pylint cannot infer the constants from Pygame.
    # pylint: disable=undefined-variable
    K_1 : 0x1,
    K_2 : 0x2,
    K_3 : 0x3,
    K_4 : 0xC,
    K_q : 0x4,
    K_w : 0x5,
    K_e : 0x6,
    K_r : 0xD,
    K_a : 0x7,
    K_s : 0x8,
    K_d : 0x9,
    K_f : 0xE,
    K_z : 0xA,
    K_x : 0x0,
    K_c : 0xB,
    K_v : 0xF,
    # pylint: enable=undefined-variable
}

assert sorted(PYGAME_KEY_TO_CHIP8_KEYS.values()) == list(range(16))

# Classes
class PygameManager(object):
    """ Manages interactions with the Pygame UI for PyChip8. """
    def __init__(self, cpu, scale = DEFAULT_SCALE, palette = PALETTES["white"], buzzer = None):
        self.cpu = cpu
        self.display = cpu.display
        self.keypad = cpu.keypad
        self.scale = scale
        self.palette = palette
        self.buzzer = buzzer
        
        width, height = self.display.get_resolution()
        self.screen = pygame.display.set_mode((width * scale, height * scale))
        pygame.display.set_caption("PyChip8")
        
        # Draw the blank screen once even if the program never touches the display.
        self.display.dirty = True
        
    def poll(self):
        """ Run one iteration of the Pygame machine. """
        for event in pygame.event.get():
            if event.type == QUIT:
                log.critical("Pygame QUIT detected, powering down...")
                if self.buzzer is not None:
                    self.buzzer.stop()
                sys.exit()
                
            elif event.type == KEYDOWN:
                key = PYGAME_KEY_TO_CHIP8_KEYS.get(event.key, None)
                if key is not None:
                    self.keypad.press(key)
                    
            elif event.type == KEYUP:
                key = PYGAME_KEY_TO_CHIP8_KEYS.get(event.key, None)
                if key is not None:
                    self.keypad.release(key)
                    
        if self.buzzer is not None:
            self.buzzer.update(self.cpu.sound_on)
            
        if self.display.dirty:
            self.draw()
            
    def draw(self):
        """ Blit the framebuffer to the window and consume the dirty flag. """
        self.screen.fill(self.palette.off)
        for y, row in enumerate(self.display.rows):
            for x, pixel in enumerate(row):
                if pixel:
                    self.screen.fill(self.palette.on, (x * self.scale, y * self.scale, self.scale, self.scale))
                    
        pygame.display.flip()
        self.display.dirty = False
