"""
pychip8.display - Monochrome framebuffer for PyChip8.

The framebuffer is a plain grid of booleans.  Presentation layers (see
pychip8.ui) read it whenever the dirty flag is set and clear the flag once
they have consumed the frame.
"""

# PyChip8 imports
from pychip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from pychip8.helpers import bits_of_byte

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
TEXT_PIXEL_ON = "#"
TEXT_PIXEL_OFF = " "

# Classes
class Framebuffer(object):
    """ A width x height grid of lit/unlit pixels with a dirty flag. """
    def __init__(self, width = DISPLAY_WIDTH, height = DISPLAY_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Display dimensions must be positive, got %dx%d!" % (width, height))
            
        self.width = width
        self.height = height
        self.rows = [[False] * width for _ in range(height)]
        self.dirty = False
        
    def __repr__(self):
        return "<%s(%dx%d)>" % (self.__class__.__name__, self.width, self.height)
        
    def get_resolution(self):
        """ Returns a tuple (width, height) of the display size. """
        return self.width, self.height
        
    def get_pixel(self, x, y):
        """ Return the state of a single pixel, coordinates wrap around the edges. """
        return self.rows[y % self.height][x % self.width]
        
    def lit_pixels(self):
        """ Return the set of (x, y) coordinates of every lit pixel. """
        return set((x, y) for y, row in enumerate(self.rows) for x, pixel in enumerate(row) if pixel)
        
    def clear(self):
        """ Turn every pixel off. """
        for row in self.rows:
            for x in range(self.width):
                row[x] = False
        self.dirty = True
        
    def draw_sprite(self, x, y, sprite):
        """
        XOR an 8 pixel wide sprite onto the display with its top left corner at (x, y).
        
        The origin is taken modulo the display size and every pixel of the sprite
        wraps around to the opposite edge on its own, nothing is clipped.  Returns
        True if any lit pixel was turned off (a collision).
        """
        origin_x = x % self.width
        origin_y = y % self.height
        collision = False
        
        for row_index, byte in enumerate(sprite):
            if byte == 0:
                continue
                
            # Any set bit marks the frame as changed, even if it lands on a pixel twice.
            self.dirty = True
            row = self.rows[(origin_y + row_index) % self.height]
            for column, bit in enumerate(bits_of_byte(byte)):
                if bit:
                    pixel_x = (origin_x + column) % self.width
                    if row[pixel_x]:
                        collision = True
                    row[pixel_x] = not row[pixel_x]
                    
        return collision
        
    def render_text(self, on = TEXT_PIXEL_ON, off = TEXT_PIXEL_OFF):
        """ Render the framebuffer as lines of text, one character per pixel. """
        return "\n".join("".join(on if pixel else off for pixel in row) for row in self.rows)
