"""
pychip8.speaker - Sound timer buzzer for PyChip8 using Pygame.

CHIP-8 only has a single tone that plays whenever the sound timer is non-zero.
"""

# Standard library imports
import array

# Pygame imports
import pygame

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
SAMPLE_RATE = 44100
SIZE = -16
CHANNELS = 1
MIN_SHORT = -32768
MAX_SHORT = 32767
DEFAULT_TONE = 440
DEFAULT_VOLUME = 0.25

# Module-level init for Pygame mixer, must be called before anything else.
pygame.mixer.pre_init(SAMPLE_RATE, SIZE, CHANNELS)

# Functions
def square_wave(frequency, sample_rate = SAMPLE_RATE):
    """ Return one second of a square wave as signed 16-bit samples. """
    if frequency <= 0:
        raise ValueError("frequency must be positive!")
        
    half_period = max(1, int(float(sample_rate) / (frequency * 2)))
    return array.array("h", (MIN_SHORT if (index // half_period) & 0x1 else MAX_SHORT for index in range(sample_rate)))
    
# Classes
class Buzzer(object):
    """ Plays a looping tone while the sound timer runs. """
    def __init__(self, frequency = DEFAULT_TONE, volume = DEFAULT_VOLUME):
        self.data = square_wave(frequency)
        self.volume = volume
        self.sound = None
        self.playing = False
        
    def update(self, sound_on):
        """ Start or stop the tone to follow the sound timer. """
        if sound_on and not self.playing:
            self.play()
        elif not sound_on and self.playing:
            self.stop()
            
    def play(self):
        """ Plays the tone until stopped. """
        if self.sound is None:
            self.sound = pygame.mixer.Sound(buffer = self.data)
            self.sound.set_volume(self.volume)
        self.sound.play(loops = -1)
        self.playing = True
        
    def stop(self):
        """ Stop a playing tone. """
        if self.sound is not None:
            self.sound.stop()
        self.playing = False
