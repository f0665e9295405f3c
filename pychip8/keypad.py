"""
pychip8.keypad - 16 key hexadecimal keypad for PyChip8.

The keypad holds the current (level, not edge) state of each key.  Only the
host writes to it, the CPU only reads it between instructions.
"""

# PyChip8 imports
from pychip8.constants import KEY_COUNT

# Classes
class Keypad(object):
    """ Pressed/released state of keys 0x0 - 0xF. """
    def __init__(self):
        self.keys = [False] * KEY_COUNT
        
    def __repr__(self):
        return "<%s(pressed=%r)>" % (self.__class__.__name__, self.pressed_keys())
        
    def __getitem__(self, key):
        return self.keys[key & 0x0F]
        
    def __setitem__(self, key, value):
        self.check_key(key)
        self.keys[key] = bool(value)
        
    def __len__(self):
        return KEY_COUNT
        
    @staticmethod
    def check_key(key):
        """ Raise ValueError for a key outside of 0x0 - 0xF. """
        if key < 0 or key >= KEY_COUNT:
            raise ValueError("key must be in the range [0x0, 0xF], got %r!" % key)
            
    def press(self, key):
        """ Mark a key as held down. """
        self[key] = True
        
    def release(self, key):
        """ Mark a key as released. """
        self[key] = False
        
    def release_all(self):
        """ Release every key. """
        self.keys = [False] * KEY_COUNT
        
    def set_keys(self, states):
        """ Replace the whole keypad state from a sequence of 16 booleans. """
        states = [bool(state) for state in states]
        if len(states) != KEY_COUNT:
            raise ValueError("states must contain exactly %d entries!" % KEY_COUNT)
        self.keys = states
        
    def pressed_keys(self):
        """ Return a list of the currently pressed keys in ascending order. """
        return [key for key, pressed in enumerate(self.keys) if pressed]
        
    def first_pressed(self):
        """ Return the lowest numbered pressed key or None if no key is pressed. """
        for key, pressed in enumerate(self.keys):
            if pressed:
                return key
        return None
