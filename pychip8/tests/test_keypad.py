import unittest

from pychip8.keypad import *

class KeypadTests(unittest.TestCase):
    def setUp(self):
        self.keypad = Keypad()
        
    def test_initial_state(self):
        self.assertEqual(len(self.keypad), 16)
        self.assertEqual(self.keypad.pressed_keys(), [])
        self.assertIsNone(self.keypad.first_pressed())
        
    def test_press_release(self):
        self.keypad.press(0xA)
        self.assertTrue(self.keypad[0xA])
        self.keypad.release(0xA)
        self.assertFalse(self.keypad[0xA])
        
    def test_read_uses_low_nibble(self):
        self.keypad.press(0x3)
        self.assertTrue(self.keypad[0x13])
        
    def test_invalid_key(self):
        with self.assertRaises(ValueError):
            self.keypad.press(16)
        with self.assertRaises(ValueError):
            self.keypad.release(-1)
            
    def test_first_pressed(self):
        self.keypad.press(0xF)
        self.keypad.press(0x4)
        self.assertEqual(self.keypad.first_pressed(), 0x4)
        self.assertEqual(self.keypad.pressed_keys(), [0x4, 0xF])
        
    def test_set_keys(self):
        states = [False] * 16
        states[2] = True
        states[9] = 1
        self.keypad.set_keys(states)
        self.assertEqual(self.keypad.pressed_keys(), [2, 9])
        
    def test_set_keys_wrong_length(self):
        with self.assertRaises(ValueError):
            self.keypad.set_keys([True] * 15)
            
    def test_release_all(self):
        self.keypad.set_keys([True] * 16)
        self.keypad.release_all()
        self.assertEqual(self.keypad.pressed_keys(), [])
        
    def test_repr(self):
        self.keypad.press(1)
        self.assertEqual(repr(self.keypad), "<Keypad(pressed=[1])>")
