import unittest

from pychip8.tests.utils import get_test_file
from pychip8.exceptions import MemoryAccessException, ProgramTooLargeException
from pychip8.memory import *

class RandomAccessMemoryTests(unittest.TestCase):
    def setUp(self):
        self.obj = RAM()
        
    def test_initialized_to_zero(self):
        for x in range(0, 0x1000):
            self.assertEqual(self.obj.mem_read_byte(x), 0)
            
    def test_get_memory_size(self):
        self.assertEqual(self.obj.get_memory_size(), 0x1000)
        
    def test_repr(self):
        self.assertEqual(repr(self.obj), "<RAM(size=0x1000)>")
        
    def test_write_byte(self):
        self.obj.mem_write_byte(56, 43)
        self.assertEqual(self.obj.contents[56], 43)
        
    def test_write_byte_truncates(self):
        self.obj.mem_write_byte(56, 0x1FF)
        self.assertEqual(self.obj.contents[56], 0xFF)
        
    def test_read_byte(self):
        self.obj.contents[1234] = 76
        self.obj.contents[1235] = 77
        self.obj.contents[1236] = 78
        self.assertEqual(self.obj.mem_read_byte(1235), 77)
        
    def test_write_word_is_big_endian(self):
        self.obj.mem_write_word(56, 0x1234)
        self.assertEqual(self.obj.contents[56], 0x12)
        self.assertEqual(self.obj.contents[57], 0x34)
        
    def test_read_word_is_big_endian(self):
        self.obj.contents[0x200] = 0xA2
        self.obj.contents[0x201] = 0x2A
        self.assertEqual(self.obj.mem_read_word(0x200), 0xA22A)
        
    def test_read_past_end(self):
        with self.assertRaises(MemoryAccessException) as context:
            self.obj.mem_read_byte(0x1000)
        self.assertEqual(context.exception.address, 0x1000)
        self.assertEqual(context.exception.length, 1)
        
    def test_negative_address(self):
        with self.assertRaises(MemoryAccessException):
            self.obj.mem_read_byte(-1)
            
    def test_write_past_end(self):
        with self.assertRaises(MemoryAccessException):
            self.obj.mem_write_byte(0x1000, 0x12)
            
    def test_word_straddling_end(self):
        with self.assertRaises(MemoryAccessException):
            self.obj.mem_read_word(0xFFF)
        with self.assertRaises(MemoryAccessException):
            self.obj.mem_write_word(0xFFF, 0x1234)
        self.assertEqual(self.obj.contents[0xFFF], 0)
        
    def test_block_round_trip(self):
        self.obj.write_block(0x300, [1, 2, 3])
        self.assertEqual(self.obj.read_block(0x300, 3), [1, 2, 3])
        self.assertEqual(self.obj.read_block(0x300, 0), [])
        
    def test_block_write_is_all_or_nothing(self):
        with self.assertRaises(MemoryAccessException):
            self.obj.write_block(0xFFE, [1, 2, 3])
        self.assertEqual(self.obj.read_block(0xFFE, 2), [0, 0])
        
    def test_block_read_past_end(self):
        with self.assertRaises(MemoryAccessException):
            self.obj.read_block(0xFFC, 5)
            
    def test_clear(self):
        self.obj.write_block(0x000, [0xFF] * 0x1000)
        self.obj.clear()
        self.assertEqual(self.obj.read_block(0x000, 0x1000), [0] * 0x1000)
        
class ProgramLoadTests(unittest.TestCase):
    def setUp(self):
        self.ram = RAM()
        
    def test_load_default_offset(self):
        self.assertEqual(self.ram.load(b"\x00\xE0\x12\x00"), 4)
        self.assertEqual(self.ram.read_block(0x200, 4), [0x00, 0xE0, 0x12, 0x00])
        self.assertEqual(self.ram.mem_read_byte(0x1FF), 0)
        
    def test_load_custom_offset(self):
        self.ram.load([0xAB], 0x600)
        self.assertEqual(self.ram.mem_read_byte(0x600), 0xAB)
        
    def test_load_too_large(self):
        with self.assertRaises(ProgramTooLargeException) as context:
            self.ram.load(b"\x01" * 0xE01)
        self.assertEqual(context.exception.size, 0xE01)
        self.assertEqual(context.exception.capacity, 0xE00)
        self.assertEqual(self.ram.mem_read_byte(0x200), 0)
        
    def test_load_from_file(self):
        self.assertEqual(self.ram.load_from_file(get_test_file(self, "load_and_loop.ch8")), 4)
        self.assertEqual(self.ram.read_block(0x200, 4), [0x60, 0x2A, 0x12, 0x02])
        self.assertEqual(self.ram.mem_read_byte(0x204), 0)
