import unittest

from pychip8.timer import *
from pychip8.tests.utils import FakeClock

class TimerPacerTests(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.pacer = TimerPacer(self.clock)
        
    def test_initial_state(self):
        self.assertEqual(self.pacer.frequency, 60)
        self.assertEqual(self.pacer.timing_error, 0)
        self.assertEqual(self.pacer.last_time, 0)
        
    def test_no_time_elapsed(self):
        self.assertEqual(self.pacer.elapsed_ticks(), 0)
        
    def test_whole_ticks(self):
        self.clock.advance_seconds(1, 20)
        self.assertEqual(self.pacer.elapsed_ticks(), 3)
        self.assertEqual(self.pacer.timing_error, 0)
        
    def test_one_second(self):
        self.clock.advance_seconds(1)
        self.assertEqual(self.pacer.elapsed_ticks(), 60)
        
    def test_remainder_carried_forward(self):
        # 1.5 ticks, then another 0.504 ticks.
        self.clock.advance(25000000)
        self.assertEqual(self.pacer.elapsed_ticks(), 1)
        self.assertEqual(self.pacer.timing_error, 500000000)
        self.clock.advance(8400000)
        self.assertEqual(self.pacer.elapsed_ticks(), 1)
        self.assertEqual(self.pacer.timing_error, 4000000)
        
    def test_many_small_intervals(self):
        total = 0
        for _ in range(600):
            self.clock.advance_seconds(1, 600)
            total += self.pacer.elapsed_ticks()
        self.assertEqual(total, 60)
        
    def test_ticks_independent_of_call_rate(self):
        for calls in (1, 2, 3, 7, 59, 61, 1000):
            clock = FakeClock()
            pacer = TimerPacer(clock)
            total = 0
            for _ in range(calls):
                clock.advance_seconds(1, calls)
                total += pacer.elapsed_ticks()
            self.assertEqual(total, 60, "%d calls" % calls)
            
    def test_clock_going_backwards(self):
        self.clock.advance_seconds(1)
        self.pacer.elapsed_ticks()
        self.clock.advance_seconds(-1, 2)
        self.assertEqual(self.pacer.elapsed_ticks(), 0)
        self.clock.advance(20000000)
        self.assertEqual(self.pacer.elapsed_ticks(), 1)
        
    def test_reset_drops_partial_tick(self):
        self.clock.advance_seconds(1, 120)
        self.pacer.elapsed_ticks()
        self.pacer.reset()
        self.assertEqual(self.pacer.timing_error, 0)
        self.clock.advance_seconds(1, 120)
        self.assertEqual(self.pacer.elapsed_ticks(), 0)
        
    def test_custom_frequency(self):
        pacer = TimerPacer(self.clock, frequency = 100)
        self.clock.advance_seconds(1)
        self.assertEqual(pacer.elapsed_ticks(), 100)
        
    def test_invalid_frequency(self):
        with self.assertRaises(ValueError):
            TimerPacer(self.clock, frequency = 0)
            
    def test_default_clock(self):
        pacer = TimerPacer()
        self.assertIsInstance(pacer.last_time, int)
        self.assertGreaterEqual(pacer.elapsed_ticks(), 0)
        
class DecayTests(unittest.TestCase):
    def test_simple(self):
        self.assertEqual(decay(255, 60), 195)
        
    def test_no_ticks(self):
        self.assertEqual(decay(12, 0), 12)
        
    def test_clamped(self):
        self.assertEqual(decay(30, 60), 0)
        self.assertEqual(decay(0, 1), 0)
