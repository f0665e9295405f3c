#!/usr/bin/env python

"""
pychip8 - Main application for running a CHIP-8 program.
"""

# Standard library imports
import os
import random
import signal
import sys
from optparse import OptionParser

# PyChip8 imports
from pychip8.constants import DISPLAY_WIDTH, DISPLAY_HEIGHT, TIMER_FREQUENCY
from pychip8.cpu import CPU
from pychip8.debugger import Debugger
from pychip8.exceptions import PyChip8Exception
from pychip8.speaker import Buzzer
from pychip8.ui import PygameManager, PALETTES

# Pygame imports
import pygame

# Logging setup
import logging
log = logging.getLogger("pychip8")

# Constants
DEFAULT_SPEED = 700

# Functions
def parse_cmdline():
    """ Parse the command line arguments. """
    parser = OptionParser(usage = "%prog [options] ROM [breakpoint ...]")
    parser.add_option("--debug", action = "store_true", dest = "debug",
                      help = "Enable DEBUG log level and the interactive debugger.")
    parser.add_option("--scale", action = "store", type = "int", dest = "scale", default = 10,
                      help = "Window pixels per CHIP-8 pixel, default: 10.")
    parser.add_option("--speed", action = "store", type = "int", dest = "speed", default = DEFAULT_SPEED,
                      help = "Instructions executed per second, default: %d." % DEFAULT_SPEED)
    parser.add_option("--seed", action = "store", type = "int", dest = "seed",
                      help = "Seed for the RND instruction's random number generator.")
    parser.add_option("--width", action = "store", type = "int", dest = "width", default = DISPLAY_WIDTH,
                      help = "Display width in pixels, default: %d." % DISPLAY_WIDTH)
    parser.add_option("--height", action = "store", type = "int", dest = "height", default = DISPLAY_HEIGHT,
                      help = "Display height in pixels, default: %d." % DISPLAY_HEIGHT)
    parser.add_option("--palette", action = "store", dest = "palette", default = "white",
                      help = "Display colors: white, green, or amber, default: white.")
    parser.add_option("--mute", action = "store_true", dest = "mute",
                      help = "Disable the sound timer buzzer.")
    parser.add_option("--log-file", action = "store", dest = "log_file",
                      help = "File to output debugging log.")
    parser.add_option("--log-filter", action = "store", dest = "log_filter",
                      help = "Log filter to apply to stderr handler.")
    return parser, parser.parse_args()
    
def setup_logging(options):
    """ Install the stderr (and optional file) log handlers on the root logger. """
    log_level = logging.DEBUG if options.debug else logging.INFO
    log_formatter = logging.Formatter("%(asctime)s.%(msecs)03d %(name)s(%(levelname)s): %(message)s", "%m/%d %H:%M:%S")
    stderr_handler = logging.StreamHandler()
    stderr_handler.setFormatter(log_formatter)
    if options.log_filter:
        stderr_handler.addFilter(logging.Filter(options.log_filter))
    root_logger = logging.root
    root_logger.setLevel(log_level)
    root_logger.addHandler(stderr_handler)
    
    if options.log_file:
        file_handler = logging.FileHandler(options.log_file)
        file_handler.setFormatter(log_formatter)
        log.addHandler(file_handler)
        
def main():
    """ Main application that runs the PyChip8 machine. """
    parser, (options, args) = parse_cmdline()
    if len(args) < 1:
        parser.error("a ROM file is required")
        
    setup_logging(options)
    log.info("PyChip8 oh hai")
    
    if options.palette not in PALETTES:
        parser.error("unknown palette: %r" % options.palette)
        
    rng = random.Random(options.seed)
    cpu = CPU(options.width, options.height, rng = rng)
    cpu.load_program_file(args[0])
    
    debugger = Debugger(cpu)
    for breakpoint in args[1:]:
        debugger.breakpoints.append(int(breakpoint, 16))
        
    if options.debug:
        signal.signal(signal.SIGINT, debugger.break_signal)
        
    cpu_or_debugger = debugger if options.debug else cpu
    
    pygame.init()
    buzzer = None
    if not options.mute:
        buzzer = Buzzer()
        
    pygame_manager = PygameManager(cpu, options.scale, PALETTES[options.palette], buzzer)
    clock = pygame.time.Clock()
    
    # Run a frame worth of instructions between calls to the Pygame machine.
    steps_per_frame = max(1, options.speed // TIMER_FREQUENCY)
    
    try:
        while True:
            pygame_manager.poll()
            
            for _ in range(steps_per_frame):
                cpu_or_debugger.step()
                
            clock.tick(TIMER_FREQUENCY)
            
    except PyChip8Exception:
        debugger.dump_all(logging.ERROR)
        log.exception("Machine fault at PC 0x%03x", cpu.pc)
        
        # Stop in the debugger one last time so we can inspect the state of the system.
        if options.debug:
            debugger.enter_debugger()
            
        sys.exit(1)
        
if __name__ == "__main__":
    if os.environ.get("PYCHIP8_PROFILING"):
        import cProfile
        cProfile.run("main()", sort = "time")
    else:
        main()
