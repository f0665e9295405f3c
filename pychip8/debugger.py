"""
pychip8.debugger - Debugger module for PyChip8.
"""

# Standard library imports
import re
import sys
from collections import Counter

# PyChip8 imports
from pychip8.constants import REGISTER_COUNT
from pychip8.disassembler import disassemble, disassemble_block

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
EXAMINE_REGEX = re.compile("^x\\/(\\d+)b$")
RETURN_OPCODE = 0x00EE

# Classes
class Debugger(object):
    """ Interactive debugger for PyChip8. """
    def __init__(self, cpu):
        self.cpu = cpu
        
        self.breakpoints = []
        self.single_step = False
        self.debugger_shortcut = []
        self.dump_enabled = False
        self.step_out = False
        
        self.location_counter = Counter()
        self.instruction_counter = Counter()
        
    # ********** Debugger functions. **********
    def step(self):
        """ Wraps the CPU step() to print info and/or pause execution. """
        if self.dump_enabled:
            self.dump_all()
            
        next_instruction = self.cpu.peek_instruction_word()
        if self.dump_enabled:
            log.debug("next_instruction = 0x%04x (%s)", next_instruction, disassemble(next_instruction))
            
        # Check if we are trying to step out of a CALL-ed function.
        if self.step_out and next_instruction == RETURN_OPCODE:
            log.debug("Return detected!")
            self.step_out = False
            self.single_step = True
            
        if self.should_break():
            self.enter_debugger()
            
        self.location_counter.update({self.cpu.pc : 1})
        self.instruction_counter.update({next_instruction : 1})
        self.cpu.step()
        
    def dump_all(self, level = logging.DEBUG):
        """ Dump all registers, timers and the stack. """
        self.dump_regs(level)
        log.log(level, "I = 0x%04x  PC = 0x%03x  SP = %d  DT = %d  ST = %d",
                self.cpu.i, self.cpu.pc, self.cpu.sp, self.cpu.dt, self.cpu.st)
        self.dump_stack(level)
        
    def dump_regs(self, level):
        """ Dump the general purpose registers to the log, 8 per line. """
        for start in range(0, REGISTER_COUNT, 8):
            log.log(level, "  ".join(["V%X = 0x%02x" % (reg, self.cpu.v[reg]) for reg in range(start, start + 8)]))
            
    def dump_stack(self, level = logging.DEBUG):
        """ Dump the return addresses currently on the stack, innermost first. """
        for depth in range(self.cpu.sp - 1, -1, -1):
            log.log(level, "stack[%d]: 0x%03x", depth, self.cpu.stack[depth])
            
    def should_break(self):
        """ Return True if we should break now. """
        return self.single_step or self.cpu.pc in self.breakpoints
        
    def break_signal(self, _signum, _frame):
        """ Control-C handler to enter single-step mode. """
        print("Control-C")
        self.single_step = True
        
    def enter_debugger(self):
        """ Interactive debugger menu. """
        while True:
            try:
                word = self.cpu.peek_instruction_word()
                print("\nNext instruction: 0x%03x: %04x %s" % (self.cpu.pc, word, disassemble(word)))
            except Exception:
                print("\nNext instruction: 0x%03x: <out of bounds>" % self.cpu.pc)
                
            if len(self.debugger_shortcut) != 0:
                print("[%s] >" % " ".join(self.debugger_shortcut), end = " ")
            else:
                print(">", end = " ")
                
            try:
                cmd = input().lower().split()
            except KeyboardInterrupt:
                print("^C")
                continue
                
            try:
                resume = self.process_command(cmd)
                if resume:
                    break
            except Exception:
                log.exception("Unhandled exception processing: %r", cmd)
                
    def process_command(self, cmd):
        """ Actually process the command from the user, returns True to resume execution. """
        if len(cmd) == 0 and len(self.debugger_shortcut) != 0:
            cmd = self.debugger_shortcut
            print("Using: %s" % " ".join(cmd))
        else:
            self.debugger_shortcut = cmd
            
        if len(cmd) == 0:
            return False
            
        if len(cmd) == 1 and cmd[0] in ("continue", "c"):
            self.single_step = False
            return True
            
        elif len(cmd) == 1 and cmd[0] in ("step", "s"):
            self.single_step = True
            return True
            
        elif len(cmd) == 1 and cmd[0] in ("quit", "q"):
            sys.exit(0)
            
        elif len(cmd) == 1 and cmd[0] in ("dump", "d"):
            self.dump_all(logging.INFO)
            
        elif len(cmd) == 1 and cmd[0] in ("step-out", "out"):
            # Set the step out flag and disable single stepping so we run to the next return.
            self.step_out = True
            self.single_step = False
            return True
            
        elif len(cmd) == 2 and cmd[0] in ("key", "press"):
            self.cpu.keypad.press(int(cmd[1], 16))
            
        elif len(cmd) == 2 and cmd[0] == "release":
            if cmd[1] == "all":
                self.cpu.keypad.release_all()
            else:
                self.cpu.keypad.release(int(cmd[1], 16))
                
        elif len(cmd) == 1 and cmd[0] == "display":
            print(self.cpu.display.render_text())
            
        elif len(cmd) == 2 and cmd[0] in ("lc", "location-counter"):
            if cmd[1] == "clear":
                self.location_counter.clear()
            else:
                for location, count in self.location_counter.most_common(int(cmd[1])):
                    print("location = 0x%03x, count = %d" % (location, count))
                    
        elif len(cmd) == 2 and cmd[0] in ("ic", "instruction-counter"):
            if cmd[1] == "clear":
                self.instruction_counter.clear()
            else:
                for instruction, count in self.instruction_counter.most_common(int(cmd[1])):
                    print("instruction = 0x%04x (%s), count = %d" % (instruction, disassemble(instruction), count))
                    
        elif len(cmd) >= 1 and cmd[0] == "info":
            self.debugger_shortcut = []
            if len(cmd) == 2 and cmd[1] in ("breakpoints", "break"):
                print("Breakpoints:")
                for breakpoint in self.breakpoints:
                    print("  0x%03x" % breakpoint)
                    
        elif len(cmd) == 2 and cmd[0] == "break":
            self.debugger_shortcut = []
            self.breakpoints.append(int(cmd[1], 16))
            
        elif len(cmd) == 2 and cmd[0] == "clear":
            self.debugger_shortcut = []
            if cmd[1] == "all":
                self.breakpoints = []
            elif cmd[1] == "dump":
                self.dump_enabled = False
            else:
                self.breakpoints.remove(int(cmd[1], 16))
                
        elif len(cmd) == 2 and cmd[0] == "set" and cmd[1] == "dump":
            self.debugger_shortcut = []
            self.dump_enabled = True
            self.dump_all()
            
        elif len(cmd) >= 1 and cmd[0] in ("dis", "disassemble"):
            address = int(cmd[1], 16) if len(cmd) >= 2 else self.cpu.pc
            count = int(cmd[2]) if len(cmd) >= 3 else 8
            for location, word, mnemonic in disassemble_block(self.cpu.memory, address, count):
                print("0x%03x: %04x  %s" % (location, word, mnemonic))
                
        elif len(cmd) >= 1 and cmd[0][0] == "x":
            count = 1
            if len(cmd[0]) > 1:
                match = EXAMINE_REGEX.match(cmd[0])
                if match is None:
                    print("invalid examine format: %r" % cmd[0])
                    return False
                count = int(match.group(1))
                
            if len(cmd) < 2:
                print("you need an address")
                return False
                
            address = int(cmd[1], 0)
            data = self.cpu.memory.read_block(address, count)
            readable = "".join([chr(x) if x > 0x20 and x < 0x7F else "." for x in data])
            
            # Repeating the command continues where this one left off.
            self.debugger_shortcut = [cmd[0], "0x%03x" % (address + count)]
            
            print("0x%03x:" % address, " ".join(["%02x" % item for item in data]), readable)
            
        else:
            print("i don't know what %r is." % " ".join(cmd))
            
        return False
