"""
pychip8.cpu - CHIP-8 CPU module for PyChip8.

The CPU owns the whole machine state: memory, registers, stack, timers, the
framebuffer and the keypad.  A host advances it one instruction at a time with
step() and reads/writes the framebuffer and keypad between steps.
"""

# Standard library imports
import array
import random

# PyChip8 imports
from pychip8.constants import *
from pychip8.display import Framebuffer
from pychip8.exceptions import PyChip8Exception, StackOverflowException, StackUnderflowException, RandomSourceException
from pychip8.font import glyph_address, install_font
from pychip8.helpers import decode_instruction, bcd_digits
from pychip8.keypad import Keypad
from pychip8.memory import RAM
from pychip8.timer import TimerPacer, decay

# Logging setup
import logging
log = logging.getLogger(__name__)
log.addHandler(logging.NullHandler())

# Constants
OPCODE_CLS = 0x00E0
OPCODE_RET = 0x00EE

# Functions
# The ALU operators take the values of Vx and Vy and return (result, flag).
# A flag of None means VF is left alone.
def operator_ld(operand_x, operand_y):
    """ 8xy0 - LD Vx, Vy """
    return operand_y, None
    
def operator_or(operand_x, operand_y):
    """ 8xy1 - OR Vx, Vy """
    return operand_x | operand_y, None
    
def operator_and(operand_x, operand_y):
    """ 8xy2 - AND Vx, Vy """
    return operand_x & operand_y, None
    
def operator_xor(operand_x, operand_y):
    """ 8xy3 - XOR Vx, Vy """
    return operand_x ^ operand_y, None
    
def operator_add(operand_x, operand_y):
    """ 8xy4 - ADD Vx, Vy, VF is set to the carry out of bit 7. """
    result = operand_x + operand_y
    return result & 0xFF, 1 if result > 0xFF else 0
    
def operator_sub(operand_x, operand_y):
    """ 8xy5 - SUB Vx, Vy, VF is set to NOT borrow. """
    return (operand_x - operand_y) & 0xFF, 1 if operand_x >= operand_y else 0
    
def operator_shr(operand_x, operand_y):
    """ 8xy6 - SHR Vx, VF is set to the bit shifted out. """
    return operand_x >> 1, operand_x & 0x01
    
def operator_subn(operand_x, operand_y):
    """ 8xy7 - SUBN Vx, Vy, VF is set to NOT borrow. """
    return (operand_y - operand_x) & 0xFF, 1 if operand_y >= operand_x else 0
    
def operator_shl(operand_x, operand_y):
    """ 8xyE - SHL Vx, VF is set to the bit shifted out. """
    return (operand_x << 1) & 0xFF, (operand_x & 0x80) >> 7
    
# Classes
class CPU(object):
    """ CHIP-8 virtual machine, advanced one instruction per step(). """
    def __init__(self, width = DISPLAY_WIDTH, height = DISPLAY_HEIGHT, rng = None, clock = None):
        self.memory = RAM(MEMORY_SIZE)
        self.display = Framebuffer(width, height)
        self.keypad = Keypad()
        
        # Anything with randint(a, b) will do, tests substitute a scripted source.
        self.rng = rng if rng is not None else random.Random()
        
        # Timers count down against wall-clock time, not instructions.
        self.pacer = TimerPacer(clock)
        
        # Registers.
        self.v = array.array("B", (0,) * REGISTER_COUNT)
        self.i = 0
        self.pc = PROGRAM_LOCATION
        self.dt = 0
        self.st = 0
        
        # Return address stack, sp is the number of entries in use.
        self.stack = array.array("H", (0,) * STACK_DEPTH)
        self.sp = 0
        
        # Set while Fx0A is holding the program counter.
        self.waiting_for_key = False
        
        # Fast instruction decoding, indexed by the top nibble.
        self.opcode_vector = [
            self.opcode_group_0,    # 0nnn, 00E0, 00EE
            self.opcode_jp,         # 1nnn
            self.opcode_call,       # 2nnn
            self.opcode_se_imm,     # 3xkk
            self.opcode_sne_imm,    # 4xkk
            self.opcode_se_reg,     # 5xy0
            self.opcode_ld_imm,     # 6xkk
            self.opcode_add_imm,    # 7xkk
            self.opcode_group_alu,  # 8xyz
            self.opcode_sne_reg,    # 9xy0
            self.opcode_ld_i,       # Annn
            self.opcode_jp_v0,      # Bnnn
            self.opcode_rnd,        # Cxkk
            self.opcode_drw,        # Dxyn
            self.opcode_group_e,    # Ex9E, ExA1
            self.opcode_group_f,    # Fxkk
        ]
        
        # ALU vector table, indexed by the low nibble of 8xyz.
        self.alu_vector_table = {
            0x0 : operator_ld,
            0x1 : operator_or,
            0x2 : operator_and,
            0x3 : operator_xor,
            0x4 : operator_add,
            0x5 : operator_sub,
            0x6 : operator_shr,
            0x7 : operator_subn,
            0xE : operator_shl,
        }
        
        # Key skips, indexed by the low byte of Exkk.
        self.opcode_group_e_vector = {
            0x9E : self.opcode_skp,
            0xA1 : self.opcode_sknp,
        }
        
        # Timer, keypad, and index register instructions, indexed by the low byte of Fxkk.
        self.opcode_group_f_vector = {
            0x07 : self.opcode_ld_vx_dt,
            0x0A : self.opcode_ld_vx_key,
            0x15 : self.opcode_ld_dt_vx,
            0x18 : self.opcode_ld_st_vx,
            0x1E : self.opcode_add_i_vx,
            0x29 : self.opcode_ld_f_vx,
            0x33 : self.opcode_ld_b_vx,
            0x55 : self.opcode_ld_mem_vx,
            0x65 : self.opcode_ld_vx_mem,
        }
        
        self.reset()
        
    def reset(self):
        """ Put the machine in its power-on state, memory is zeroed and the font reinstalled. """
        self.memory.clear()
        install_font(self.memory)
        
        for index in range(REGISTER_COUNT):
            self.v[index] = 0
        for index in range(STACK_DEPTH):
            self.stack[index] = 0
            
        self.i = 0
        self.pc = PROGRAM_LOCATION
        self.sp = 0
        self.dt = 0
        self.st = 0
        self.waiting_for_key = False
        
        self.display.clear()
        self.keypad.release_all()
        self.pacer.reset()
        
    # ********** Host interface. **********
    @property
    def dirty(self):
        """ True when the display changed since the presentation layer last consumed it. """
        return self.display.dirty
        
    @dirty.setter
    def dirty(self, value):
        self.display.dirty = value
        
    @property
    def sound_on(self):
        """ The buzzer sounds whenever the sound timer is non-zero. """
        return self.st > 0
        
    def load_program(self, data):
        """ Load a program image at the program start address. """
        size = self.memory.load(data, PROGRAM_LOCATION)
        log.info("Loaded %d byte program.", size)
        return size
        
    def load_program_file(self, filename):
        """ Load a program image from a file at the program start address. """
        size = self.memory.load_from_file(filename, PROGRAM_LOCATION)
        log.info("Loaded %d byte program from %s.", size, filename)
        return size
        
    def peek_instruction_word(self):
        """ Return the instruction word at PC without advancing it. """
        return self.memory.mem_read_word(self.pc)
        
    def step(self):
        """ Update the timers, then fetch and execute one instruction. """
        ticks = self.pacer.elapsed_ticks()
        if ticks:
            self.dt = decay(self.dt, ticks)
            self.st = decay(self.st, ticks)
            
        pc = self.pc
        try:
            word = self.memory.mem_read_word(pc)
            
            # PC moves past the instruction before it executes, jump targets are absolute.
            self.pc = pc + INSTRUCTION_SIZE
            instruction = decode_instruction(word)
            self.opcode_vector[instruction.family](instruction)
            
        except PyChip8Exception as err:
            log.error("Fault at PC 0x%03x: %s", pc, err)
            raise
            
    def unknown_opcode(self, instruction):
        """ Unassigned encodings are ignored, as modern interpreters do. """
        log.debug("Ignoring unknown opcode 0x%04x at PC 0x%03x.", instruction.word, self.pc - INSTRUCTION_SIZE)
        
    def skip_next_instruction(self):
        """ Advance PC over the next instruction. """
        self.pc += INSTRUCTION_SIZE
        
    # ********** System and flow control opcodes. **********
    def opcode_group_0(self, instruction):
        """ Entry point for 00E0 (CLS), 00EE (RET) and 0nnn (SYS). """
        if instruction.word == OPCODE_CLS:
            self.opcode_cls()
        elif instruction.word == OPCODE_RET:
            self.opcode_ret()
        else:
            # SYS jumped to native code on the original machines, there is nothing to run here.
            self.unknown_opcode(instruction)
            
    def opcode_cls(self):
        """ 00E0 - CLS - Clear the display. """
        self.display.clear()
        
    def opcode_ret(self):
        """ 00EE - RET - Return from a subroutine. """
        if self.sp == 0:
            raise StackUnderflowException(self.pc - INSTRUCTION_SIZE)
            
        self.sp -= 1
        self.pc = self.stack[self.sp]
        log.debug("RET to 0x%03x, depth %d.", self.pc, self.sp)
        
    def opcode_jp(self, instruction):
        """ 1nnn - JP addr - Jump to nnn. """
        self.pc = instruction.nnn
        
    def opcode_call(self, instruction):
        """ 2nnn - CALL addr - Push the return address and jump to nnn. """
        if self.sp >= STACK_DEPTH:
            raise StackOverflowException(self.pc - INSTRUCTION_SIZE)
            
        self.stack[self.sp] = self.pc
        self.sp += 1
        self.pc = instruction.nnn
        log.debug("CALL 0x%03x, depth %d.", self.pc, self.sp)
        
    def opcode_jp_v0(self, instruction):
        """ Bnnn - JP V0, addr - Jump to nnn + V0. """
        self.pc = instruction.nnn + self.v[0]
        
    # ********** Conditional skip opcodes. **********
    def opcode_se_imm(self, instruction):
        """ 3xkk - SE Vx, byte - Skip the next instruction if Vx == kk. """
        if self.v[instruction.x] == instruction.kk:
            self.skip_next_instruction()
            
    def opcode_sne_imm(self, instruction):
        """ 4xkk - SNE Vx, byte - Skip the next instruction if Vx != kk. """
        if self.v[instruction.x] != instruction.kk:
            self.skip_next_instruction()
            
    def opcode_se_reg(self, instruction):
        """ 5xy0 - SE Vx, Vy - Skip the next instruction if Vx == Vy. """
        if instruction.z != 0:
            self.unknown_opcode(instruction)
        elif self.v[instruction.x] == self.v[instruction.y]:
            self.skip_next_instruction()
            
    def opcode_sne_reg(self, instruction):
        """ 9xy0 - SNE Vx, Vy - Skip the next instruction if Vx != Vy. """
        if instruction.z != 0:
            self.unknown_opcode(instruction)
        elif self.v[instruction.x] != self.v[instruction.y]:
            self.skip_next_instruction()
            
    # ********** Register opcodes. **********
    def opcode_ld_imm(self, instruction):
        """ 6xkk - LD Vx, byte """
        self.v[instruction.x] = instruction.kk
        
    def opcode_add_imm(self, instruction):
        """ 7xkk - ADD Vx, byte - Wraps at 8 bits and leaves VF alone. """
        self.v[instruction.x] = (self.v[instruction.x] + instruction.kk) & 0xFF
        
    def opcode_group_alu(self, instruction):
        """
        Entry point for all 8xyz register to register opcodes.
        
        Both operands are read before anything is written.  The flag goes into
        VF first and the result into Vx second, so with x == F the result wins.
        """
        operator = self.alu_vector_table.get(instruction.z)
        if operator is None:
            self.unknown_opcode(instruction)
            return
            
        result, flag = operator(self.v[instruction.x], self.v[instruction.y])
        if flag is not None:
            self.v[FLAG_REGISTER] = flag
        self.v[instruction.x] = result
        
    def opcode_rnd(self, instruction):
        """ Cxkk - RND Vx, byte - Vx = random byte AND kk. """
        try:
            value = self.rng.randint(0, 0xFF)
        except Exception as err:
            raise RandomSourceException("Random source failed: %s" % err) from err
            
        self.v[instruction.x] = value & instruction.kk
        
    # ********** Index register and memory opcodes. **********
    def opcode_ld_i(self, instruction):
        """ Annn - LD I, addr """
        self.i = instruction.nnn
        
    def opcode_add_i_vx(self, instruction):
        """ Fx1E - ADD I, Vx - Unlike 8xy4 this never touches VF. """
        self.i = (self.i + self.v[instruction.x]) & 0xFFFF
        
    def opcode_ld_f_vx(self, instruction):
        """ Fx29 - LD F, Vx - Point I at the font glyph for the digit in Vx. """
        self.i = glyph_address(self.v[instruction.x])
        
    def opcode_ld_b_vx(self, instruction):
        """ Fx33 - LD B, Vx - Store the decimal digits of Vx at I, I+1 and I+2. """
        self.memory.write_block(self.i, bcd_digits(self.v[instruction.x]))
        
    def opcode_ld_mem_vx(self, instruction):
        """ Fx55 - LD [I], Vx - Store V0 through Vx at I, I is not modified. """
        self.memory.write_block(self.i, self.v[0:instruction.x + 1].tolist())
        
    def opcode_ld_vx_mem(self, instruction):
        """ Fx65 - LD Vx, [I] - Load V0 through Vx from I, I is not modified. """
        for index, value in enumerate(self.memory.read_block(self.i, instruction.x + 1)):
            self.v[index] = value
            
    # ********** Display opcodes. **********
    def opcode_drw(self, instruction):
        """ Dxyn - DRW Vx, Vy, nibble - XOR an n row sprite from I onto the display, VF = collision. """
        sprite = self.memory.read_block(self.i, instruction.z)
        collision = self.display.draw_sprite(self.v[instruction.x], self.v[instruction.y], sprite)
        self.v[FLAG_REGISTER] = 1 if collision else 0
        
    # ********** Keypad opcodes. **********
    def opcode_group_e(self, instruction):
        """ Entry point for the Exkk key skip opcodes. """
        handler = self.opcode_group_e_vector.get(instruction.kk)
        if handler is None:
            self.unknown_opcode(instruction)
        else:
            handler(instruction)
            
    def opcode_skp(self, instruction):
        """ Ex9E - SKP Vx - Skip the next instruction if the key in Vx is pressed. """
        if self.keypad[self.v[instruction.x]]:
            self.skip_next_instruction()
            
    def opcode_sknp(self, instruction):
        """ ExA1 - SKNP Vx - Skip the next instruction if the key in Vx is not pressed. """
        if not self.keypad[self.v[instruction.x]]:
            self.skip_next_instruction()
            
    def opcode_ld_vx_key(self, instruction):
        """
        Fx0A - LD Vx, K - Wait for a key press and store the key in Vx.
        
        Waiting never blocks: with no key down PC is moved back onto this
        instruction so it runs again on the next step, giving the host a chance
        to update the keypad in between.
        """
        key = self.keypad.first_pressed()
        if key is None:
            if not self.waiting_for_key:
                log.debug("Waiting for a key press into V%X.", instruction.x)
            self.waiting_for_key = True
            self.pc -= INSTRUCTION_SIZE
            return
            
        self.waiting_for_key = False
        self.v[instruction.x] = key
        log.debug("Key 0x%x pressed, stored in V%X.", key, instruction.x)
        
    # ********** Timer opcodes. **********
    def opcode_group_f(self, instruction):
        """ Entry point for the Fxkk opcodes. """
        handler = self.opcode_group_f_vector.get(instruction.kk)
        if handler is None:
            self.unknown_opcode(instruction)
        else:
            handler(instruction)
            
    def opcode_ld_vx_dt(self, instruction):
        """ Fx07 - LD Vx, DT """
        self.v[instruction.x] = self.dt
        
    def opcode_ld_dt_vx(self, instruction):
        """ Fx15 - LD DT, Vx """
        self.dt = self.v[instruction.x]
        
    def opcode_ld_st_vx(self, instruction):
        """ Fx18 - LD ST, Vx """
        self.st = self.v[instruction.x]
