"""
pychip8.disassembler - Instruction word to mnemonic conversion for PyChip8.

Mnemonics follow the notation from Cowgod's Chip-8 Technical Reference.
"""

# PyChip8 imports
from pychip8.helpers import decode_instruction

# Constants
ALU_MNEMONICS = {
    0x0 : "LD V%X, V%X",
    0x1 : "OR V%X, V%X",
    0x2 : "AND V%X, V%X",
    0x3 : "XOR V%X, V%X",
    0x4 : "ADD V%X, V%X",
    0x5 : "SUB V%X, V%X",
    0x6 : "SHR V%X, V%X",
    0x7 : "SUBN V%X, V%X",
    0xE : "SHL V%X, V%X",
}

F_GROUP_MNEMONICS = {
    0x07 : "LD V%X, DT",
    0x0A : "LD V%X, K",
    0x15 : "LD DT, V%X",
    0x18 : "LD ST, V%X",
    0x1E : "ADD I, V%X",
    0x29 : "LD F, V%X",
    0x33 : "LD B, V%X",
    0x55 : "LD [I], V%X",
    0x65 : "LD V%X, [I]",
}

# Functions
def disassemble(word):
    """ Return the mnemonic for an instruction word, unknown words become a DW directive. """
    ins = decode_instruction(word)
    family = ins.family
    
    if word == 0x00E0:
        return "CLS"
    elif word == 0x00EE:
        return "RET"
    elif family == 0x0:
        return "SYS 0x%03X" % ins.nnn
    elif family == 0x1:
        return "JP 0x%03X" % ins.nnn
    elif family == 0x2:
        return "CALL 0x%03X" % ins.nnn
    elif family == 0x3:
        return "SE V%X, 0x%02X" % (ins.x, ins.kk)
    elif family == 0x4:
        return "SNE V%X, 0x%02X" % (ins.x, ins.kk)
    elif family == 0x5 and ins.z == 0:
        return "SE V%X, V%X" % (ins.x, ins.y)
    elif family == 0x6:
        return "LD V%X, 0x%02X" % (ins.x, ins.kk)
    elif family == 0x7:
        return "ADD V%X, 0x%02X" % (ins.x, ins.kk)
    elif family == 0x8 and ins.z in ALU_MNEMONICS:
        return ALU_MNEMONICS[ins.z] % (ins.x, ins.y)
    elif family == 0x9 and ins.z == 0:
        return "SNE V%X, V%X" % (ins.x, ins.y)
    elif family == 0xA:
        return "LD I, 0x%03X" % ins.nnn
    elif family == 0xB:
        return "JP V0, 0x%03X" % ins.nnn
    elif family == 0xC:
        return "RND V%X, 0x%02X" % (ins.x, ins.kk)
    elif family == 0xD:
        return "DRW V%X, V%X, %d" % (ins.x, ins.y, ins.z)
    elif family == 0xE and ins.kk == 0x9E:
        return "SKP V%X" % ins.x
    elif family == 0xE and ins.kk == 0xA1:
        return "SKNP V%X" % ins.x
    elif family == 0xF and ins.kk in F_GROUP_MNEMONICS:
        return F_GROUP_MNEMONICS[ins.kk] % ins.x
        
    return "DW 0x%04X" % word
    
def disassemble_block(memory, address, count):
    """ Disassemble count instructions starting at address, returns a list of (address, word, mnemonic). """
    listing = []
    for offset in range(count):
        location = address + (offset * 2)
        word = memory.mem_read_word(location)
        listing.append((location, word, disassemble(word)))
    return listing
