"""Faults raised while loading or running a CHIP-8 program."""


class Chip8Error(Exception):
    pass


class RomError(Chip8Error):
    pass


class CpuFault(Chip8Error):
    """An instruction could not be decoded or executed.

    Carries the opcode and the address it was fetched from so a bad ROM
    can be diagnosed. ``pc`` is None until the driver fills it in.
    """

    reason = "CPU fault"

    def __init__(self, opcode, pc=None):
        self.opcode = opcode
        self.pc = pc
        super().__init__(opcode, pc)

    def __str__(self):
        where = "???" if self.pc is None else f"{self.pc:03X}"
        if self.opcode is None:
            return f"{self.reason}: fetch at {where}"
        return f"{self.reason}: opcode {self.opcode:04X} at {where}"


class UnknownOpcode(CpuFault):
    reason = "Unknown opcode"


class StackOverflow(CpuFault):
    reason = "Stack overflow on CALL"


class StackUnderflow(CpuFault):
    reason = "Stack underflow on RET"


class OutOfBoundsAccess(CpuFault):
    reason = "Memory access out of bounds"

    def __init__(self, address, opcode, pc=None):
        self.address = address
        super().__init__(opcode, pc)

    def __str__(self):
        return f"{super().__str__()} (address {self.address:#06x})"
