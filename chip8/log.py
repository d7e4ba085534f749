from chip8 import config


def log(*args):
    if config.logs_on:
        print(*args)


def set_logs(on):
    config.logs_on = bool(on)
    log("logsOn:", config.logs_on)


def toggle_logs():
    set_logs(not config.logs_on)


# clear and show all the information about memory, registers and stack
def dump_state(state):
    lines = [
        f"PC: {state.pc:#05x}",
        f"I: {state.I:#05x}",
        f"SP: {state.sp:#04x}",
        f"DT: {state.delay:#04x}",
        f"ST: {state.sound:#04x}",
        "Registers: " + " ".join(f"V{i:X}={v:02X}" for i, v in enumerate(state.V)),
        "Stack: " + " ".join(f"{int(a):03X}" for a in state.stack[:state.sp]),
        "Keys: " + "".join("1" if k else "0" for k in state.keys),
    ]
    return "\n".join(lines)
