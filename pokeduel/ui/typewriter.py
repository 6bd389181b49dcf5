import sys, time, os
from typing import Iterable, Optional, TextIO

__all__ = ["type_out", "replay", "wait_for_continue"]

# Non-zero delays so even fastest speed animates left-to-right
# 1 = fast, 2 = normal, 3 = slow
SPEED_MAP = {1: 0.004, 2: 0.012, 3: 0.02}
LINE_PAUSE = {1: 0.1, 2: 0.25, 3: 0.45}

def _instant() -> bool:
    return bool(os.getenv('PYTEST_CURRENT_TEST') or os.getenv('POKEDUEL_INSTANT_TEXT'))

def type_out(text: str, speed_setting: int = 2, out: Optional[TextIO] = None):
    out = out or sys.stdout
    if _instant():
        out.write(text + "\n")
        return
    delay = SPEED_MAP.get(speed_setting, 0.01)
    for ch in text:
        out.write(ch)
        out.flush()
        time.sleep(delay)
    out.write("\n")

def replay(lines: Iterable[str], speed_setting: int = 2, out: Optional[TextIO] = None):
    """Type already-resolved battle lines back out one at a time."""
    pause = LINE_PAUSE.get(speed_setting, 0.25)
    for line in lines:
        type_out(line, speed_setting, out)
        if not _instant():
            time.sleep(pause)


def wait_for_continue(prompt: str = "Press Enter to continue...", debug: bool = False):
    if os.getenv('PYTEST_CURRENT_TEST'):
        return
    try:
        input(prompt)
    except EOFError:
        if debug:
            print("[skip wait]")
