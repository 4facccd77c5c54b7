"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing and the navigation keys the viewer binds.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS = {
    b"\x07": "CTRL_G",
    b"\x0e": "CTRL_N",
    b"\x10": "CTRL_P",
    b"\x15": "CTRL_U",
    b"\x04": "CTRL_D",
    b"\x02": "CTRL_B",
    b"\x06": "CTRL_F",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER_CR",
    b"\n": "ENTER_LF",
}

_CSI_FINAL_KEYS = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
    b"Z": "SHIFT_TAB",
}

_CSI_TILDE_KEYS = {
    b"1": "HOME",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, first: bytes) -> str:
    """Complete a multi-byte UTF-8 character whose lead byte is ``first``."""
    lead = first[0]
    if lead >= 0xF0:
        needed = 3
    elif lead >= 0xE0:
        needed = 2
    elif lead >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = first
    for _ in range(needed):
        more = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if more is None:
            break
        data += more
    return data.decode("utf-8", errors="replace")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token, returning ``""`` when ``timeout_ms`` elapses first."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""

        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        return _read_utf8_tail(fd, ch)

    # Escape / arrow key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq not in {b"[", b"O"}:
        _PENDING_BYTES.append(seq)
        return "ESC"
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    final = _CSI_FINAL_KEYS.get(seq)
    if final is not None:
        return final
    tilde = _CSI_TILDE_KEYS.get(seq)
    if tilde is not None:
        closing = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if closing == b"~":
            return tilde
    return "ESC"
