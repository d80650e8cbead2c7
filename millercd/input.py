"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, control keys, and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x13": "CTRL_S",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
    b"H": "HOME",
    b"F": "END",
}

# ESC [ <n> ~ sequences.
_CSI_TILDE_KEYS: dict[bytes, str] = {
    b"1": "HOME",
    b"2": "INSERT",
    b"3": "DELETE",
    b"4": "END",
    b"5": "PAGE_UP",
    b"6": "PAGE_DOWN",
    b"7": "HOME",
    b"8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    if _PENDING_BYTES:
        return _PENDING_BYTES.pop(0)
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _utf8_sequence_length(lead: int) -> int:
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


def _read_utf8_char(fd: int, lead: bytes) -> str:
    data = bytearray(lead)
    for _ in range(_utf8_sequence_length(lead[0]) - 1):
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            break
        data += part
    return bytes(data).decode("utf-8", errors="replace")


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` sequence."""
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    key = _CSI_FINAL_KEYS.get(seq)
    if key is not None:
        return key
    if not seq.isdigit():
        return "ESC"

    digits = [seq]
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return "ESC"
        if part == b"~":
            break
        if part.isdigit() or part == b";":
            digits.append(part)
            if len(digits) > 8:
                return "ESC"
            continue
        # Modified cursor keys such as ESC [ 1 ; 5 A map to the plain key.
        return _CSI_FINAL_KEYS.get(part, "ESC")
    code = b"".join(digits).split(b";")[0]
    return _CSI_TILDE_KEYS.get(code, "ESC")


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` on timeout or end of input."""
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
        if ch[0] >= 0x80:
            return _read_utf8_char(fd, ch)
        return ch.decode("utf-8", errors="replace")

    # Escape / cursor key sequences.
    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # Application cursor mode: ESC O A .. ESC O F.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return "ESC"
        return _CSI_FINAL_KEYS.get(final, "ESC")
    _PENDING_BYTES.append(seq)
    return "ESC"
