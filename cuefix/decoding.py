"""Two-tier text decoding: strict UTF-8, then Windows-1252."""

from __future__ import annotations

import codecs
from typing import Callable, Tuple

from .models import DecodedText

UTF8 = "UTF-8"
WINDOWS_1252 = "Windows-1252"

_PASSTHROUGH_ERRORS = "cuefix-cp1252-passthrough"


def _passthrough_undefined(exc: UnicodeError) -> Tuple[str, int]:
    # Python's cp1252 leaves 0x81, 0x8D, 0x8F, 0x90 and 0x9D unmapped; the
    # WHATWG table maps them to the C1 control with the same code point.
    if not isinstance(exc, UnicodeDecodeError):
        raise exc
    undefined = exc.object[exc.start : exc.end]
    return "".join(chr(byte) for byte in undefined), exc.end


codecs.register_error(_PASSTHROUGH_ERRORS, _passthrough_undefined)


def _decode_utf8(data: bytes) -> str:
    return data.decode("utf-8", errors="strict")


def _decode_windows_1252(data: bytes) -> str:
    return data.decode("cp1252", errors=_PASSTHROUGH_ERRORS)


_STRICT_DECODERS: tuple[tuple[str, Callable[[bytes], str]], ...] = (
    (UTF8, _decode_utf8),
)


def decode_with_fallback(data: bytes) -> DecodedText:
    """Decode ``data`` with the first strict decoder that accepts all of it.

    Falls back to Windows-1252, which accepts every byte, so this never
    raises.
    """
    for label, decoder in _STRICT_DECODERS:
        try:
            return DecodedText(text=decoder(data), encoding=label)
        except UnicodeDecodeError:
            continue
    return DecodedText(text=_decode_windows_1252(data), encoding=WINDOWS_1252)


__all__ = ["UTF8", "WINDOWS_1252", "decode_with_fallback"]
