"""Decoding of XML-- documents supplied as bytes.

Inputs are bytes and an optional transport-supplied encoding label.
Outputs are a decoded Unicode string and the chosen encoding name.
"""

from __future__ import annotations

import codecs


def normalize_encoding_label(label: str | bytes | None) -> str | None:
    if not label:
        return None

    if isinstance(label, bytes):
        label = label.decode("ascii", "ignore")

    s = str(label).strip().lower()
    if not s:
        return None

    try:
        return codecs.lookup(s).name
    except LookupError:
        return None


def _sniff_bom(data: bytes) -> tuple[str | None, int]:
    if len(data) >= 3 and data[0:3] == b"\xef\xbb\xbf":
        return "utf-8", 3
    if len(data) >= 2 and data[0:2] == b"\xff\xfe":
        return "utf-16-le", 2
    if len(data) >= 2 and data[0:2] == b"\xfe\xff":
        return "utf-16-be", 2
    return None, 0


def sniff_encoding(data: bytes, transport_encoding: str | None = None) -> tuple[str, int]:
    """Pick an encoding: BOM first, then the transport label, then UTF-8.

    Returns (encoding_name, bom_length).
    """
    enc, bom_len = _sniff_bom(data)
    if enc is not None:
        return enc, bom_len

    transport = normalize_encoding_label(transport_encoding)
    if transport is not None:
        return transport, 0

    return "utf-8", 0


def decode_document(data: bytes, transport_encoding: str | None = None) -> tuple[str, str]:
    """Decode an XML-- byte stream.

    Returns (text, encoding_name). Undecodable bytes become U+FFFD.
    """
    enc, bom_len = sniff_encoding(data, transport_encoding=transport_encoding)
    payload = data[bom_len:] if bom_len else data
    return payload.decode(enc, "replace"), enc
