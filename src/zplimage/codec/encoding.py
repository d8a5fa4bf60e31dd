"""Base64 text encoding for ^GFA payloads."""

import base64
import binascii

from zplimage.codec.errors import GraphicFieldError


def encode(data: bytes) -> str:
    """Encode bytes as standard, padded, unwrapped base64 text."""
    return base64.b64encode(data).decode("ascii")


def decode(text: str) -> bytes:
    """Decode base64 text, rejecting characters outside the alphabet.

    Raises:
        GraphicFieldError: If ``text`` is not valid base64.
    """
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise GraphicFieldError(f"Invalid base64 payload: {e}") from e
