"""Payload classification for embedded icon images."""

PNG_SIGNATURE = b'\x89PNG'

PNG = 'png'
DIB = 'dib'


def is_png(payload):
    return bytes(payload[:4]) == PNG_SIGNATURE


def sniff_payload(payload):
    """Return 'png' if the payload starts with the PNG magic, else 'dib'."""
    return PNG if is_png(payload) else DIB
