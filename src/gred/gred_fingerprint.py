"""
Line fingerprints.

A fingerprint is the CRC-32 of a line's bytes (without its newline), packed
big-endian and base85 encoded into a fixed 5 character tag.  The base85
alphabet contains no tab, colon or newline, so a tag can never be confused
with the field separators of the match output format.
"""

import base64
import struct
import zlib

from gred.gred_exceptions import MalformedFingerprintError


FINGERPRINT_WIDTH = 5

_ALPHABET = frozenset(
    b'0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz!#$%&()*+-;<=>?@^_`{|}~'
)


def checksum(content: bytes) -> int:
    """Return the CRC-32 of a line's content."""
    return zlib.crc32(content) & 0xffffffff


def encode_checksum(value: int) -> str:
    """
    Encode a 32-bit checksum as a fingerprint tag.

    Args:
        value: Checksum in the range 0 to 2**32 - 1

    Returns:
        Fixed width fingerprint tag
    """
    return base64.b85encode(struct.pack('>I', value)).decode('ascii')


def encode(content: bytes) -> str:
    """Return the fingerprint tag of a line's content."""
    return encode_checksum(checksum(content))


def decode(tag: str | bytes) -> int:
    """
    Decode a fingerprint tag back into its checksum.

    Args:
        tag: Fingerprint tag, as text or bytes

    Returns:
        The 32-bit checksum the tag encodes

    Raises:
        MalformedFingerprintError: If the tag has the wrong length, an invalid
            character, or encodes a value wider than 32 bits
    """
    raw = tag.encode('utf-8') if isinstance(tag, str) else bytes(tag)
    if len(raw) != FINGERPRINT_WIDTH:
        raise MalformedFingerprintError(
            f"Fingerprint must be {FINGERPRINT_WIDTH} characters: {tag!r}",
            {'tag': tag, 'reason': 'length'}
        )

    if not _ALPHABET.issuperset(raw):
        raise MalformedFingerprintError(
            f"Invalid fingerprint character: {tag!r}",
            {'tag': tag, 'reason': 'alphabet'}
        )

    try:
        decoded = base64.b85decode(raw)

    except ValueError as e:
        # b85decode reports values wider than 32 bits as overflow
        raise MalformedFingerprintError(
            f"Fingerprint out of range: {tag!r}",
            {'tag': tag, 'reason': 'overflow'}
        ) from e

    return struct.unpack('>I', decoded)[0]


def matches(content: bytes, value: int) -> bool:
    """Return True if a line's content still carries the given checksum."""
    return checksum(content) == value
