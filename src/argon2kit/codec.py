"""Encoding and decoding of argon2 hash strings.

Format (as produced by the argon2 reference implementation)::

    $<argon2i|argon2id>$v=<version>$m=<memory>,t=<iterations>,p=<parallelism>$<salt>$<key>

Salt and key are standard base64 without padding.
"""

# third-party imports
from argon2.low_level import ARGON2_VERSION

# built-in imports
from base64 import b64decode as _b64decode, b64encode as _b64encode
from binascii import Error as BinasciiError
from re import fullmatch

# local imports
from .errors import IncompatibleVersion, InvalidHash
from .str import to_unsigned
from .types import HashRecord, Variant

VERSION: int = ARGON2_VERSION
"""Format version produced by the linked argon2 library."""


def b64encode(data: bytes) -> str:
    """Encode bytes as unpadded standard base64."""
    return _b64encode(data).decode("ascii").rstrip("=")


def b64decode(text: str) -> bytes:
    """Decode unpadded standard base64.

    Args:
        text (str): The base64 text. Must not contain padding.

    Raises:
        binascii.Error: If the text is not valid unpadded base64.

    Returns:
        bytes: The decoded bytes.
    """
    if "=" in text:
        raise BinasciiError("Padding is not allowed in unpadded base64")
    return _b64decode(text + "=" * (-len(text) % 4), validate=True)


def encode(
    variant: Variant,
    version: int,
    memory_cost: int,
    iterations: int,
    parallelism: int,
    salt: bytes,
    key: bytes,
) -> str:
    """Encode hash parameters, salt and key into a hash string.

    Args:
        variant (Variant): The argon2 variant.
        version (int): The argon2 version.
        memory_cost (int): Memory in kibibytes.
        iterations (int): Number of passes over memory.
        parallelism (int): Number of lanes.
        salt (bytes): The raw salt.
        key (bytes): The raw derived key.

    Returns:
        str: The hash string.
    """
    return (
        f"${variant.tag}$v={version}"
        f"$m={memory_cost},t={iterations},p={parallelism}"
        f"${b64encode(salt)}${b64encode(key)}"
    )


def decode(encoded_hash: str) -> HashRecord:
    """Decode a hash string into its fields.

    Args:
        encoded_hash (str): The hash string.

    Raises:
        InvalidHash: If the hash does not consist of six ``$``-delimited
            segments or a parameter segment is malformed.
        InvalidVariant: If the variant is not ``argon2i`` or ``argon2id``.
        IncompatibleVersion: If the hash was made by another argon2 version.
        OverflowError: If a parameter exceeds its width.
        binascii.Error: If salt or key are not valid unpadded base64.

    Returns:
        HashRecord: The decoded hash.
    """
    segments = encoded_hash.split("$")
    if len(segments) != 6 or segments[0] or not all(segments[1:]):
        raise InvalidHash()

    _, tag, version_segment, params_segment, salt, key = segments

    variant = Variant.from_tag(tag)

    if (version_match := fullmatch(r"v=([0-9]+)", version_segment)) is None:
        raise InvalidHash(f"Invalid version segment: {version_segment}")
    version = int(version_match[1])
    if version != VERSION:
        raise IncompatibleVersion(version)

    params_match = fullmatch(r"m=([0-9]+),t=([0-9]+),p=([0-9]+)", params_segment)
    if params_match is None:
        raise InvalidHash(f"Invalid parameter segment: {params_segment}")

    return HashRecord(
        variant=variant,
        version=version,
        memory_cost=to_unsigned(params_match[1]),
        iterations=to_unsigned(params_match[2]),
        parallelism=to_unsigned(params_match[3], bits=8),
        salt=b64decode(salt),
        key=b64decode(key),
    )
