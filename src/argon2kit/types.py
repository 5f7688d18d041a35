# third-party imports
from argon2.low_level import Type

# built-in imports
from enum import IntEnum
from typing import NamedTuple

# local imports
from .errors import InvalidConfiguration, InvalidVariant


class Variant(IntEnum):
    """Supported argon2 variants."""

    I = 1
    """Data-independent ``argon2i``."""
    ID = 2
    """Hybrid ``argon2id``."""

    @property
    def tag(self) -> str:
        """The name used in settings strings and encoded hashes."""
        return f"argon2{self.name.lower()}"

    @property
    def type(self) -> Type:
        """The matching argon2-cffi type."""
        return Type[self.name]

    @classmethod
    def from_tag(cls, tag: str) -> "Variant":
        """Look up a variant by its textual tag.

        Args:
            tag (str): ``argon2i`` or ``argon2id``.

        Raises:
            InvalidVariant: If the tag names any other variant (``argon2d``
                included).

        Returns:
            Variant: The variant.
        """
        for variant in cls:
            if variant.tag == tag:
                return variant
        raise InvalidVariant(tag)


FIELD_BITS: dict[str, int] = {
    "salt_length": 32,
    "key_length": 32,
    "memory_cost": 32,
    "iterations": 32,
    "parallelism": 8,
}
"""Width in bits of each numeric Configuration field."""


def _fits(value: object, bits: int) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 < value < 1 << bits
    )


class Configuration(NamedTuple):
    """Parameters used to derive argon2 keys."""

    variant: Variant | None
    salt_length: int
    """(s) Byte length of the salt."""
    key_length: int
    """(k) Byte length of the derived key."""
    memory_cost: int
    """(m) Memory to use in kibibytes."""
    iterations: int
    """(t) Number of passes over memory."""
    parallelism: int
    """(p) Degree of parallelism; number of lanes."""

    def invalid_fields(self) -> tuple[str, ...]:
        """Names of all fields that are unset, zero, negative or too wide.

        Numeric fields must be integers in 1..2**bits-1, with the widths given
        in FIELD_BITS.
        """
        return tuple(
            name
            for name, value in self._asdict().items()
            if not (value if name == "variant" else _fits(value, FIELD_BITS[name]))
        )

    def validate(self) -> "Configuration":
        """Make sure the configuration may be used to derive keys.

        Raises:
            InvalidConfiguration: If any field is unset, zero, negative or
                wider than its FIELD_BITS width.

        Returns:
            Configuration: The configuration itself.
        """
        if fields := self.invalid_fields():
            raise InvalidConfiguration(fields)
        return self

    def to_settings(self) -> str:
        """Render the configuration as a settings string.

        Returns:
            str: E.g. ``f=argon2id,s=16,k=32,m=65536,t=3,p=4``.
        """
        variant = self.variant.tag if isinstance(self.variant, Variant) else ""
        return (
            f"f={variant},s={self.salt_length},k={self.key_length},"
            f"m={self.memory_cost},t={self.iterations},p={self.parallelism}"
        )


class HashRecord(NamedTuple):
    """The fields of an encoded argon2 hash."""

    variant: Variant
    version: int
    memory_cost: int
    iterations: int
    parallelism: int
    salt: bytes
    key: bytes
