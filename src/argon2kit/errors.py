"""Errors raised while configuring, creating and verifying argon2 hashes.

Overflowing integers, malformed base64 and random source failures are not
listed here: they surface as the ``OverflowError``, ``binascii.Error`` and
``OSError`` raised by the underlying primitives.
"""

from typing import Any


class Argon2KitError(ValueError):
    """Base class of all argon2kit errors."""


class InvalidVariant(Argon2KitError):
    def __init__(self, variant: Any = None) -> None:
        """Raised if the argon2 variant is unrecognized or unsupported.

        Args:
            variant (Any, optional): The rejected variant. Defaults to None.
        """
        self.variant = variant
        super().__init__("Unknown or unsupported argon2 form")


class InvalidHash(Argon2KitError):
    def __init__(self, reason: str = "Hash is not in the correct format") -> None:
        """Raised if a hash is incorrectly formatted or missing information."""
        super().__init__(reason)


class IncompatibleVersion(Argon2KitError):
    def __init__(self, version: int) -> None:
        """Raised if a hash was created by a different version of argon2.

        Args:
            version (int): The version found in the hash.
        """
        self.version = version
        super().__init__(f"Incompatible version of argon2: {version}")


class InvalidConfiguration(Argon2KitError):
    def __init__(self, fields: tuple[str, ...]) -> None:
        """Raised if a configuration contains unset or zero parameters.

        Args:
            fields (tuple[str, ...]): Names of the offending fields.
        """
        self.fields = tuple(fields)
        super().__init__(
            "Argon2 configuration contains invalid values: " + ", ".join(self.fields)
        )


class UnknownSetting(Argon2KitError):
    def __init__(self, setting: str) -> None:
        """Raised if a settings string contains an unknown key.

        Args:
            setting (str): The unknown key.
        """
        self.setting = setting
        super().__init__(f"Unknown argon2 setting: {setting}")


class UnsupportedExpression(Argon2KitError):
    def __init__(self, kind: Any) -> None:
        """Raised if a memory expression contains a non-integer literal or an
        unsupported token.

        Args:
            kind (Any): The offending token, literal or operator.
        """
        self.kind = kind
        super().__init__(f"`{kind}` unsupported in argon2 memory expression")
