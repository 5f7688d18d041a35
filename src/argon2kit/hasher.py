# third-party imports
from argon2.low_level import hash_secret_raw
from cryptography.hazmat.primitives.constant_time import bytes_eq
from loguru import logger

# built-in imports
from os import urandom
from typing import Any

# local imports
from . import codec, settings
from .errors import InvalidVariant
from .types import Configuration, Variant


def derive_key(
    password: str | bytes,
    salt: bytes,
    variant: Variant,
    iterations: int,
    memory_cost: int,
    parallelism: int,
    key_length: int,
) -> bytes:
    """Derive a raw argon2 key.

    Args:
        password (str | bytes): The password. Strings are encoded as UTF-8.
        salt (bytes): The salt.
        variant (Variant): The argon2 variant.
        iterations (int): Number of passes over memory.
        memory_cost (int): Memory in kibibytes.
        parallelism (int): Number of lanes.
        key_length (int): Byte length of the key.

    Raises:
        InvalidVariant: If variant is not a supported Variant.
        argon2.exceptions.HashingError: If argon2 rejects the parameters.

    Returns:
        bytes: The derived key.
    """
    if not isinstance(variant, Variant):
        raise InvalidVariant(variant)

    return hash_secret_raw(
        secret=password.encode("utf-8") if isinstance(password, str) else password,
        salt=salt,
        time_cost=iterations,
        memory_cost=memory_cost,
        parallelism=parallelism,
        hash_len=key_length,
        type=variant.type,
        version=codec.VERSION,
    )


def constant_time_equal(left: bytes, right: bytes) -> bool:
    """Compare two byte strings without leaking where they differ.

    Lengths are compared first; contents are only compared if they match.
    """
    if not bytes_eq(len(left).to_bytes(4, "big"), len(right).to_bytes(4, "big")):
        return False
    return bytes_eq(left, right)


def matches(password: str | bytes, encoded_hash: str) -> bool:
    """Check a password against an encoded argon2 hash.

    The key is derived with the parameters, salt and key length stored in the
    hash, so no configuration is needed.

    Args:
        password (str | bytes): The plain-text password.
        encoded_hash (str): The hash, as created by Hasher.create().

    Raises:
        InvalidHash: If the hash is incorrectly formatted.
        InvalidVariant: If the hash uses an unsupported variant.
        IncompatibleVersion: If the hash was made by another argon2 version.
        binascii.Error: If salt or key are corrupt.

    Returns:
        bool: Whether the password matches.
    """
    record = codec.decode(encoded_hash)

    key = derive_key(
        password,
        salt=record.salt,
        variant=record.variant,
        iterations=record.iterations,
        memory_cost=record.memory_cost,
        parallelism=record.parallelism,
        key_length=len(record.key),
    )

    matched = constant_time_equal(key, record.key)
    logger.debug(f"Verified {record.variant.tag} hash: {matched}")
    return matched


class Hasher:

    # official argon2 parameter recommendations from rfc9106
    RFC9106: dict[str, Configuration] = {
        "high_memory": Configuration(
            variant=Variant.ID,
            salt_length=16,
            key_length=32,
            memory_cost=2**21,
            iterations=1,
            parallelism=4,
        ),
        "low_memory": Configuration(
            variant=Variant.ID,
            salt_length=16,
            key_length=32,
            memory_cost=2**16,
            iterations=3,
            parallelism=4,
        ),
    }

    def __init__(self, configuration: Configuration = RFC9106["low_memory"]) -> None:
        """Create and verify argon2 password hashes.

        The configuration is not checked here; create() refuses to derive keys
        from incomplete configurations.

        Args:
            configuration (Configuration, optional): Parameters for hashing.
                Defaults to RFC9106["low_memory"].
        """
        self._configuration = configuration

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @configuration.setter
    def configuration(self, _: Any) -> None:
        raise AttributeError(
            "Configuration is read-only. Create a new Hasher instead."
        )

    @classmethod
    def from_string(cls, settings_string: str) -> "Hasher":
        """Create a Hasher from a settings string.

        Args:
            settings_string (str): E.g. ``f=argon2id,s=16,k=32,m=64*1024,t=3,p=2``.
                See argon2kit.settings for the format.

        Returns:
            Hasher: The hasher.
        """
        return cls(settings.parse(settings_string))

    def create(self, password: str | bytes, salt: bytes | None = None) -> str:
        """Create an argon2 hash of a plain-text password.

        Args:
            password (str | bytes): The password to hash.
            salt (bytes | None, optional): The salt to use. If None, will generate
                a random salt of the configured length. Defaults to None.

        Raises:
            InvalidConfiguration: If the configuration has unset or zero fields.
            InvalidVariant: If the configured variant is not supported.
            OSError: If the system random source fails.

        Returns:
            str: The encoded hash.
        """
        config = self.configuration.validate()

        if not isinstance(config.variant, Variant):
            raise InvalidVariant(config.variant)

        if salt is None:
            salt = self.generate_salt(config.salt_length)

        key = derive_key(
            password,
            salt=salt,
            variant=config.variant,
            iterations=config.iterations,
            memory_cost=config.memory_cost,
            parallelism=config.parallelism,
            key_length=config.key_length,
        )

        logger.debug(
            f"Created {config.variant.tag} hash with m={config.memory_cost},"
            f" t={config.iterations}, p={config.parallelism}"
        )

        return codec.encode(
            config.variant,
            codec.VERSION,
            config.memory_cost,
            config.iterations,
            config.parallelism,
            salt,
            key,
        )

    matches = staticmethod(matches)

    @classmethod
    def generate_salt(cls, n: int = 16) -> bytes:
        """Generates a random salt of size n.

        Args:
            n (int, optional): The size of the salt in bytes. Defaults to 16.

        Returns:
            bytes: The salt.
        """
        return urandom(n)
