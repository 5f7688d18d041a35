"""Parse comma-delimited ``key=value`` settings into a Configuration.

Format::

    f=<argon2i|argon2id>,s=<salt length>,k=<key length>,m=<memory>,t=<iterations>,p=<parallelism>

Keys may appear in any order and all of them are required; there are no
defaults. ``m`` may be an arithmetic expression (see ``argon2kit.expression``).
"""

# built-in imports
from typing import Any, Callable

# local imports
from .errors import InvalidConfiguration, UnknownSetting
from .expression import evaluate
from .str import to_unsigned
from .types import Configuration, Variant

SETTINGS: dict[str, tuple[str, Callable[[str], Any]]] = {
    "f": ("variant", Variant.from_tag),
    "s": ("salt_length", to_unsigned),
    "k": ("key_length", to_unsigned),
    "m": ("memory_cost", evaluate),
    "t": ("iterations", to_unsigned),
    "p": ("parallelism", lambda value: to_unsigned(value, bits=8)),
}
"""Setting key -> (Configuration field, value parser)."""


def parse(settings: str) -> Configuration:
    """Parse a settings string.

    Args:
        settings (str): E.g. ``f=argon2id,s=16,k=32,m=64*1024,t=3,p=2``.

    Raises:
        UnknownSetting: If a key is not one of ``f, s, k, m, t, p``.
        InvalidConfiguration: If any key is missing.
        InvalidVariant: If ``f`` is not ``argon2i`` or ``argon2id``.
        UnsupportedExpression: If ``m`` is not a valid memory expression.
        ValueError: If a numeric value is not a plain unsigned decimal.
        OverflowError: If a numeric value exceeds its field's width.

    Returns:
        Configuration: The parsed configuration.
    """
    fields: dict[str, Any] = {}

    for setting in settings.split(","):
        key, sep, value = setting.partition("=")

        if not sep or key not in SETTINGS:
            raise UnknownSetting(key)

        field, parser = SETTINGS[key]
        fields[field] = parser(value)

    if missing := tuple(
        field for field, _ in SETTINGS.values() if field not in fields
    ):
        raise InvalidConfiguration(missing)

    return Configuration(**fields)
