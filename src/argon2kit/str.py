from re import fullmatch


def to_unsigned(string: str, bits: int = 32) -> int:
    """Converts a base-10 string to an unsigned integer of a fixed width.

    Args:
        string (str): The string to convert. Only ASCII digits are accepted.
        bits (int, optional): Width of the integer in bits. Defaults to 32.

    Raises:
        ValueError: If the string is not a plain non-negative decimal.
        OverflowError: If the value does not fit into the given width.

    Returns:
        int: The integer value.
    """
    if fullmatch(r"[0-9]+", string) is None:
        raise ValueError(f"invalid unsigned integer: {string!r}")

    value = int(string)

    if value >> bits:
        raise OverflowError(f"value out of range for uint{bits}: {string}")

    return value
