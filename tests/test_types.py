import unittest

from argon2.low_level import Type

from argon2kit.errors import InvalidConfiguration, InvalidVariant
from argon2kit.str import to_unsigned
from argon2kit.types import Configuration, Variant


class VariantTests(unittest.TestCase):
    def test_tags(self):
        self.assertEqual(Variant.I.tag, "argon2i")
        self.assertEqual(Variant.ID.tag, "argon2id")
        self.assertIs(Variant.from_tag("argon2i"), Variant.I)
        self.assertIs(Variant.from_tag("argon2id"), Variant.ID)

    def test_types(self):
        self.assertIs(Variant.I.type, Type.I)
        self.assertIs(Variant.ID.type, Type.ID)

    def test_unknown_tag(self):
        for tag in ("argon2d", "argon2", "ARGON2ID", "", "scrypt"):
            with self.subTest(tag=tag):
                with self.assertRaises(InvalidVariant) as ctx:
                    Variant.from_tag(tag)
                self.assertEqual(ctx.exception.variant, tag)


class ConfigurationTests(unittest.TestCase):
    def test_valid(self):
        config = Configuration(Variant.ID, 16, 32, 65536, 3, 2)
        self.assertEqual(config.invalid_fields(), ())
        self.assertIs(config.validate(), config)

    def test_invalid_fields(self):
        config = Configuration(None, 16, 0, 65536, 0, 2)
        self.assertEqual(
            config.invalid_fields(), ("variant", "key_length", "iterations")
        )

        with self.assertRaises(InvalidConfiguration) as ctx:
            config.validate()
        self.assertEqual(ctx.exception.fields, ("variant", "key_length", "iterations"))

    def test_all_zero(self):
        config = Configuration(None, 0, 0, 0, 0, 0)
        self.assertEqual(config.invalid_fields(), Configuration._fields)

    def test_out_of_range(self):
        """Numeric fields must be positive and fit their uint32 or uint8 width."""

        valid = Configuration(Variant.ID, 16, 32, 65536, 3, 2)
        cases = [
            ("salt_length", -16),
            ("key_length", -1),
            ("memory_cost", 2**32),
            ("iterations", 2**32 + 3),
            ("parallelism", 256),
            ("parallelism", -2),
            ("memory_cost", "65536"),
            ("iterations", True),
        ]
        for field, value in cases:
            with self.subTest(field=field, value=value):
                config = valid._replace(**{field: value})
                self.assertEqual(config.invalid_fields(), (field,))
                with self.assertRaises(InvalidConfiguration):
                    config.validate()

    def test_widest_values(self):
        widest = 2**32 - 1
        config = Configuration(Variant.I, widest, widest, widest, widest, 255)
        self.assertEqual(config.invalid_fields(), ())

    def test_immutable(self):
        config = Configuration(Variant.ID, 16, 32, 65536, 3, 2)
        with self.assertRaises(AttributeError):
            config.memory_cost = 1

    def test_to_settings(self):
        config = Configuration(Variant.I, 16, 32, 65536, 3, 2)
        self.assertEqual(config.to_settings(), "f=argon2i,s=16,k=32,m=65536,t=3,p=2")


class ToUnsignedTests(unittest.TestCase):
    def test_values(self):
        self.assertEqual(to_unsigned("0"), 0)
        self.assertEqual(to_unsigned("4294967295"), 4294967295)
        self.assertEqual(to_unsigned("255", bits=8), 255)

    def test_invalid(self):
        for string in ("", "-1", "+1", " 1", "1 ", "1.0", "0x1", "١"):
            with self.subTest(string=string):
                with self.assertRaises(ValueError):
                    to_unsigned(string)

    def test_overflow(self):
        with self.assertRaises(OverflowError):
            to_unsigned("4294967296")
        with self.assertRaises(OverflowError):
            to_unsigned("256", bits=8)


if __name__ == "__main__":
    unittest.main()
