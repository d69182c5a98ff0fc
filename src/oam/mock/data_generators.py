"""
Data generators for mock responses.

Generates fake data matching OpenAPI response schemas. Output is keyed by a
path key: before every primitive decision Faker is reseeded from a hash of
the current key, so identical (schema, key) pairs produce identical values
across calls and restarts, and sibling fields never perturb each other.
"""

from __future__ import annotations

import logging
import math
import threading
from datetime import UTC, datetime
from typing import Any

from faker import Faker

from oam.core.schema import (
    ArraySchema,
    BooleanSchema,
    NumberSchema,
    ObjectSchema,
    SchemaNode,
    StringSchema,
    UnconstrainedSchema,
    parse_schema,
)
from oam.mock.seed import DEFAULT_SEED, derive_seed

logger = logging.getLogger(__name__)

# Percent chances, passed straight to Faker.boolean()
OPTIONAL_FIELD_PROBABILITY = 70
BOOLEAN_TRUE_PROBABILITY = 50

DEFAULT_MIN_LENGTH = 1
DEFAULT_MAX_LENGTH = 50
MAX_STRING_LENGTH = 100

DEFAULT_MINIMUM = 0
DEFAULT_MAXIMUM = 1000

DEFAULT_MIN_ITEMS = 1
DEFAULT_MAX_ITEMS = 5
MAX_ARRAY_ITEMS = 10

FILLER_TOKEN = "lorem"

# Dates are drawn from a fixed window so output does not drift with the clock
DATE_WINDOW_START = datetime(2020, 1, 1, tzinfo=UTC)
DATE_WINDOW_END = datetime(2025, 12, 31, 23, 59, 59, tzinfo=UTC)


class SeedSource:
    """Seeded randomness for a single generation call.

    Wraps the generator's Faker instance and is passed explicitly through the
    recursion. ``reseed`` must be called before each primitive decision.
    """

    def __init__(self, faker: Faker, base_seed: int) -> None:
        self._faker = faker
        self._base_seed = base_seed

    def reseed(self, key: str) -> Faker:
        """Reseed from ``key`` and return the Faker instance to draw from."""
        self._faker.seed_instance(derive_seed(self._base_seed, key))
        return self._faker


class MockDataGenerator:
    """Generate deterministic mock values from schema nodes.

    Args:
        seed: Base seed. Changing it yields an entirely different, but still
              deterministic, dataset.
        locale: Faker locale for formatted values (emails, URLs).
    """

    def __init__(self, seed: int = DEFAULT_SEED, locale: str = "en_US") -> None:
        self.seed = seed
        self._faker = Faker(locale)
        # Held for one full generate() call; reseeds must not interleave
        self._lock = threading.Lock()

    def generate(self, schema: SchemaNode | dict[str, Any] | None, key: str) -> Any:
        """Generate a value for a schema at a generation site.

        Args:
            schema: Parsed SchemaNode, or a raw (dereferenced) schema mapping.
            key: Path key, e.g. ``"GET /users/{id}"``.

        Returns:
            The generated value, or None if the schema is absent or malformed.
        """
        node = parse_schema(schema) if isinstance(schema, dict) else schema
        if node is None:
            return None
        with self._lock:
            return self._generate(node, key, SeedSource(self._faker, self.seed))

    def _generate(self, node: SchemaNode | None, key: str, source: SeedSource) -> Any:
        if node is None:
            return None
        if isinstance(node, StringSchema):
            return self._generate_string(node, source.reseed(key))
        if isinstance(node, NumberSchema):
            return self._generate_number(node, source.reseed(key))
        if isinstance(node, BooleanSchema):
            return source.reseed(key).boolean(chance_of_getting_true=BOOLEAN_TRUE_PROBABILITY)
        if isinstance(node, ObjectSchema):
            return self._generate_object(node, key, source)
        if isinstance(node, ArraySchema):
            return self._generate_array(node, key, source)
        if isinstance(node, UnconstrainedSchema):
            return self._generate_unconstrained(node)
        raise TypeError(f"Unsupported schema node: {type(node).__name__}")

    def _generate_string(self, node: StringSchema, faker: Faker) -> Any:
        """Generate a string honouring format, then enum, then length bounds."""
        if node.format == "email":
            return faker.email()
        if node.format == "uuid":
            return faker.uuid4()
        if node.format == "uri":
            return faker.url()
        if node.format == "date-time":
            return _iso_timestamp(_draw_datetime(faker))
        if node.format == "date":
            return _draw_datetime(faker).date().isoformat()

        if node.enum:
            return faker.random_element(node.enum)

        max_len = node.max_length if node.max_length is not None else DEFAULT_MAX_LENGTH
        max_len = max(0, min(max_len, MAX_STRING_LENGTH))
        min_len = node.min_length if node.min_length is not None else DEFAULT_MIN_LENGTH
        min_len = min(max(min_len, 0), max_len)
        return faker.pystr(min_chars=min_len, max_chars=max_len)

    def _generate_number(self, node: NumberSchema, faker: Faker) -> int | float:
        """Draw from [minimum, maximum]; inverted bounds collapse to the minimum."""
        low = node.minimum if node.minimum is not None else DEFAULT_MINIMUM
        high = node.maximum if node.maximum is not None else DEFAULT_MAXIMUM
        high = max(high, low)

        if node.is_integer:
            int_low = math.ceil(low)
            int_high = max(math.floor(high), int_low)
            return faker.random_int(min=int_low, max=int_high)

        # Clamp to the two-decimal grid inside the bounds; round() guards against
        # float noise such as 0.1 * 100 == 10.000000000000002
        cents_low = math.ceil(round(low * 100, 6))
        cents_high = math.floor(round(high * 100, 6))
        if cents_low > cents_high:
            # No multiple of 0.01 fits between the bounds
            return float(low)
        value = round(faker.random.uniform(low, high), 2)
        return min(max(value, cents_low / 100), cents_high / 100)

    def _generate_object(self, node: ObjectSchema, key: str, source: SeedSource) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for name, child in node.properties.items():
            child_key = f"{key}.{name}"
            if not node.is_required(name):
                faker = source.reseed(f"{child_key}.probability")
                # Omitted optional fields are left out entirely, never set to null
                if not faker.boolean(chance_of_getting_true=OPTIONAL_FIELD_PROBABILITY):
                    continue
            result[name] = self._generate(child, child_key, source)
        return result

    def _generate_array(self, node: ArraySchema, key: str, source: SeedSource) -> list[Any]:
        max_items = node.max_items if node.max_items is not None else DEFAULT_MAX_ITEMS
        max_items = max(0, min(max_items, MAX_ARRAY_ITEMS))
        min_items = node.min_items if node.min_items is not None else DEFAULT_MIN_ITEMS
        min_items = min(max(min_items, 0), max_items)

        count = source.reseed(f"{key}.length").random_int(min=min_items, max=max_items)
        if node.items is None:
            return []
        return [self._generate(node.items, f"{key}[{index}]", source) for index in range(count)]

    def _generate_unconstrained(self, node: UnconstrainedSchema) -> Any:
        """Return example, then default, then the filler token. Never reseeds."""
        if node.has_example:
            return node.example
        if node.has_default:
            return node.default
        return FILLER_TOKEN


def _draw_datetime(faker: Faker) -> datetime:
    return faker.date_time_between_dates(
        datetime_start=DATE_WINDOW_START,
        datetime_end=DATE_WINDOW_END,
        tzinfo=UTC,
    )


def _iso_timestamp(value: datetime) -> str:
    """Format as ``2024-05-01T12:34:56.789Z``."""
    return value.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def generate_mock_data(
    schema: SchemaNode | dict[str, Any] | None,
    key: str,
    *,
    seed: int = DEFAULT_SEED,
) -> Any:
    """Convenience wrapper: generate one value with a fresh generator."""
    return MockDataGenerator(seed=seed).generate(schema, key)
