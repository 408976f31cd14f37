"""Faker-based scalar value generator."""

import datetime
import decimal
import enum
import uuid
from typing import Any

from faker import Faker
from sqlalchemy import BigInteger, SmallInteger

from autopopulate.exceptions import ValueGenerationError

INT_MAX = 2_147_483_647
SMALLINT_MAX = 32_767
BIGINT_MAX = 9_223_372_036_854_775_807
MIN_TEXT_CHARS = 5  # Faker.text() refuses anything shorter
REALISTIC_ATTEMPTS = 10
MAX_UNIQUE_ATTEMPTS = 1000


class FakerGenerator:
    """Generate realistic scalar values using the Faker library."""

    # Member name → Faker method mapping (string members only)
    NAME_MAPPINGS = {
        "email": lambda fake: fake.email(),
        "first_name": lambda fake: fake.first_name(),
        "last_name": lambda fake: fake.last_name(),
        "name": lambda fake: fake.name(),
        "full_name": lambda fake: fake.name(),
        "username": lambda fake: fake.user_name(),
        "company": lambda fake: fake.company(),
        "phone": lambda fake: fake.phone_number(),
        "phone_number": lambda fake: fake.phone_number(),
        "address": lambda fake: fake.address(),
        "street": lambda fake: fake.street_address(),
        "city": lambda fake: fake.city(),
        "state": lambda fake: fake.state(),
        "country": lambda fake: fake.country(),
        "zip": lambda fake: fake.zipcode(),
        "zipcode": lambda fake: fake.zipcode(),
        "postcode": lambda fake: fake.postcode(),
        "url": lambda fake: fake.url(),
        "title": lambda fake: fake.sentence(nb_words=4),
        "description": lambda fake: fake.text(max_nb_chars=200),
        "bio": lambda fake: fake.text(max_nb_chars=300),
    }

    # Python type → Faker fallback
    TYPE_FALLBACKS = {
        str: lambda fake: fake.text(max_nb_chars=50),
        int: lambda fake: fake.random_int(min=1, max=INT_MAX),
        float: lambda fake: fake.pyfloat(min_value=0, max_value=10000),
        decimal.Decimal: lambda fake: fake.pydecimal(
            left_digits=6, right_digits=2, positive=True
        ),
        bool: lambda fake: fake.boolean(),
        datetime.datetime: lambda fake: fake.date_time_this_year(),
        datetime.date: lambda fake: fake.date_this_year(),
        datetime.time: lambda fake: fake.time_object(),
        datetime.timedelta: lambda fake: datetime.timedelta(
            seconds=fake.random_int(min=0, max=86_400)
        ),
        uuid.UUID: lambda fake: fake.uuid4(cast_to=None),
        bytes: lambda fake: fake.binary(length=16),
        dict: lambda fake: fake.pydict(nb_elements=3, value_types=(str, int)),
        list: lambda fake: fake.pylist(nb_elements=3, value_types=(str, int)),
    }

    def __init__(self, faker: Faker | None = None):
        self.fake = faker or Faker()
        # Length-limited unique strings, tracked after truncation
        self._issued: dict[tuple[str, int], set[str]] = {}

    def supports(self, python_type: Any) -> bool:
        return python_type in self.TYPE_FALLBACKS or (
            isinstance(python_type, type) and issubclass(python_type, enum.Enum)
        )

    def generate(
        self,
        member_name: str,
        python_type: Any,
        length: int | None = None,
        unique: bool = False,
        column_type: Any = None,
    ) -> Any:
        """
        Generate a value for a member based on its name and type.

        Args:
            member_name: Attribute name, matched against NAME_MAPPINGS
            python_type: Python type of the value
            length: Maximum length for strings and bytes
            unique: Draw from Faker's unique proxy
            column_type: SQLAlchemy column type, used to narrow ranges

        Raises:
            ValueGenerationError: If no generator covers python_type
        """
        fake = self.fake.unique if unique else self.fake

        # sa.Enum columns, with or without an enum class
        enums = getattr(column_type, "enums", None)
        if enums:
            enum_class = getattr(column_type, "enum_class", None)
            if enum_class is not None:
                return self.fake.random_element(list(enum_class))
            return self.fake.random_element(list(enums))

        if isinstance(python_type, type) and issubclass(python_type, enum.Enum):
            return self.fake.random_element(list(python_type))

        if python_type is str:
            if unique and length is not None:
                return self._generate_unique_string(member_name, length)
            return self._generate_string(fake, member_name, length)

        if python_type is int:
            return self._generate_int(fake, column_type)

        if python_type is decimal.Decimal:
            return self._generate_decimal(fake, column_type)

        if python_type is datetime.datetime and getattr(column_type, "timezone", False):
            return fake.date_time_this_year(tzinfo=datetime.timezone.utc)

        if python_type is bytes and length:
            return fake.binary(length=length)

        if python_type in self.TYPE_FALLBACKS:
            return self.TYPE_FALLBACKS[python_type](fake)

        raise ValueGenerationError(python_type, member_name, "no Faker mapping for type")

    def _generate_string(self, fake: Any, member_name: str, length: int | None) -> str:
        if length is not None and length < MIN_TEXT_CHARS:
            return fake.pystr(min_chars=1, max_chars=length)

        if member_name in self.NAME_MAPPINGS:
            value = self.NAME_MAPPINGS[member_name](fake)
        else:
            value = self.TYPE_FALLBACKS[str](fake)

        if length is not None:
            value = value[:length]
        return value

    def _generate_unique_string(self, member_name: str, length: int) -> str:
        """
        Draw a string of at most length characters not issued before.

        Faker's unique proxy only sees the untruncated value, so uniqueness
        is checked here, after truncation. Realistic values are tried first,
        then random strings of the full length.

        Raises:
            ValueGenerationError: If no unused value turns up
        """
        issued = self._issued.setdefault((member_name, length), set())

        for attempt in range(MAX_UNIQUE_ATTEMPTS):
            if attempt < REALISTIC_ATTEMPTS:
                value = self._generate_string(self.fake, member_name, length)
            else:
                value = self.fake.pystr(min_chars=length, max_chars=length)
            if value not in issued:
                issued.add(value)
                return value

        raise ValueGenerationError(
            str, member_name, f"no unused value left within {length} characters"
        )

    def _generate_int(self, fake: Any, column_type: Any) -> int:
        if isinstance(column_type, SmallInteger):
            return fake.random_int(min=1, max=SMALLINT_MAX)
        if isinstance(column_type, BigInteger):
            return fake.random_int(min=1, max=BIGINT_MAX)
        return self.TYPE_FALLBACKS[int](fake)

    def _generate_decimal(self, fake: Any, column_type: Any) -> decimal.Decimal:
        precision = getattr(column_type, "precision", None)
        scale = getattr(column_type, "scale", None)
        if precision is None:
            return self.TYPE_FALLBACKS[decimal.Decimal](fake)
        scale = scale or 0
        left = max(precision - scale, 0)
        return fake.pydecimal(left_digits=left, right_digits=scale, positive=True)
