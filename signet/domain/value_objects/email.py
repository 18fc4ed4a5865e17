"""A Value Object representing an email address in the domain.

Emails are the login identity, so every address is normalized to lowercase
on construction: `Alice@X.com` and `alice@x.com` are the same account.
"""

import re
from dataclasses import dataclass
from typing import ClassVar

from signet.utils.i18n import get_translated_message


@dataclass(frozen=True, slots=True)
class Email:
    """An immutable, self-validating, lowercase email address.

    Attributes:
        value: The normalized string representation of the email address.
    """

    value: str

    MAX_LENGTH: ClassVar[int] = 254
    EMAIL_PATTERN: ClassVar[re.Pattern] = re.compile(
        r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"
    )

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError("Email value must be a string.")

        normalized_value = self.value.strip().lower()
        object.__setattr__(self, "value", normalized_value)

        if len(normalized_value) > self.MAX_LENGTH or not self.EMAIL_PATTERN.match(normalized_value):
            raise ValueError(get_translated_message("email_invalid"))

    @property
    def domain(self) -> str:
        """Returns the domain part of the email address."""
        return self.value.split("@")[1]

    def mask_for_logging(self) -> str:
        """Returns a masked version of the email for safe logging.

        Example: 'us***@example.com'
        """
        local, domain_part = self.value.split("@")
        return f"{local[:2]}***@{domain_part}"

    def __str__(self) -> str:
        return self.value
