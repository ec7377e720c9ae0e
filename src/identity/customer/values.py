"""Value objects owned by the Customer aggregate."""

import secrets

from protean.fields import String

from identity.domain import identity


@identity.value_object(part_of="Customer")
class PersonName:
    """A customer's given and family name, replaced only as a whole."""

    given_name: String(required=True, max_length=100)
    family_name: String(required=True, max_length=100)


@identity.value_object(part_of="Customer")
class ConfirmationHash:
    """Unguessable secret that proves control of a pending email address.

    A new hash is issued whenever an unconfirmed address is put on file; it
    is only ever compared for exact equality.
    """

    value: String(required=True, max_length=255)

    @classmethod
    def generate(cls):
        return cls(value=secrets.token_urlsafe(32))
