"""Domain events for the Customer aggregate.

These are the only persisted record of a customer. The aggregate's @apply
handlers fold them back into state, so every field needed to rebuild the
customer travels on the event itself.
"""

from protean.fields import Identifier, String

from identity.domain import identity


@identity.event(part_of="Customer")
class CustomerRegistered:
    """A new customer was registered with an unconfirmed email address."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    confirmation_hash: String(required=True, max_length=255)
    given_name: String(required=True, max_length=100)
    family_name: String(required=True, max_length=100)


@identity.event(part_of="Customer")
class CustomerEmailAddressConfirmed:
    """The pending email address was confirmed with the matching hash."""

    __version__ = 1

    customer_id: Identifier(required=True)


@identity.event(part_of="Customer")
class CustomerEmailAddressConfirmationFailed:
    """A confirmation attempt presented a hash that did not match."""

    __version__ = 1

    customer_id: Identifier(required=True)


@identity.event(part_of="Customer")
class CustomerEmailAddressChanged:
    """The customer moved to a new, not yet confirmed, email address."""

    __version__ = 1

    customer_id: Identifier(required=True)
    email: String(required=True, max_length=254)
    confirmation_hash: String(required=True, max_length=255)


@identity.event(part_of="Customer")
class CustomerDeleted:
    """The customer was removed from the platform."""

    __version__ = 1

    customer_id: Identifier(required=True)
