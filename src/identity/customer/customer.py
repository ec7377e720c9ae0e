"""Customer aggregate (Event Sourced): registration and email confirmation.

There is no persisted "current row" for a customer. Every change is captured
as a domain event and the in-memory state is rebuilt by replaying events
through the @apply handlers at the bottom of the class.

Email lifecycle:
    CustomerRegistered               → unconfirmed, holding hash H1
    CustomerEmailAddressConfirmed    → confirmed, hash cleared
    CustomerEmailAddressChanged      → unconfirmed again, holding a fresh hash

A mismatching hash records CustomerEmailAddressConfirmationFailed and leaves
state untouched, so the pending hash still works afterwards.

Command methods return the events they raised (zero or one). The same events
stay in ``_events`` until the repository persists them.
"""

import secrets

from protean import apply
from protean.exceptions import IncorrectUsageError, ValidationError
from protean.fields import Boolean, ValueObject

from identity.customer.events import (
    CustomerDeleted,
    CustomerEmailAddressChanged,
    CustomerEmailAddressConfirmationFailed,
    CustomerEmailAddressConfirmed,
    CustomerRegistered,
)
from identity.customer.values import ConfirmationHash, PersonName
from identity.domain import identity
from identity.shared.email import EmailAddress


def _require(**inputs):
    """Raise ValidationError for every input that is missing or blank."""
    missing = {name: [f"{name} is required"] for name, value in inputs.items() if value is None or not value.strip()}
    if missing:
        raise ValidationError(missing)


@identity.aggregate(is_event_sourced=True)
class Customer:
    """A person registered on the platform, reachable through one email address."""

    email: ValueObject(EmailAddress)
    confirmation_hash: ValueObject(ConfirmationHash)
    name: ValueObject(PersonName)
    is_deleted: Boolean(default=False)

    @property
    def is_email_address_confirmed(self) -> bool:
        return self.confirmation_hash is None

    # -------------------------------------------------------------------
    # Factory methods
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, email, given_name, family_name, hash_factory=None):
        """Register a new customer with an unconfirmed email address.

        Uses _create_new() for a blank aggregate with a fresh identity; all
        state is then established by the CustomerRegistered @apply handler.
        ``hash_factory`` produces the ConfirmationHash and defaults to
        ``ConfirmationHash.generate``.
        """
        _require(email=email, given_name=given_name, family_name=family_name)

        # Build value objects first so invalid input never reaches an event
        email_address = EmailAddress(address=email)
        name = PersonName(given_name=given_name, family_name=family_name)
        confirmation_hash = (hash_factory or ConfirmationHash.generate)()

        customer = cls._create_new()
        customer.raise_(
            CustomerRegistered(
                customer_id=str(customer.id),
                email=email_address.address,
                confirmation_hash=confirmation_hash.value,
                given_name=name.given_name,
                family_name=name.family_name,
            )
        )
        return customer

    @classmethod
    def reconstitute(cls, events):
        """Rebuild a customer by replaying its history in order.

        The history must open with CustomerRegistered; anything else would
        leave a half-initialised aggregate behind.
        """
        history = list(events)
        if not history:
            raise IncorrectUsageError("Cannot reconstitute a Customer from an empty event history")
        if not isinstance(history[0], CustomerRegistered):
            raise IncorrectUsageError(
                f"Customer history must start with CustomerRegistered, not {type(history[0]).__name__}"
            )

        return cls.from_events(history)

    # -------------------------------------------------------------------
    # Helper
    # -------------------------------------------------------------------
    def _record(self, event):
        self.raise_(event)
        return [self._events[-1]]

    # -------------------------------------------------------------------
    # Email confirmation
    # -------------------------------------------------------------------
    def confirm_email_address(self, confirmation_hash):
        """Confirm the pending email address with the hash sent to it.

        Already confirmed customers are left alone, whatever hash is given.
        """
        _require(confirmation_hash=confirmation_hash)

        if self.is_email_address_confirmed:
            return []

        # Bytes, so non-ASCII input compares instead of raising TypeError
        if not secrets.compare_digest(confirmation_hash.encode(), self.confirmation_hash.value.encode()):
            return self._record(CustomerEmailAddressConfirmationFailed(customer_id=str(self.id)))

        return self._record(CustomerEmailAddressConfirmed(customer_id=str(self.id)))

    def change_email_address(self, email, hash_factory=None):
        """Move the customer to a new address, which must then be confirmed.

        Asking for the address already on file is a no-op and keeps the
        current hash.
        """
        _require(email=email)

        email_address = EmailAddress(address=email)
        if email_address == self.email:
            return []

        confirmation_hash = (hash_factory or ConfirmationHash.generate)()
        return self._record(
            CustomerEmailAddressChanged(
                customer_id=str(self.id),
                email=email_address.address,
                confirmation_hash=confirmation_hash.value,
            )
        )

    # -------------------------------------------------------------------
    # @apply methods: rebuild state during event replay
    # -------------------------------------------------------------------
    @apply
    def _on_customer_registered(self, event: CustomerRegistered):
        self.id = event.customer_id
        self.email = EmailAddress(address=event.email)
        self.confirmation_hash = ConfirmationHash(value=event.confirmation_hash)
        self.name = PersonName(given_name=event.given_name, family_name=event.family_name)
        self.is_deleted = False

    @apply
    def _on_email_address_confirmed(self, event: CustomerEmailAddressConfirmed):  # noqa: ARG002
        self.confirmation_hash = None

    @apply
    def _on_email_address_confirmation_failed(self, event: CustomerEmailAddressConfirmationFailed):  # noqa: ARG002
        # Historical record only, no state change
        pass

    @apply
    def _on_email_address_changed(self, event: CustomerEmailAddressChanged):
        self.email = EmailAddress(address=event.email)
        self.confirmation_hash = ConfirmationHash(value=event.confirmation_hash)

    @apply
    def _on_customer_deleted(self, event: CustomerDeleted):  # noqa: ARG002
        self.is_deleted = True
