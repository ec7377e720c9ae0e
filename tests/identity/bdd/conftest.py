"""Shared BDD fixtures and step definitions for the Identity domain.

Given steps build up an event history; When steps rebuild the customer from
that history before acting on it, the same way a command handler would after
loading from the event store.
"""

from identity.customer.customer import Customer
from identity.customer.events import (
    CustomerEmailAddressChanged,
    CustomerEmailAddressConfirmationFailed,
    CustomerEmailAddressConfirmed,
    CustomerRegistered,
)
from identity.customer.values import ConfirmationHash
from pytest_bdd import given, parsers, then

# Map event name strings to classes for dynamic lookup
_EVENT_CLASSES = {
    "CustomerRegistered": CustomerRegistered,
    "CustomerEmailAddressConfirmed": CustomerEmailAddressConfirmed,
    "CustomerEmailAddressConfirmationFailed": CustomerEmailAddressConfirmationFailed,
    "CustomerEmailAddressChanged": CustomerEmailAddressChanged,
}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(
    parsers.cfparse('a customer registered as "{email}" with confirmation hash "{token}"'),
    target_fixture="history",
)
def registered_customer(email, token):
    customer = Customer.register(
        email=email,
        given_name="John",
        family_name="Doe",
        hash_factory=lambda: ConfirmationHash(value=token),
    )
    return list(customer._events)


@given("the email address was confirmed")
def email_address_was_confirmed(history):
    customer = Customer.reconstitute(history)
    customer.confirm_email_address(customer.confirmation_hash.value)
    history.extend(customer._events)


@given(parsers.cfparse('the email address was changed to "{email}" with confirmation hash "{token}"'))
def email_address_was_changed(history, email, token):
    customer = Customer.reconstitute(history)
    customer.change_email_address(email, hash_factory=lambda: ConfirmationHash(value=token))
    history.extend(customer._events)


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then(parsers.cfparse("a {event_type} event is recorded"))
def event_is_recorded(outcome, event_type):
    recorded = outcome["recorded"]
    assert len(recorded) == 1, f"Expected one {event_type}, got {[type(e).__name__ for e in recorded]}"
    event = recorded[0]
    assert isinstance(event, _EVENT_CLASSES[event_type])
    assert event.customer_id == str(outcome["customer"].id)


@then("nothing is recorded")
def nothing_is_recorded(outcome):
    recorded = outcome["recorded"]
    assert recorded == [], f"Expected no events, got {[type(e).__name__ for e in recorded]}"


@then(parsers.cfparse('the recorded event carries email "{email}"'))
def recorded_event_carries_email(outcome, email):
    assert outcome["recorded"][0].email == email


@then("the email address is confirmed")
def email_address_is_confirmed(outcome):
    assert outcome["customer"].is_email_address_confirmed is True


@then("the email address is not confirmed")
def email_address_is_not_confirmed(outcome):
    assert outcome["customer"].is_email_address_confirmed is False
