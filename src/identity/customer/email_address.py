"""Email address confirmation and change: commands and handler.

Both commands are idempotent under retry: confirming twice or changing to
the address already on file records nothing the second time. The handler
returns the names of the events it recorded so callers can tell
"confirmed", "failed" and "nothing to do" apart.
"""

import structlog
from protean import handle
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity
from identity.utils.logging import add_context, clear_context

logger = structlog.get_logger(__name__)


@identity.command(part_of="Customer")
class ConfirmCustomerEmailAddress:
    """Confirm a customer's pending email address with the hash sent to it."""

    customer_id: Identifier(required=True)
    confirmation_hash: String(required=True, max_length=255)


@identity.command(part_of="Customer")
class ChangeCustomerEmailAddress:
    """Replace a customer's email address; the new one must be confirmed again."""

    customer_id: Identifier(required=True)
    email: String(required=True, max_length=254)


@identity.command_handler(part_of=Customer)
class ManageEmailAddressHandler:
    @handle(ConfirmCustomerEmailAddress)
    def confirm_email_address(self, command):
        add_context(customer_id=str(command.customer_id))
        try:
            repo = current_domain.repository_for(Customer)
            customer = repo.get(command.customer_id)
            recorded = customer.confirm_email_address(command.confirmation_hash)
            repo.add(customer)

            if not recorded:
                logger.info("Email address already confirmed, nothing recorded")
            else:
                logger.info("Email address confirmation processed", outcome=type(recorded[0]).__name__)
            return [type(event).__name__ for event in recorded]
        finally:
            clear_context()

    @handle(ChangeCustomerEmailAddress)
    def change_email_address(self, command):
        add_context(customer_id=str(command.customer_id))
        try:
            repo = current_domain.repository_for(Customer)
            customer = repo.get(command.customer_id)
            recorded = customer.change_email_address(command.email)
            repo.add(customer)

            if not recorded:
                logger.info("Email address unchanged, nothing recorded")
            else:
                logger.info("Email address changed, confirmation pending")
            return [type(event).__name__ for event in recorded]
        finally:
            clear_context()
