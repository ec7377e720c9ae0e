"""Customer registration: command and handler."""

import structlog
from protean import handle
from protean.fields import String
from protean.utils.globals import current_domain

from identity.customer.customer import Customer
from identity.domain import identity

logger = structlog.get_logger(__name__)


@identity.command(part_of="Customer")
class RegisterCustomer:
    """Register a new customer; the email address starts out unconfirmed."""

    email: String(required=True, max_length=254)
    given_name: String(required=True, max_length=100)
    family_name: String(required=True, max_length=100)


@identity.command_handler(part_of=Customer)
class RegisterCustomerHandler:
    @handle(RegisterCustomer)
    def register_customer(self, command):
        customer = Customer.register(
            email=command.email,
            given_name=command.given_name,
            family_name=command.family_name,
        )
        current_domain.repository_for(Customer).add(customer)

        logger.info("Customer registered", customer_id=str(customer.id))
        return str(customer.id)
