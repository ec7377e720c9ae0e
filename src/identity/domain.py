"""Identity bounded context: customer registration and email confirmation.

The Customer aggregate is event-sourced. Commands are processed
synchronously and every state change is persisted to the event store.
"""

from protean.domain import Domain

from identity.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
