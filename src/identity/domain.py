"""Identity bounded context: the per-user address book and the principal seam.

Owns the bounded, single-default AddressBook. Principals themselves come from
an external identity provider (see ``identity.provider``).
"""

from protean.domain import Domain
from shared.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
identity = Domain(name="identity")
