"""Inventory bounded context: Product stock, audit trail and alerting.

Handles stock mutations through the stock ledger (append-only audit log),
low-stock and out-of-stock alert evaluation, and CSV bulk import/export of
catalog rows for the admin back-office.
"""

from protean.domain import Domain

from inventory.utils.logging import configure_logging, get_logger

# Configure logging for the application
configure_logging(log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
inventory = Domain(name="inventory")
