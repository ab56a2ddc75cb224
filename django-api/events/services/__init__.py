from events.services.event_service import EventService
from events.services.inventory_ledger import InventoryLedger

__all__ = ["EventService", "InventoryLedger"]
