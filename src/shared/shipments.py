"""Shipment snapshot: the shipment fields notifications need, captured once.

Shipments live in the surrounding application. Whatever is copied into a
snapshot is what gets rendered, so a later change to the shipment or its
owner never rewrites a notification that was already queued.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ShipmentSnapshot:
    shipment_id: str
    owner_id: str
    owner_email: str | None = None
    owner_name: str = ""
    receiver_name: str = ""
    receiver_city: str = ""
    receiver_country: str = ""
    carrier_tracking_number: str | None = None

    @property
    def destination(self) -> str:
        parts = [p for p in (self.receiver_city, self.receiver_country) if p]
        return ", ".join(parts)
