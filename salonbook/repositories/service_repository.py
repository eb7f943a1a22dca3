from typing import Optional

from sqlalchemy.orm import Session

from salonbook.models.service import ServiceCatalogItem, VendorService


class ServiceRepository:
    def __init__(self, db: Session):
        self.db = db

    def find_vendor_offering(self, vendor_id: int, service_id: int) -> Optional[VendorService]:
        """Bookable offering of an active catalog service by a vendor, with its catalog item loaded"""
        return self.db.query(VendorService).join(
            ServiceCatalogItem, VendorService.service_id == ServiceCatalogItem.id
        ).filter(
            VendorService.vendor_id == vendor_id,
            VendorService.service_id == service_id,
            VendorService.is_available == True,
            VendorService.status == "active",
            ServiceCatalogItem.status == "active",
        ).first()
