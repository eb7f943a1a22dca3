# salonbook/models/service.py
"""
Service catalog and per-vendor offerings.

The catalog item owns the duration; the vendor offering owns the price.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from salonbook.models.base import Base


class ServiceCatalogItem(Base):
    """Shared service definition (haircut, facial, ...)"""
    __tablename__ = "services_master"

    id = Column(Integer, primary_key=True, autoincrement=True)
    service_name = Column(String(100), nullable=False)
    default_duration_minutes = Column(Integer, nullable=False, default=30)
    status = Column(String(20), nullable=False, default="active")

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<ServiceCatalogItem(id={self.id}, service_name={self.service_name})>"


class VendorService(Base):
    """A vendor's priced offering of a catalog service"""
    __tablename__ = "vendor_services"
    __table_args__ = (
        UniqueConstraint("vendor_id", "service_id", name="uq_vendor_services_vendor_service"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    vendor_id = Column(Integer, ForeignKey("vendor_shops.id", ondelete="CASCADE"), nullable=False, index=True)
    service_id = Column(Integer, ForeignKey("services_master.id"), nullable=False, index=True)

    price = Column(Numeric(10, 2), nullable=False)
    is_available = Column(Boolean, default=True, nullable=False)
    status = Column(String(20), default="active", nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    vendor = relationship("VendorShop", back_populates="offerings")
    catalog_item = relationship("ServiceCatalogItem", lazy="joined")

    def __repr__(self):
        return f"<VendorService(vendor_id={self.vendor_id}, service_id={self.service_id}, price={self.price})>"
