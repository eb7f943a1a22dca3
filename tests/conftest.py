import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import date, datetime, time
from decimal import Decimal

import pytest
from sqlalchemy.orm import sessionmaker

from salonbook.config.database import build_engine
from salonbook.models import (
    Base,
    ServiceCatalogItem,
    VendorService,
    VendorShop,
    VerificationStatus,
    VendorStatus,
)

# 2030-01-15 is a Tuesday
BOOKING_DAY = date(2030, 1, 15)
DAY_BEFORE_9AM = datetime(2030, 1, 14, 9, 0)


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'salonbook_test.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


def make_vendor(db, **overrides) -> VendorShop:
    fields = dict(
        shop_name="Fade Street Barbers",
        open_time=time(9, 0),
        close_time=time(12, 0),
        seat_count=1,
        worker_count=1,
        verification_status=VerificationStatus.APPROVED.value,
        status=VendorStatus.ACTIVE.value,
    )
    fields.update(overrides)
    vendor = VendorShop(**fields)
    db.add(vendor)
    db.commit()
    return vendor


def make_offering(db, vendor, name="Haircut", duration=30, price="250.00", **overrides) -> VendorService:
    catalog_item = ServiceCatalogItem(service_name=name, default_duration_minutes=duration)
    db.add(catalog_item)
    db.flush()
    offering = VendorService(
        vendor_id=vendor.id,
        service_id=catalog_item.id,
        price=Decimal(price),
        **overrides,
    )
    db.add(offering)
    db.commit()
    return offering


@pytest.fixture
def vendor(db):
    return make_vendor(db)


@pytest.fixture
def haircut(db, vendor):
    return make_offering(db, vendor, name="Haircut", duration=30, price="250.00")


@pytest.fixture
def beard_trim(db, vendor):
    return make_offering(db, vendor, name="Beard Trim", duration=45, price="150.00")
