from dataclasses import dataclass

from salonbook.models.booking import ActorRole


@dataclass(frozen=True)
class Actor:
    """The party acting on a booking, resolved once at the API boundary"""
    role: ActorRole
    id: int

    @classmethod
    def customer(cls, customer_id: int) -> "Actor":
        return cls(role=ActorRole.CUSTOMER, id=customer_id)

    @classmethod
    def vendor(cls, vendor_id: int) -> "Actor":
        return cls(role=ActorRole.VENDOR, id=vendor_id)

    @classmethod
    def admin(cls, admin_id: int) -> "Actor":
        return cls(role=ActorRole.ADMIN, id=admin_id)
