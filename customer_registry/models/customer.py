"""Customer ORM — persisted form of the Customer entity.

Invariants:
    - id is a string primary key (entity ids may be numeric; stored as text)
    - document_num and email carry unique constraints: the storage-level guard
      behind the use cases' advisory uniqueness probes
    - Rows are converted to Customer only through to_entity() (re-validated)

Design Decisions:
    - Date column for date_birthday: the entity field is a calendar date
    - Plain columns, no relationships: customers are a single aggregate
"""

from datetime import date

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from customer_registry.core.customer import Customer
from customer_registry.db.base import Base


class CustomerRecord(Base):
    """customers table row."""
    __tablename__ = "customers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    document_num: Mapped[str] = mapped_column(
        String(64), nullable=False, unique=True, index=True,
    )
    date_birthday: Mapped[date] = mapped_column(Date, nullable=False)
    email: Mapped[str] = mapped_column(
        String(320), nullable=False, unique=True, index=True,
    )

    @classmethod
    def from_entity(cls, customer: Customer) -> "CustomerRecord":
        return cls(
            id=str(customer.id),
            name=customer.name,
            document_num=customer.document_num,
            date_birthday=customer.date_birthday,
            email=customer.email,
        )

    def apply(self, customer: Customer) -> None:
        """Copy mutable fields from an evolved entity."""
        self.name = customer.name
        self.document_num = customer.document_num
        self.date_birthday = customer.date_birthday
        self.email = customer.email

    def to_entity(self) -> Customer:
        return Customer.create({
            "id": self.id,
            "name": self.name,
            "document_num": self.document_num,
            "date_birthday": self.date_birthday,
            "email": self.email,
        })
