"""
Customer service: the buyers sales and receivables refer to.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from pond_ledger.exceptions import NotFoundError, ValidationError
from pond_ledger.models.customer import Customer
from pond_ledger.models.debt import Debt
from pond_ledger.models.transaction import Transaction
from pond_ledger.schemas.customer import CustomerCreate

logger = logging.getLogger(__name__)


class CustomerService:

    def __init__(self, db: Session):
        self.db = db

    def list_customers(self) -> list[Customer]:
        customers = self.db.execute(
            select(Customer).order_by(Customer.name, Customer.id)
        ).scalars().all()
        return list(customers)

    def get_customer(self, customer_id: int) -> Customer:
        customer = self.db.get(Customer, customer_id)
        if not customer:
            raise NotFoundError("Customer not found")
        return customer

    def create_customer(self, request: CustomerCreate) -> Customer:
        customer = Customer(
            name=request.name,
            phone=request.phone,
            address=request.address,
        )
        self.db.add(customer)
        self.db.flush()
        return customer

    def update_customer(
        self, customer_id: int, request: CustomerCreate
    ) -> Customer:
        customer = self.get_customer(customer_id)
        customer.name = request.name
        customer.phone = request.phone
        customer.address = request.address
        self.db.flush()
        return customer

    def delete_customer(self, customer_id: int) -> None:
        """
        Delete a customer.

        Customers with sales or receivables on record are kept;
        removing them would orphan those rows.
        """
        customer = self.get_customer(customer_id)

        for model in (Transaction, Debt):
            count = self.db.execute(
                select(func.count())
                .select_from(model)
                .where(model.customer_id == customer_id)
            ).scalar()
            if count:
                raise ValidationError(
                    f"Customer {customer_id} has {model.__tablename__} "
                    f"on record and cannot be deleted"
                )

        self.db.delete(customer)
        self.db.flush()
        logger.info("Deleted customer %s", customer_id)
