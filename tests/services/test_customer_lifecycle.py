"""End-to-end customer lifecycle through the use cases over one repository."""

from customer_registry.core.query_spec import CustomerFilter
from customer_registry.services.create_customer import CreateCustomer
from customer_registry.services.delete_customer import DeleteCustomer
from customer_registry.services.get_customer import GetCustomer
from customer_registry.services.update_customer import UpdateCustomer


async def test_create_update_read_delete(repository, customer_fields):
    create = CreateCustomer(repository, id_factory=lambda: "c-1")
    update = UpdateCustomer(repository)
    get = GetCustomer(repository)
    delete = DeleteCustomer(repository)

    created = await create.execute(customer_fields())
    assert created.success

    duplicate = await create.execute(customer_fields())
    assert duplicate.error == "Customer with document number 12345678901 already exists"

    email_taken = await create.execute(customer_fields(documentNum="98765432100"))
    assert email_taken.error == "Customer with email john@example.com already exists"

    updated = await update.execute("c-1", {"email": "john.doe@example.com"})
    assert updated.data.email == "john.doe@example.com"

    fetched = await get.execute("c-1")
    assert fetched.data == updated.data

    deleted = await delete.execute("c-1")
    assert deleted.data.email == "john.doe@example.com"

    assert (await get.execute("c-1")).error == "Customer not found"
    assert (await get.count(CustomerFilter())).data == 0
    assert (await delete.execute("c-1")).error == "Customer with id c-1 not found"
