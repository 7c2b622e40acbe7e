"""Customer Routes — HTTP surface over the customer use cases.

Invariants:
    - Every endpoint answers with a serialized OperationResult (success, data, error)
      or a list of them (bulk create / bulk update)
    - Failure status comes from the result's category, never from message text
    - Query-string filters and search bodies are parsed into CustomerFilter/SearchOptions
      here; unknown field names are rejected (InvalidQueryError → 400)

Design Decisions:
    - Static paths (/count, /bulk, /search, /delete, /document/...) declared before
      /{customer_id} so they are never captured as ids
    - Bulk endpoints return 200/201 with per-item results; callers inspect each item
"""

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from customer_registry.api.dependencies import (
    get_create_customer, get_delete_customer, get_get_customer, get_update_customer,
)
from customer_registry.core.domain_types import CustomerField
from customer_registry.core.errors import ErrorCategory, InvalidQueryError
from customer_registry.core.operation_result import OperationResult
from customer_registry.core.query_spec import CustomerFilter, SearchOptions
from customer_registry.schemas.customer import (
    CustomerCreate, CustomerUpdate, DeleteManyRequest, OperationResultResponse,
    SearchRequest, UpdateManyRequest,
)
from customer_registry.services.create_customer import CreateCustomer
from customer_registry.services.delete_customer import DeleteCustomer
from customer_registry.services.get_customer import GetCustomer
from customer_registry.services.update_customer import UpdateCustomer

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/customers", tags=["customers"])

_FAILURE_STATUS = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCategory.RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCategory.INTEGRITY: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCategory.DATABASE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCategory.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def respond(
    result: OperationResult, success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """Render an OperationResult with a status derived from its category."""
    if result.success:
        code = success_status
    else:
        code = _FAILURE_STATUS.get(
            result.category, status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
    return JSONResponse(status_code=code, content=result.to_dict())


def respond_many(
    results: list[OperationResult], success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    return JSONResponse(
        status_code=success_status, content=[r.to_dict() for r in results],
    )


def _filter_from_query(request: Request) -> CustomerFilter:
    return CustomerFilter.from_mapping(dict(request.query_params))


@router.post(
    "", response_model=OperationResultResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_customer(
    body: CustomerCreate, use_case: CreateCustomer = Depends(get_create_customer),
):
    """Create one customer."""
    result = await use_case.execute(body.to_fields())
    return respond(result, status.HTTP_201_CREATED)


@router.post("/bulk", status_code=status.HTTP_201_CREATED)
async def create_customers(
    body: list[CustomerCreate],
    use_case: CreateCustomer = Depends(get_create_customer),
):
    """Create customers in order; one result per item."""
    results = await use_case.create_many([item.to_fields() for item in body])
    return respond_many(results, status.HTTP_201_CREATED)


@router.get("", response_model=OperationResultResponse)
async def list_customers(
    request: Request, use_case: GetCustomer = Depends(get_get_customer),
):
    """List customers; query parameters are field-equality filters."""
    return respond(await use_case.find_all(_filter_from_query(request)))


@router.get("/count", response_model=OperationResultResponse)
async def count_customers(
    request: Request, use_case: GetCustomer = Depends(get_get_customer),
):
    """Count customers matching the query-string filter."""
    return respond(await use_case.count(_filter_from_query(request)))


@router.get("/by/{field}/{value}", response_model=OperationResultResponse)
async def find_customer_by_field(
    field: str, value: str, use_case: GetCustomer = Depends(get_get_customer),
):
    """First customer whose field equals value."""
    try:
        customer_field = CustomerField.parse(field)
    except ValueError as e:
        raise InvalidQueryError(str(e)) from e
    return respond(await use_case.find_by_field(customer_field, value))


@router.post("/search", response_model=OperationResultResponse)
async def search_customers(
    body: SearchRequest, use_case: GetCustomer = Depends(get_get_customer),
):
    """Filter, sort and project customers."""
    criteria = CustomerFilter.from_mapping(body.filter)
    options = SearchOptions.build(
        sort=[(key.field, key.direction) for key in body.sort],
        projection=body.projection,
    )
    return respond(await use_case.search(criteria, options))


@router.put("")
async def update_customers(
    body: UpdateManyRequest,
    use_case: UpdateCustomer = Depends(get_update_customer),
):
    """Apply the same changes to every matching customer; one result per record."""
    criteria = CustomerFilter.from_mapping(body.filter)
    results = await use_case.update_many(criteria, body.changes.to_changes())
    return respond_many(results)


@router.post("/delete", response_model=OperationResultResponse)
async def delete_customers(
    body: DeleteManyRequest,
    use_case: DeleteCustomer = Depends(get_delete_customer),
):
    """Delete every matching customer; data lists the records actually deleted."""
    return respond(await use_case.delete_many(CustomerFilter.from_mapping(body.filter)))


@router.delete("/document/{document_num}", response_model=OperationResultResponse)
async def delete_customer_by_document(
    document_num: str, use_case: DeleteCustomer = Depends(get_delete_customer),
):
    """Delete the customer holding a document number."""
    return respond(await use_case.execute_by_document_number(document_num))


@router.get("/{customer_id}", response_model=OperationResultResponse)
async def get_customer(
    customer_id: str, use_case: GetCustomer = Depends(get_get_customer),
):
    """Get one customer by id."""
    return respond(await use_case.execute(customer_id))


@router.get("/{customer_id}/exists", response_model=OperationResultResponse)
async def customer_exists(
    customer_id: str, use_case: GetCustomer = Depends(get_get_customer),
):
    """Whether a customer id is known."""
    return respond(await use_case.exists_by_id(customer_id))


@router.put("/{customer_id}", response_model=OperationResultResponse)
async def update_customer(
    customer_id: str,
    body: CustomerUpdate,
    use_case: UpdateCustomer = Depends(get_update_customer),
):
    """Partially update one customer."""
    return respond(await use_case.execute(customer_id, body.to_changes()))


@router.delete("/{customer_id}", response_model=OperationResultResponse)
async def delete_customer(
    customer_id: str, use_case: DeleteCustomer = Depends(get_delete_customer),
):
    """Delete one customer by id."""
    return respond(await use_case.execute(customer_id))
