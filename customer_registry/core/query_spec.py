"""Query Specification — explicit filter, sort and projection types for customer queries.

Invariants:
    - Every field named in a filter, sort key or projection is a CustomerField
      (parsed at construction; unknown names raise InvalidQueryError)
    - CustomerFilter is a conjunction of field-equality predicates; empty matches all
    - Sort keys apply lexicographically: first key dominates, later keys break ties
    - Projected rows always carry the id

Design Decisions:
    - Pure in-memory evaluation (matches/sort/project) lives here so the memory adapter
      and tests share one definition of the semantics; SQL adapter translates instead
    - from_mapping() constructors accept loose transport input exactly once, at the boundary
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from customer_registry.core.customer import Customer
from customer_registry.core.domain_types import CustomerField, SortDirection
from customer_registry.core.errors import InvalidQueryError

ProjectedRow = dict[str, Any]


def parse_field(name: str) -> CustomerField:
    try:
        return CustomerField.parse(name)
    except ValueError as e:
        raise InvalidQueryError(str(e)) from e


def coerce_value(customer_field: CustomerField, value: Any) -> Any:
    """Bring transport values to the entity's type (ISO text → date for birthdays)."""
    if customer_field is CustomerField.DATE_BIRTHDAY and isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError as e:
            raise InvalidQueryError(f"Invalid date in filter: {value}") from e
    return value


@dataclass(frozen=True)
class CustomerFilter:
    """Field-equality predicates, all of which must hold."""
    equals: Mapping[CustomerField, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, criteria: Mapping[str, Any] | None) -> "CustomerFilter":
        if not criteria:
            return cls()
        equals = {}
        for name, value in criteria.items():
            customer_field = parse_field(name)
            equals[customer_field] = coerce_value(customer_field, value)
        return cls(equals=equals)

    def is_empty(self) -> bool:
        return not self.equals

    def matches(self, customer: Customer) -> bool:
        return all(
            _same(customer.get(f), value) for f, value in self.equals.items()
        )


@dataclass(frozen=True)
class SortKey:
    field: CustomerField
    direction: SortDirection = SortDirection.ASCENDING


@dataclass(frozen=True)
class SearchOptions:
    sort: tuple[SortKey, ...] = ()
    projection: frozenset[CustomerField] | None = None

    @classmethod
    def build(
        cls,
        sort: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        projection: Mapping[str, Any] | Iterable[str] | None = None,
    ) -> "SearchOptions":
        """Build from loose input.

        ``sort`` is an ordered mapping or sequence of (field, direction) pairs.
        ``projection`` is a sequence of field names or a {field: truthy} mapping.
        """
        keys = []
        pairs = sort.items() if isinstance(sort, Mapping) else (sort or ())
        for name, direction in pairs:
            try:
                parsed_direction = SortDirection.parse(direction)
            except ValueError as e:
                raise InvalidQueryError(str(e)) from e
            keys.append(SortKey(parse_field(name), parsed_direction))

        fields = None
        if projection is not None:
            if isinstance(projection, Mapping):
                names = [name for name, wanted in projection.items() if wanted]
            else:
                names = list(projection)
            fields = frozenset(parse_field(name) for name in names)

        return cls(sort=tuple(keys), projection=fields)

    def apply(self, customers: list[Customer]) -> list[Customer] | list[ProjectedRow]:
        """Sort then project, in memory."""
        ordered = sort_customers(customers, self.sort)
        if self.projection is None:
            return ordered
        return [project(c, self.projection) for c in ordered]


def sort_customers(
    customers: Iterable[Customer], keys: tuple[SortKey, ...],
) -> list[Customer]:
    """Stable multi-key sort: apply keys last-to-first."""
    ordered = list(customers)
    for key in reversed(keys):
        ordered.sort(
            key=lambda c: _sortable(c.get(key.field)),
            reverse=key.direction is SortDirection.DESCENDING,
        )
    return ordered


def project(customer: Customer, fields: frozenset[CustomerField]) -> ProjectedRow:
    full = customer.to_dict()
    wanted = set(fields) | {CustomerField.ID}
    return {f.wire_name: full[f.wire_name] for f in CustomerField if f in wanted}


def _same(actual: Any, expected: Any) -> bool:
    # ids may arrive as text for numeric keys
    if isinstance(actual, int) and isinstance(expected, str):
        return str(actual) == expected
    return actual == expected


def _sortable(value: Any) -> tuple:
    # mixed str/int ids must still compare
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    if isinstance(value, date):
        return (1, value.toordinal(), "")
    return (2, 0, str(value))
