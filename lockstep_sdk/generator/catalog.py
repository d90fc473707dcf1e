"""
Declarative table of Lockstep Platform resources.

Each resource lists its endpoints as (method name, HTTP verb, path suffix,
query parameters, body, response shape). Resource client classes are
generated from this table by `resource_client.build_resource_client`.
"""

import string
from dataclasses import dataclass, field

from ..core.models import ActionResultModel, FetchResult
from .normalizer import ResponseType

API_PREFIX = "/api/v1"

# Python argument name -> query string name
QUERY_PARAM_NAMES = {
    "filter": "filter",
    "include": "include",
    "order": "order",
    "page_size": "pageSize",
    "page_number": "pageNumber",
}

QUERY_PARAMS = ("filter", "include", "order", "page_size", "page_number")


@dataclass(frozen=True)
class Endpoint:
    """One generated resource method."""
    method_name: str
    http_method: str
    suffix: str = ""
    query_params: tuple[str, ...] = ()
    has_body: bool = False
    response_type: ResponseType = None
    doc: str = ""

    def __post_init__(self):
        unknown = [p for p in self.query_params if p not in QUERY_PARAM_NAMES]
        if unknown:
            raise ValueError(f"Unknown query parameters for {self.method_name}: {unknown}")

    @property
    def path_params(self) -> tuple[str, ...]:
        """Placeholder names in the path suffix, in order."""
        return tuple(
            name for _, name, _, _ in string.Formatter().parse(self.suffix) if name
        )


@dataclass(frozen=True)
class ResourceDefinition:
    """A resource family and the endpoints exposed for it."""
    name: str
    attribute: str
    endpoints: tuple[Endpoint, ...] = field(default_factory=tuple)

    @property
    def base_path(self) -> str:
        return f"{API_PREFIX}/{self.name}"


def retrieve(noun: str, include: bool = True, doc: str = "") -> Endpoint:
    return Endpoint(
        f"retrieve_{noun}",
        "GET",
        "/{id}",
        query_params=("include",) if include else (),
        doc=doc or f"Retrieve the {noun.replace('_', ' ')} with the specified identifier.",
    )


def update(noun: str) -> Endpoint:
    return Endpoint(
        f"update_{noun}",
        "PATCH",
        "/{id}",
        has_body=True,
        doc=f"Apply a partial update to the {noun.replace('_', ' ')}; fields not supplied stay unchanged.",
    )


def delete(noun: str, verb: str = "delete", response_type: ResponseType = ActionResultModel.from_dict) -> Endpoint:
    return Endpoint(
        f"{verb}_{noun}",
        "DELETE",
        "/{id}",
        response_type=response_type,
        doc=f"{verb.capitalize()} the {noun.replace('_', ' ')} with the specified identifier.",
    )


def create(plural: str) -> Endpoint:
    return Endpoint(
        f"create_{plural}",
        "POST",
        "",
        has_body=True,
        doc=f"Create one or more {plural.replace('_', ' ')} and return the records as created.",
    )


def query(plural: str, suffix: str = "/query", method_name: str | None = None) -> Endpoint:
    return Endpoint(
        method_name or f"query_{plural}",
        "GET",
        suffix,
        query_params=QUERY_PARAMS,
        response_type=FetchResult.of(),
        doc=(
            f"Query {plural.replace('_', ' ')} with an optional filter, include list, "
            "sort order and page (server defaults: page size 200, page number 0)."
        ),
    )


def crud(name: str, attribute: str, noun: str, plural: str) -> ResourceDefinition:
    """A resource exposing the standard retrieve/update/delete/create/query set."""
    return ResourceDefinition(
        name,
        attribute,
        (retrieve(noun), update(noun), delete(noun), create(plural), query(plural)),
    )


RESOURCES: tuple[ResourceDefinition, ...] = (
    ResourceDefinition(
        "Emails",
        "emails",
        (
            retrieve("email"),
            update("email"),
            delete("email"),
            Endpoint(
                "retrieve_email_logo",
                "GET",
                "/{email_id}/logo/{nonce}",
                response_type=bytes,
                doc="Retrieve the signature logo for an email; the server increments its view count.",
            ),
            create("emails"),
            query("emails"),
        ),
    ),
    ResourceDefinition(
        "Companies",
        "companies",
        (
            retrieve("company"),
            update("company"),
            delete("company", verb="disable"),
            create("companies"),
            query("companies"),
            query(
                "customer summaries",
                suffix="/views/customer-summary",
                method_name="query_customer_summary",
            ),
            Endpoint(
                "retrieve_customer_detail",
                "GET",
                "/views/customer-details/{id}",
                doc="Retrieve the customer details view of the company with the specified identifier.",
            ),
        ),
    ),
    ResourceDefinition(
        "Leads",
        "leads",
        (create("leads"),),
    ),
    ResourceDefinition(
        "CustomFieldDefinitions",
        "custom_field_definitions",
        (
            retrieve("field_definition"),
            update("field_definition"),
            delete("field_definition", response_type=None),
            create("field_definitions"),
            query("field_definitions"),
        ),
    ),
    crud("Contacts", "contacts", "contact", "contacts"),
    crud("Notes", "notes", "note", "notes"),
    crud("Activities", "activities", "activity", "activities"),
    crud("Invoices", "invoices", "invoice", "invoices"),
)
