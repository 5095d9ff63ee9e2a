"""Person CRUD endpoints."""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, HTTPException, Path, Request, Response, status

from .errors import ErrorCategory, PersonStoreError, categorize_error, status_code_for
from .metrics import MetricsCollector
from .models import U32_MAX, Person
from .store import PersonStore

logger = logging.getLogger(__name__)

router = APIRouter()

PersonId = Annotated[int, Path(ge=0, le=U32_MAX, description="Person identifier")]


def get_store(request: Request) -> PersonStore:
    """Get the person store owned by the running application."""
    return request.app.state.store


def get_metrics_collector(request: Request) -> MetricsCollector:
    """Get the application metrics collector."""
    return request.app.state.metrics_collector


def _to_http_error(operation: str, error: PersonStoreError) -> HTTPException:
    """Translate a store error into the HTTP error returned to the client."""
    category = categorize_error(error)
    if category == ErrorCategory.INTERNAL:
        logger.error(f"{operation} failed: {error}")
        return HTTPException(status_code=status_code_for(error), detail="Internal server error")

    logger.info(f"{operation} rejected: {error}")
    return HTTPException(status_code=status_code_for(error), detail=str(error))


@router.get("/api/persons", response_model=List[Person])
def list_persons(
    store: PersonStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> List[Person]:
    """
    List all persons.

    Returns every stored person in insertion order.

    Raises:
        HTTPException: 500 if the store is unavailable
    """
    try:
        persons = store.list_persons()
    except PersonStoreError as e:
        metrics.record_store_operation("list", success=False)
        raise _to_http_error("list", e)
    metrics.record_store_operation("list", success=True)
    return persons


@router.get("/api/person/{person_id}", response_model=Person)
def get_person(
    person_id: PersonId,
    store: PersonStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> Person:
    """
    Get a single person.

    Args:
        person_id: Person identifier
        store: Person store dependency
        metrics: Metrics collector dependency

    Returns:
        The stored person

    Raises:
        HTTPException: 404 if absent, 500 if the store is unavailable
    """
    try:
        person = store.get_person(person_id)
    except PersonStoreError as e:
        metrics.record_store_operation("get", success=False)
        raise _to_http_error("get", e)
    metrics.record_store_operation("get", success=True)
    return person


@router.post("/api/person", status_code=status.HTTP_201_CREATED)
def add_person(
    person: Person,
    store: PersonStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> Response:
    """
    Create a person.

    Raises:
        HTTPException: 409 if the id already exists, 500 if the store is unavailable
    """
    try:
        store.create_person(person)
    except PersonStoreError as e:
        metrics.record_store_operation("create", success=False)
        raise _to_http_error("create", e)
    metrics.record_store_operation("create", success=True)
    return Response(status_code=status.HTTP_201_CREATED)


@router.put("/api/person", status_code=status.HTTP_204_NO_CONTENT)
def update_person(
    person: Person,
    store: PersonStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> Response:
    """
    Update name, age and date of the person whose id matches the body.

    The id itself is never changed.

    Raises:
        HTTPException: 404 if absent, 500 if the store is unavailable
    """
    try:
        store.update_person(person)
    except PersonStoreError as e:
        metrics.record_store_operation("update", success=False)
        raise _to_http_error("update", e)
    metrics.record_store_operation("update", success=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/api/person/{person_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_person(
    person_id: PersonId,
    store: PersonStore = Depends(get_store),
    metrics: MetricsCollector = Depends(get_metrics_collector),
) -> Response:
    """
    Delete a person.

    Raises:
        HTTPException: 404 if absent, 500 if the store is unavailable
    """
    try:
        store.delete_person(person_id)
    except PersonStoreError as e:
        metrics.record_store_operation("delete", success=False)
        raise _to_http_error("delete", e)
    metrics.record_store_operation("delete", success=True)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
