"""Number endpoints.

Thin request boundary over the ordering service: parse one integer per
request, call the service with what is left of the request's time budget, and
return the sorted collection. Failures propagate as `OperationError` and are
mapped to problem+json by the global handlers.
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Request

from numsort.logic.budget import RequestBudget
from numsort.logic.ports import OrderingPort
from numsort.models.number import NumberIn, NumberOut

router = APIRouter()


def get_ordering_service(request: Request) -> OrderingPort:
    return request.app.state.ordering_service


def get_request_budget(request: Request) -> RequestBudget:
    return RequestBudget(float(request.app.state.config.http_server.timeout))


@router.post("/put-num", response_model=List[int], summary="Store a number and list all numbers sorted")
def put_num(
    payload: NumberIn,
    service: OrderingPort = Depends(get_ordering_service),
    budget: RequestBudget = Depends(get_request_budget),
) -> List[int]:
    """Accept `num`, then return every stored number in ascending order.

    Both calls share the request budget; the listing gets only what the
    accept left over.
    """
    service.accept(payload.num, timeout=budget.remaining())
    return service.list_sorted(timeout=budget.remaining())


@router.post("/numbers", response_model=NumberOut, status_code=201, summary="Store a number")
def create_number(
    payload: NumberIn,
    service: OrderingPort = Depends(get_ordering_service),
    budget: RequestBudget = Depends(get_request_budget),
) -> NumberOut:
    service.accept(payload.num, timeout=budget.remaining())
    return NumberOut(num=payload.num)


@router.get("/numbers", response_model=List[int], summary="List all numbers sorted")
def list_numbers(
    service: OrderingPort = Depends(get_ordering_service),
    budget: RequestBudget = Depends(get_request_budget),
) -> List[int]:
    return service.list_sorted(timeout=budget.remaining())


__all__ = ["router", "get_ordering_service", "get_request_budget"]
