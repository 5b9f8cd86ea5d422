"""
freshcart.api.routers.orders

Order endpoints for authenticated customers.

Responsibilities:
- Place an order for the caller (user id and order time are server-assigned).
- List the caller's order history.
- System check: DB connectivity and order count.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from sqlalchemy.ext.asyncio import AsyncSession

from freshcart.api.deps import db_session
from freshcart.auth.deps import get_identity
from freshcart.auth.models import Identity
from freshcart.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PlaceOrderRequest(_CamelModel):
    # Unknown fields (userId, orderTime, id) are ignored: those are server-assigned.
    product_id: str = Field(min_length=1, max_length=256)
    quantity: int = Field(ge=1)
    amount: float = Field(ge=0)


class OrderResponse(_CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    product_id: str
    quantity: int
    amount: float
    order_time: datetime


@router.post("", response_model=OrderResponse)
async def place_order(
    body: PlaceOrderRequest,
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> OrderResponse:
    order = await OrderService(session=session).place_order(
        user_id=identity.subject,
        product_id=body.product_id,
        quantity=body.quantity,
        amount=body.amount,
    )
    return OrderResponse.model_validate(order)


@router.get("/history", response_model=list[OrderResponse])
async def order_history(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> list[OrderResponse]:
    orders = await OrderService(session=session).history(user_id=identity.subject)
    return [OrderResponse.model_validate(o) for o in orders]


@router.get("/system-check")
async def system_check(
    identity: Identity = Depends(get_identity),
    session: AsyncSession = Depends(db_session),
) -> dict[str, Any]:
    total = await OrderService(session=session).total_orders()
    return {
        "status": "UP",
        "timestamp": datetime.now(tz=UTC).isoformat(),
        "totalOrders": total,
        "databaseConnectionActive": True,
    }


# --- Module Notes -----------------------------------------------------------
# Handlers depend on `get_identity`, never on the Authorization header; the auth
# gate middleware has already admitted (or rejected) the request.
