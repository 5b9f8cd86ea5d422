from __future__ import annotations

from datetime import datetime

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from freshcart.db.models import Order


class OrderRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(
        self,
        *,
        user_id: str,
        product_id: str,
        quantity: int,
        amount: float,
        order_time: datetime,
    ) -> Order:
        order = Order(
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            amount=amount,
            order_time=order_time,
        )
        self._session.add(order)
        await self._session.flush()
        return order

    async def list_for_user(self, user_id: str) -> list[Order]:
        # Newest first; id breaks ties between orders placed in the same instant.
        stmt = (
            select(Order)
            .where(Order.user_id == user_id)
            .order_by(desc(Order.order_time), desc(Order.id))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def count(self) -> int:
        return (await self._session.execute(select(func.count(Order.id)))).scalar_one()
