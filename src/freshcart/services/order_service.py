"""
freshcart.services.order_service

Order lifecycle service (transaction + persistence owner).

Responsibilities:
- Place orders on behalf of an authenticated user (server-stamped user id + time).
- Read a user's order history.
- Report order-table statistics for the system check.
"""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from freshcart.db.models import Order
from freshcart.db.repositories.orders import OrderRepo
from freshcart.observability.logging import get_logger

log = get_logger(__name__)


class OrderService:
    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._orders = OrderRepo(session)

    async def place_order(
        self,
        *,
        user_id: str,
        product_id: str,
        quantity: int,
        amount: float,
    ) -> Order:
        log.info("order_save_attempt", user_id=user_id, product_id=product_id)
        try:
            order = await self._orders.create(
                user_id=user_id,
                product_id=product_id,
                quantity=quantity,
                amount=amount,
                order_time=datetime.now(tz=UTC),
            )
            await self._session.commit()
        except SQLAlchemyError:
            await self._session.rollback()
            log.exception("order_save_failed", user_id=user_id)
            raise
        log.info("order_saved", user_id=user_id, order_id=order.id)
        return order

    async def history(self, *, user_id: str) -> list[Order]:
        log.info("order_history_fetch", user_id=user_id)
        try:
            orders = await self._orders.list_for_user(user_id)
        except SQLAlchemyError:
            log.exception("order_history_failed", user_id=user_id)
            raise
        log.info("order_history_fetched", user_id=user_id, count=len(orders))
        return orders

    async def total_orders(self) -> int:
        return await self._orders.count()


# --- Module Notes -----------------------------------------------------------
# Persistence errors are logged here and re-raised; the API's generic exception
# handler turns them into an opaque 500.
