from typing import Iterable, Union

from pedidos_service.models import Order
from pedidos_service.schemas import ErrorResponse, OrderResponse, RemoteUser, UserOrdersResponse

USER_NOT_FOUND = "Usuario no encontrado"

AggregatedResult = Union[UserOrdersResponse, ErrorResponse]


def aggregate_user_orders(
    user_id: int,
    users: Iterable[RemoteUser],
    orders: Iterable[Order],
) -> AggregatedResult:
    """
    Join the directory entry for ``user_id`` with the local orders it owns.

    The first user with a matching id wins. When there is none the result is
    an ``ErrorResponse`` carrying "Usuario no encontrado"; otherwise the
    orders whose ``user_id`` matches are returned in their stored order,
    possibly as an empty list.
    """
    user = next((u for u in users if u.id == user_id), None)
    if user is None:
        return ErrorResponse(error=USER_NOT_FOUND)

    user_orders = [
        OrderResponse(id=o.id, user_id=o.user_id, product=o.product)
        for o in orders
        if o.user_id == user_id
    ]
    return UserOrdersResponse(user=user, orders=user_orders)
