from .order import Order, OrderItem
from .parties import Airport, Caterer, Client, Fbo

__all__ = ["Order", "OrderItem", "Client", "Caterer", "Airport", "Fbo"]
