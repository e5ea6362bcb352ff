"""
Тексты писем по заказам.

Ключ шаблона имеет вид "<получатель>.<статус>" или "<получатель>.default".
Письма клиенту начинаются с обращения по имени, письма кейтереру
адресованы команде ("Dear Team"). Подпись содержит название бренда
из settings.EMAIL_SUBJECT_BRAND.

Примеры использования:
    body = render_body("client.paid", first_name="John", brand="Galley")
"""

from django.conf import settings

from ..constants import CATERER_ADDRESSEE, DEFAULT_CLIENT_FIRST_NAME

SIGNATURE_SUPPORT = """Sincerely,
{brand} Inflight Support
One point of contact for your global inflight needs."""

SIGNATURE_CONCIERGE = """Blue Skies,

The {brand} Concierge Team!"""

SIGNATURE_KIND_REGARDS = """Kind regards,

The {brand} Concierge Team!"""

CONFIRMED_BODY = """Dear {first_name},

Thank you for allowing us to manage your inflight provisioning request. Your order/and or update has been confirmed.

Kindly review the attached confirmation and advise if any discrepancies.
Here if you have any questions.

""" + SIGNATURE_SUPPORT

CLIENT_BODIES = {
    "awaiting_quote": """Dear {first_name},

Thank you for considering us to manage your order. Please find order estimate attached.

Kindly advise if we may confirm this request?

""" + SIGNATURE_SUPPORT,
    "awaiting_client_approval": """Dear {first_name},

Please find detailed quote attached.

Kindly advise if we may confirm this request?

""" + SIGNATURE_CONCIERGE,
    "in_preparation": CONFIRMED_BODY,
    "ready_for_delivery": CONFIRMED_BODY,
    "delivered": """Dear {first_name},

Your order has been delivered.

Thank you for allowing us to manage your inflight request. We look forward to working with you again soon.

Here if you have any questions.

""" + SIGNATURE_CONCIERGE,
    "paid": """Dear {first_name},

Please find detailed invoice attached.

Your continued support is very much appreciated. Here if you have any questions.

""" + SIGNATURE_CONCIERGE,
    "cancelled": """Dear {first_name},

Thank you for allowing us to manage your inflight provisioning request. Your order has been cancelled.

We look forward to working with you again soon.
Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "order_changed": """Dear {first_name},

Your order has been updated. Please find the attached updated order details.

Kindly review and advise if any discrepancies.
Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "caterer_confirmed": """Dear {first_name},

Your order and/or update has been confirmed. Please find detailed confirmation attached.

Here if you have any questions.

""" + SIGNATURE_CONCIERGE,
    "default": """Dear {first_name},

Thank you for allowing us to manage your inflight provisioning request. Please find the attached order details.

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
}

CATERER_BODIES = {
    "awaiting_quote": """Dear {first_name},

Kindly asking your estimate for the attached order. Our client would love to review for approval and confirmation.

Please send at your earliest convenience.

""" + SIGNATURE_KIND_REGARDS,
    "awaiting_caterer": """Dear {first_name},

Please find order details attached.

We look forward to your confirmation.

""" + SIGNATURE_KIND_REGARDS,
    "caterer_confirmed": """Dear {first_name},

Thank you for confirming the order. Please proceed with preparation as per the attached details.

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "in_preparation": """Dear {first_name},

Kindly review the attached request for details of the changes requested.
Items Highlighted for your convenience.

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "cancelled": """Dear {first_name},

We would like to cancel this request.
Please advise if cancellation can be confirmed and if any associated charges?

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "order_changed": """Dear {first_name},

There has been an update to the order. Kindly review the attached request for details of the changes.

Items highlighted for your convenience.
Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "awaiting_client_approval": """Dear {first_name},

The quote for this order has been sent to the client for approval. We will notify you once approval is received.

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
    "default": """Dear {first_name},

Kindly review the attached request for details.

Here if you have any questions.

""" + SIGNATURE_SUPPORT,
}

EMAIL_BODIES = {
    **{f"client.{name}": body for name, body in CLIENT_BODIES.items()},
    **{f"caterer.{name}": body for name, body in CATERER_BODIES.items()},
}


def body_template_key(recipient, name) -> str:
    """Ключ шаблона для получателя, если такой шаблон есть, иначе шаблон по умолчанию."""
    key = f"{recipient}.{name}"
    return key if key in EMAIL_BODIES else f"{recipient}.default"


def render_body(template_key, first_name=None, brand=None) -> str:
    """
    Сформировать текст письма.

    Args:
        template_key: Ключ шаблона ("client.paid", "caterer.default", ...)
        first_name: Имя клиента (для писем кейтереру не используется)
        brand: Название бренда (по умолчанию settings.EMAIL_SUBJECT_BRAND)

    Raises:
        KeyError: Если шаблон не найден
    """
    if template_key.startswith("caterer."):
        first_name = CATERER_ADDRESSEE
    brand = settings.EMAIL_SUBJECT_BRAND if brand is None else brand
    return EMAIL_BODIES[template_key].format(
        first_name=first_name or DEFAULT_CLIENT_FIRST_NAME,
        brand=brand,
    )
