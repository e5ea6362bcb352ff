from typing import List

from ninja import Router
from status.constants import ABSORBING_STATUSES, StatusGroupCode
from status.services.initial_data import ORDER_STATUS_CONFIG
from status.services.transition_validator import StatusTransitionValidator

from ..auth.jwt import auth
from .schemas import StatusOut, StatusTransitionCheck, StatusTransitionOut

router = Router(tags=["status"], auth=auth)


@router.get(
    "/order/statuses",
    response=List[StatusOut],
    summary="Статусы заказа",
    description="Список статусов заказа в порядке жизненного цикла",
)
def list_order_statuses(request):
    """Получение списка статусов заказа."""
    statuses = ORDER_STATUS_CONFIG[StatusGroupCode.ORDER.value]["status"]
    return [
        {
            "code": status["code"],
            "name": status["name"],
            "description": status.get("description", ""),
            "is_default": status.get("is_default", False),
            "is_final": status["code"] in {code.value for code in ABSORBING_STATUSES},
            "order": status["order"],
        }
        for status in sorted(statuses, key=lambda status: status["order"])
    ]


@router.post(
    "/order/check-transition",
    response=StatusTransitionOut,
    summary="Проверка перехода",
    description="Проверка возможности перехода между статусами заказа",
)
def check_status_transition(request, transition: StatusTransitionCheck):
    """Проверка возможности перехода между статусами."""
    decision = StatusTransitionValidator().check(
        transition.from_status,
        transition.to_status,
        transition.actor_role or request.auth.role,
    )
    return {
        "allowed": decision.allowed,
        "reason": decision.reason,
        "error": decision.error.__name__ if decision.error else None,
    }
