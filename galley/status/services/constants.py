"""
Работа с константами статусов для приложений.

Этот модуль предоставляет функции для работы с константами статусов,
включая получение описаний, названий, кодов и порядка статусов. Данные
берутся из конфигурации ORDER_STATUS_CONFIG.

Основные функции:
    - get_status_descriptions: Получение описаний статусов
    - get_status_names: Получение названий статусов
    - get_status_codes: Получение кодов статусов
    - get_status_choices: Получение списка статусов для выбора
    - get_default_status: Получение статуса по умолчанию
    - get_status_order: Получение порядка следования статусов

Примеры использования:
    # Получение описаний статусов
    descriptions = get_status_descriptions()

    # Получение списка для выбора (поле модели, API)
    choices = get_status_choices()

    # Проверка продвижения статуса вперед
    order = get_status_order()
    is_forward = order["ready_for_delivery"] > order["in_preparation"]

Примечания:
    - Все функции принимают код группы статусов (по умолчанию группа заказа)
    - Результаты не зависят от базы данных
"""

from status.constants import StatusGroupCode

from .initial_data import ORDER_STATUS_CONFIG


def _get_statuses(group_code=None):
    group = ORDER_STATUS_CONFIG[group_code or StatusGroupCode.ORDER.value]
    return sorted(group["status"], key=lambda status: status["order"])


def get_status_descriptions(group_code=None):
    """
    Получить описания статусов.

    Args:
        group_code: Код группы статусов (опционально)

    Returns:
        dict: Словарь {код_статуса: описание}
    """
    return {
        status["code"]: status.get("description", "")
        for status in _get_statuses(group_code)
    }


def get_status_names(group_code=None):
    """
    Получить названия статусов.

    Args:
        group_code: Код группы статусов (опционально)

    Returns:
        dict: Словарь {код_статуса: название}
    """
    return {status["code"]: status["name"] for status in _get_statuses(group_code)}


def get_status_codes(group_code=None):
    """Получить словарь {код_статуса: код_статуса}."""
    return {status["code"]: status["code"] for status in _get_statuses(group_code)}


def get_status_choices(group_code=None) -> list:
    """
    Получить список статусов для выбора.

    Args:
        group_code: Код группы статусов (опционально)

    Returns:
        list: Список кортежей (код_статуса, название) в порядке следования
    """
    return [(status["code"], status["name"]) for status in _get_statuses(group_code)]


def get_default_status(group_code=None):
    """
    Получить код статуса по умолчанию.

    Args:
        group_code: Код группы статусов (опционально)

    Returns:
        str: Код статуса по умолчанию
    """
    for status in _get_statuses(group_code):
        if status.get("is_default"):
            return status["code"]
    return None


def get_status_order(group_code=None):
    """Получить словарь {код_статуса: порядок}."""
    return {status["code"]: status["order"] for status in _get_statuses(group_code)}
