# src/http_orchestrator/plugins/plugin.py

from abc import ABC
from typing import Optional

from ..core.models import Request, TransportResponse


class PluginPriority:
    """
    Константы приоритетов для плагинов.

    Плагины с меньшим приоритетом выполняются раньше.

    Example:
        >>> class HeaderPlugin(Plugin):
        ...     priority = PluginPriority.FIRST
    """
    FIRST = 0       # Выполняется первым (заголовки, auth)
    HIGH = 25
    NORMAL = 50     # По умолчанию
    LOW = 75
    LAST = 100      # Выполняется последним (метрики)


class Plugin(ABC):
    """
    Базовый класс для hop-хуков.

    Хуки вызываются на каждом hop'е цепочки редиректов, а не один раз
    на send(). Реализация по умолчанию ничего не меняет.

    Attributes:
        priority: Приоритет выполнения (меньше = раньше)
    """

    priority: int = PluginPriority.NORMAL

    def before_request(self, request: Request) -> Request:
        """Вызывается перед отправкой hop'а. Может вернуть изменённый запрос."""
        return request

    def after_response(self, response: TransportResponse) -> TransportResponse:
        """Вызывается после получения ответа hop'а (тело уже декодировано)."""
        return response

    def on_error(self, error: Exception, request: Optional[Request] = None) -> None:
        """
        Вызывается при ошибке транспорта или политики редиректов.

        Исключение всё равно будет выброшено вызывающему send().
        """
        return None
