# src/http_orchestrator/transport/base.py

from abc import ABC, abstractmethod
from typing import Optional, Tuple, Union

from ..core.models import HeaderPairs, TransportResponse

HopTimeout = Union[float, Tuple[float, float], None]


class Transport(ABC):
    """
    Одиночный обмен запрос/ответ.

    Транспорт не следует редиректам и не хранит cookies: этим занимается
    RedirectResolver. Ошибки сети транспорт выбрасывает как исключения
    иерархии TransportError.

    Chunked framing: транспорт, который отдаёт тело как есть (сокет, запись
    трафика), возвращает transfer_decoded=False, и резолвер декодирует тело
    сам по Transfer-Encoding. RequestsTransport всегда отдаёт
    transfer_decoded=True: urllib3 снимает framing раньше, поэтому на этом
    пути декодер резолвера не вызывается.

    Example:
        >>> response = transport.send_once("GET", "https://example.com/", [], None)
        >>> response.status_code
        200
    """

    @abstractmethod
    def send_once(
        self,
        method: str,
        url: str,
        headers: HeaderPairs,
        body: Optional[bytes],
        timeout: HopTimeout = None,
    ) -> TransportResponse:
        """
        Отправить один hop.

        Args:
            method: HTTP метод
            url: Абсолютный URL
            headers: Заголовки как (name, value) пары
            body: Тело или None
            timeout: Таймаут hop'а: число или (connect, read)

        Returns:
            Ответ, который вызывающий обязан закрыть
        """

    def close(self) -> None:
        """Освободить ресурсы (соединения, сессии)."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
