"""
Иерархия исключений http-orchestrator.

Классификация:
- Input errors (InvalidCookieError) - невалидный Set-Cookie от сервера/пользователя
- Framing errors (MalformedChunkedBodyError) - битый chunked body
- Redirect errors (RedirectError и наследники) - нарушение политики редиректов
- Transport errors (TransportError и наследники) - ошибки нижнего уровня

Флаги retryable/fatal информативные: ядро никогда не ретраит само.
"""

from typing import Iterable, Optional

import requests

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# BASE
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class HTTPOrchestratorError(Exception):
    """Базовое исключение http-orchestrator."""

    retryable: bool = False
    fatal: bool = False

    def __init__(self, message: str, **kwargs):
        self.message = message
        super().__init__(message)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# INPUT / FRAMING
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class InvalidCookieError(HTTPOrchestratorError):
    """
    Set-Cookie значение не удалось разобрать.

    Args:
        value: Исходное значение заголовка
        reason: Причина
    """
    fatal = True

    def __init__(self, value: str, reason: str = "empty cookie"):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid Set-Cookie value {value!r}: {reason}")

class MalformedChunkedBodyError(HTTPOrchestratorError):
    """
    Нарушение framing в chunked transfer coding.

    Args:
        reason: Что именно сломано
        offset: Позиция в буфере, где обнаружена ошибка
    """
    fatal = True

    def __init__(self, reason: str, offset: Optional[int] = None):
        self.reason = reason
        self.offset = offset

        msg = f"Malformed chunked body: {reason}"
        if offset is not None:
            msg += f" (at byte {offset})"
        super().__init__(msg)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REDIRECTS
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class RedirectError(HTTPOrchestratorError):
    """Базовая ошибка редиректа. Фатальна для всего send()."""
    fatal = True

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        if url:
            message += f" (url: {url})"
        super().__init__(message)

class TooManyRedirectsError(RedirectError):
    """
    Превышен лимит редиректов.

    Args:
        max_redirects: Настроенный лимит
        url: URL, который вернул последний редирект
    """

    def __init__(self, max_redirects: int, url: Optional[str] = None):
        self.max_redirects = max_redirects
        super().__init__(f"Exceeded {max_redirects} redirects", url)

class RedirectLoopDetectedError(RedirectError):
    """
    Цепочка редиректов вернулась на уже посещённый URL.

    Args:
        url: Повторно встреченный URL
        visited: URL, посещённые до обнаружения петли
    """

    def __init__(self, url: str, visited: Iterable[str] = ()):
        self.visited = list(visited)
        super().__init__("Redirect loop detected", url)

class InvalidRedirectLocationError(RedirectError):
    """
    3xx ответ без Location.

    Args:
        status_code: Статус редиректа
        url: URL ответа
    """

    def __init__(self, status_code: int, url: Optional[str] = None):
        self.status_code = status_code
        super().__init__(f"HTTP {status_code} redirect without Location header", url)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TRANSPORT
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class TransportError(HTTPOrchestratorError):
    """Ошибка транспорта (одиночный hop)."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        full_message = message
        if url:
            full_message += f" (url: {url})"
        super().__init__(full_message)

class NetworkError(TransportError):
    """Сетевая ошибка."""
    retryable = True

class TimeoutError(NetworkError):
    """
    Таймаут hop'а или общего бюджета запроса.

    Args:
        message: Сообщение об ошибке
        url: URL запроса
        timeout: Значение таймаута
        timeout_type: 'connect', 'read' или 'total'
    """

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        timeout_type: Optional[str] = None
    ):
        self.timeout = timeout
        self.timeout_type = timeout_type

        msg = message
        if timeout_type:
            msg += f" ({timeout_type} timeout"
            if timeout:
                msg += f": {timeout}s"
            msg += ")"

        super().__init__(msg, url)

class ConnectionError(NetworkError):
    """
    Ошибка подключения.

    Примеры:
    - Connection refused
    - Connection reset
    - Network unreachable
    """
    pass

class ProxyError(NetworkError):
    """Ошибка прокси."""
    pass

class ResponseTooLargeError(TransportError):
    """
    Ответ больше SecurityConfig.max_response_size.

    Args:
        size: Размер ответа (bytes)
        max_size: Максимально допустимый размер
        url: URL
    """
    fatal = True

    def __init__(self, size: int, max_size: int, url: str):
        self.size = size
        self.max_size = max_size
        super().__init__(f"Response too large: {size} bytes (max: {max_size})", url)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# СПЕЦИАЛЬНЫЕ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

class ConfigurationError(HTTPOrchestratorError):
    """Ошибка конфигурации."""
    fatal = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# УТИЛИТЫ
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def classify_requests_exception(
    exc: Exception,
    url: str
) -> HTTPOrchestratorError:
    """
    Конвертировать requests.exceptions в наши исключения.

    Args:
        exc: Исключение из requests
        url: URL запроса

    Returns:
        Наше исключение с правильной классификацией

    Examples:
        >>> exc = requests.exceptions.ConnectTimeout()
        >>> our_exc = classify_requests_exception(exc, "https://example.com")
        >>> assert isinstance(our_exc, TimeoutError)
        >>> assert our_exc.timeout_type == "connect"
    """
    if isinstance(exc, requests.exceptions.ConnectTimeout):
        return TimeoutError("Request timeout", url, timeout_type="connect")

    elif isinstance(exc, requests.exceptions.Timeout):
        return TimeoutError("Request timeout", url, timeout_type="read")

    elif isinstance(exc, requests.exceptions.ProxyError):
        return ProxyError("Proxy error", url)

    elif isinstance(exc, requests.exceptions.ConnectionError):
        return ConnectionError("Connection error", url)

    else:
        return TransportError(f"Transport failure: {exc}", url)
