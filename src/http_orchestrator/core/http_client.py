# src/http_orchestrator/core/http_client.py
import json as _json
import time
from typing import Any, List, Optional
from urllib.parse import urlsplit

from ..cookies.cookie import Cookie
from ..cookies.jar import CookieJar
from ..plugins.plugin import Plugin
from ..transport.base import Transport
from .config import ClientConfig
from .exceptions import ConfigurationError
from .logging import OrchestratorLogger
from .logging.logger import ROOT_LOGGER_NAME
from .models import HeadersInput, Request, TransportResponse, find_header, normalize_headers
from .redirects import RedirectResolver


class HTTPClient:
    """
    HTTP клиент поверх RedirectResolver.

    Features:
        - Редиректы с лимитом и обнаружением петель
        - Cookie jar, общий для всех запросов клиента
        - Hop-плагины (before_request / after_response / on_error)
        - Immutable конфигурация для потокобезопасности
        - Контекстный менеджер для освобождения соединений

    Example:
        >>> with HTTPClient(base_url="https://api.example.com") as client:
        ...     response = client.get("/users")
        ...     print(response.status_code)

    Cookie jar не синхронизирован: при использовании одного клиента из
    нескольких потоков порядок обновления cookies не гарантируется.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[Transport] = None,
        plugins: Optional[List[Plugin]] = None,
        cookie_jar: Optional[CookieJar] = None,
        **kwargs
    ):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL (игнорируется, если задан config)
            config: ClientConfig instance
            transport: Транспорт (по умолчанию RequestsTransport)
            plugins: List of plugins
            cookie_jar: Внешний jar (по умолчанию новый, если cookies включены)
            **kwargs: Параметры для ClientConfig.create
        """
        if config is None:
            config = ClientConfig.create(base_url=base_url, **kwargs)

        if transport is None:
            # Lazy import: requests нужен только реальному транспорту
            from ..transport.requests_transport import RequestsTransport
            transport = RequestsTransport(config)

        if cookie_jar is None and config.cookies.enabled:
            cookie_jar = CookieJar()

        object.__setattr__(self, '_config', config)
        object.__setattr__(self, '_transport', transport)
        object.__setattr__(self, '_cookie_jar', cookie_jar)
        object.__setattr__(self, '_plugins', [])
        object.__setattr__(self, '_logger', OrchestratorLogger(config.logging, self._logger_name(config)))

        for plugin in plugins or []:
            self.add_plugin(plugin)

        object.__setattr__(self, '_initialized', True)

    @staticmethod
    def _logger_name(config: ClientConfig) -> str:
        if config.logging is None or not config.base_url:
            return ROOT_LOGGER_NAME
        netloc = urlsplit(config.base_url).netloc
        return f"{ROOT_LOGGER_NAME}.{netloc}" if netloc else ROOT_LOGGER_NAME

    def __setattr__(self, name, value):
        """Запретить изменение после init (immutability)."""
        if hasattr(self, '_initialized'):
            raise RuntimeError(
                f"Cannot modify '{name}' - HTTPClient is immutable. "
                f"Create new instance instead."
            )
        object.__setattr__(self, name, value)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ==================== Управление жизненным циклом ====================

    def close(self):
        """
        Закрывает транспорт и handlers логгера.

        Cleanup order:
            1. Logger handlers (flush and close file descriptors)
            2. Transport connections
        """
        self._logger.close()
        self._transport.close()

    # ==================== Управление плагинами ====================

    def add_plugin(self, plugin: Plugin):
        """
        Добавляет плагин. Плагины хранятся отсортированными по priority,
        при равном приоритете сохраняется порядок добавления.
        """
        self._plugins.append(plugin)
        self._plugins.sort(key=lambda p: p.priority)

    def remove_plugin(self, plugin: Plugin):
        if plugin in self._plugins:
            self._plugins.remove(plugin)

    @property
    def plugins(self) -> List[Plugin]:
        return list(self._plugins)

    # ==================== Управление куками ====================

    @property
    def cookies(self) -> Optional[CookieJar]:
        """Cookie jar клиента (None, если cookies отключены)."""
        return self._cookie_jar

    def set_cookie(self, set_cookie_value: str) -> Cookie:
        """
        Добавить cookie в jar в формате Set-Cookie.

        Example:
            >>> client.set_cookie("session=abc; Domain=example.com; Path=/")

        Raises:
            ConfigurationError: Cookies отключены в конфигурации
            InvalidCookieError: Значение не разбирается
        """
        if self._cookie_jar is None:
            raise ConfigurationError("Cookies are disabled for this client")
        return self._cookie_jar.set_cookie(set_cookie_value)

    def clear_cookies(self):
        if self._cookie_jar is not None:
            self._cookie_jar.clear()

    # ==================== Запросы ====================

    def _build_url(self, endpoint: str) -> str:
        """
        Строит полный URL из base_url и endpoint.

        Args:
            endpoint: Endpoint запроса

        Returns:
            Полный URL
        """
        # Если endpoint - абсолютный URL, используем его как есть
        if endpoint.startswith(("http://", "https://")):
            return endpoint

        endpoint = endpoint.lstrip("/")

        base = self._config.base_url
        if base:
            return f"{base.rstrip('/')}/{endpoint}"
        return endpoint

    def _build_request(
        self,
        method: str,
        endpoint: str,
        headers: HeadersInput = None,
        body: Optional[bytes] = None,
        json: Any = None,
    ) -> Request:
        pairs = normalize_headers(headers)
        explicit = {name.lower() for name, _ in pairs}
        defaults = [(k, v) for k, v in self._config.headers.items() if k.lower() not in explicit]
        pairs = defaults + pairs

        if json is not None:
            if body is not None:
                raise ValueError("Pass either body or json, not both")
            body = _json.dumps(json).encode("utf-8")
            if find_header(pairs, "Content-Type") is None:
                pairs.append(("Content-Type", "application/json"))

        return Request(method, self._build_url(endpoint), pairs, body)

    def send(self, request: Request) -> TransportResponse:
        """
        Отправить готовый Request через RedirectResolver.

        Returns:
            Финальный ответ цепочки; вызывающий закрывает его (или использует
            как context manager)
        """
        resolver = RedirectResolver(
            self._transport,
            self._config.redirects,
            cookie_jar=self._cookie_jar,
            plugins=self._plugins,
            logger=self._logger,
            timeout=self._config.timeout,
        )

        start_time = time.time()
        try:
            response = resolver.send(request)
        except Exception as e:
            self._logger.error(
                "Request failed",
                method=request.method,
                url=request.url,
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.time() - start_time) * 1000, 2),
            )
            raise

        self._logger.info(
            "Request completed",
            method=request.method,
            url=request.url,
            final_url=response.url,
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            response_size=len(response.body),
        )
        return response

    def request(
        self,
        method: str,
        endpoint: str,
        headers: HeadersInput = None,
        body: Optional[bytes] = None,
        json: Any = None,
    ) -> TransportResponse:
        """
        Выполняет запрос.

        Args:
            method: HTTP метод
            endpoint: Endpoint или полный URL
            headers: Заголовки запроса (перекрывают config.headers)
            body: Тело запроса (bytes или str)
            json: Объект для JSON-тела (выставляет Content-Type)
        """
        return self.send(self._build_request(method, endpoint, headers, body, json))

    def get(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        """Выполняет GET запрос."""
        return self.request("GET", endpoint, **kwargs)

    def post(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        """Выполняет POST запрос."""
        return self.request("POST", endpoint, **kwargs)

    def put(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        return self.request("PUT", endpoint, **kwargs)

    def patch(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        return self.request("PATCH", endpoint, **kwargs)

    def delete(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        return self.request("DELETE", endpoint, **kwargs)

    def head(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        return self.request("HEAD", endpoint, **kwargs)

    def options(self, endpoint: str, **kwargs: Any) -> TransportResponse:
        return self.request("OPTIONS", endpoint, **kwargs)

    # ==================== Свойства ====================

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def transport(self) -> Transport:
        return self._transport

    @property
    def base_url(self) -> Optional[str]:
        """Base URL (read-only)."""
        return self._config.base_url
