"""
Система конфигурации для http-orchestrator.

Все конфиги immutable (frozen dataclasses) для потокобезопасности.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Tuple, Dict, Union, TYPE_CHECKING, Mapping
from types import MappingProxyType

if TYPE_CHECKING:
    from .logging import LoggingConfig

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# TIMEOUT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class TimeoutConfig:
    """
    Конфигурация таймаутов.

    Args:
        connect: Таймаут подключения на один hop (сек)
        read: Таймаут чтения на один hop (сек)
        total: Общий бюджет на всю цепочку редиректов (опционально).
            Проверяется между hop'ами.

    Examples:
        >>> TimeoutConfig(connect=5, read=30)
        >>> TimeoutConfig(connect=3, read=60, total=90)
    """
    connect: float = 5
    read: float = 30
    total: Optional[float] = None

    def __post_init__(self):
        """Валидация."""
        if self.connect <= 0:
            raise ValueError("connect timeout must be positive")
        if self.read <= 0:
            raise ValueError("read timeout must be positive")
        if self.total is not None and self.total <= 0:
            raise ValueError("total timeout must be positive")

    def as_tuple(self) -> Tuple[float, float]:
        """Вернуть как (connect, read) для requests."""
        return (self.connect, self.read)

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# REDIRECT CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class RedirectConfig:
    """
    Политика редиректов.

    Args:
        follow_redirects: Следовать ли 3xx. False = ровно один hop.
        max_redirects: Максимум редиректов в одной цепочке

    Examples:
        >>> RedirectConfig(max_redirects=5)
        >>> RedirectConfig(follow_redirects=False)
    """
    follow_redirects: bool = True
    max_redirects: int = 10

    def __post_init__(self):
        """Валидация."""
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# CONNECTION POOL CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class PoolConfig:
    """
    Конфигурация connection pool для RequestsTransport.

    Args:
        pool_connections: Количество connection pools для кеширования
        pool_maxsize: Максимум соединений в пуле
        pool_block: Блокировать при достижении лимита
    """
    pool_connections: int = 10
    pool_maxsize: int = 10
    pool_block: bool = False

    def __post_init__(self):
        """Валидация."""
        if self.pool_connections <= 0:
            raise ValueError("pool_connections must be positive")
        if self.pool_maxsize <= 0:
            raise ValueError("pool_maxsize must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# SECURITY CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class SecurityConfig:
    """
    Конфигурация безопасности.

    Args:
        verify_ssl: Проверять SSL сертификаты
        max_response_size: Максимальный размер тела одного hop'а (байты)
    """
    verify_ssl: bool = True
    max_response_size: int = 100 * 1024 * 1024  # 100MB

    def __post_init__(self):
        """Валидация."""
        if self.max_response_size <= 0:
            raise ValueError("max_response_size must be positive")

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# COOKIE CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

@dataclass(frozen=True)
class CookieConfig:
    """
    Конфигурация cookie jar.

    Args:
        enabled: Хранить Set-Cookie и отправлять Cookie между hop'ами
    """
    enabled: bool = True

# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━
# MAIN CONFIG
# ━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━━

def _freeze_dict(d: Optional[Mapping[str, str]]) -> Mapping[str, str]:
    """Convert dict to immutable MappingProxyType."""
    if d is None:
        return MappingProxyType({})
    return MappingProxyType(dict(d))

@dataclass(frozen=True)
class ClientConfig:
    """
    Главная конфигурация HTTPClient.

    Args:
        base_url: Базовый URL (опционально)
        headers: Дефолтные заголовки для каждого запроса
        timeout: Таймауты
        redirects: Политика редиректов
        pool: Connection pool
        security: Безопасность
        cookies: Cookie jar
        logging: Конфигурация логирования (None = без handlers)

    Examples:
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> config = ClientConfig.create(timeout=60, max_redirects=5)
    """
    base_url: Optional[str] = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    redirects: RedirectConfig = field(default_factory=RedirectConfig)
    pool: PoolConfig = field(default_factory=PoolConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    cookies: CookieConfig = field(default_factory=CookieConfig)
    logging: Optional['LoggingConfig'] = None

    def __post_init__(self):
        """Normalize base_url and freeze headers."""
        if not isinstance(self.headers, MappingProxyType):
            object.__setattr__(self, 'headers', _freeze_dict(self.headers))

        if self.base_url:
            normalized = self.base_url.rstrip('/')
            if normalized != self.base_url:
                object.__setattr__(self, 'base_url', normalized)

    @classmethod
    def create(
        cls,
        base_url: Optional[str] = None,
        timeout: Union[float, Tuple[float, float], TimeoutConfig] = 30,
        total_timeout: Optional[float] = None,
        follow_redirects: bool = True,
        max_redirects: Optional[int] = None,
        verify_ssl: bool = True,
        headers: Optional[Dict[str, str]] = None,
        cookies: bool = True,
        logging: Optional['LoggingConfig'] = None,
        **kwargs
    ) -> 'ClientConfig':
        """
        Удобный конструктор конфигурации.

        Args:
            base_url: Базовый URL
            timeout: Таймаут (число, (connect, read) или TimeoutConfig)
            total_timeout: Общий бюджет на цепочку редиректов
            follow_redirects: Следовать редиректам
            max_redirects: Лимит редиректов
            verify_ssl: Проверять SSL
            headers: Заголовки
            cookies: Включить cookie jar
            logging: Конфигурация логирования

        Examples:
            >>> config = ClientConfig.create(timeout=(5, 60), max_redirects=3)
        """
        timeout_cfg = _build_timeout(timeout, total_timeout)

        redirect_kwargs = {'follow_redirects': follow_redirects}
        if max_redirects is not None:
            redirect_kwargs['max_redirects'] = max_redirects

        return cls(
            base_url=base_url,
            headers=headers or {},
            timeout=timeout_cfg,
            redirects=RedirectConfig(**redirect_kwargs),
            security=SecurityConfig(verify_ssl=verify_ssl),
            cookies=CookieConfig(enabled=cookies),
            logging=logging,
            **kwargs
        )

    def with_timeout(self, timeout: Union[float, Tuple[float, float], TimeoutConfig]) -> 'ClientConfig':
        """Создать новый конфиг с изменённым timeout."""
        return replace(self, timeout=_build_timeout(timeout, None))

    def with_redirects(self, max_redirects: int, follow_redirects: bool = True) -> 'ClientConfig':
        """
        Создать новый конфиг с другой политикой редиректов.

        Example:
            >>> strict = config.with_redirects(0)  # любой 3xx -> TooManyRedirectsError
        """
        return replace(
            self,
            redirects=RedirectConfig(follow_redirects=follow_redirects, max_redirects=max_redirects),
        )

    def with_headers(self, headers: Dict[str, str]) -> 'ClientConfig':
        """Создать новый конфиг с дополнительными заголовками."""
        merged = dict(self.headers)
        merged.update(headers)
        return replace(self, headers=merged)

def _build_timeout(
    timeout: Union[float, Tuple[float, float], TimeoutConfig],
    total: Optional[float],
) -> TimeoutConfig:
    if isinstance(timeout, TimeoutConfig):
        return timeout
    if isinstance(timeout, tuple):
        return TimeoutConfig(connect=timeout[0], read=timeout[1], total=total)
    return TimeoutConfig(connect=5, read=timeout, total=total)
