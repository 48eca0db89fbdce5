"""Default configuration parameters for the price ticker."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EndpointParams:
    """Price endpoint parameters."""
    url: str = "https://api.coingecko.com/api/v3/simple/price?ids=bitcoin&vs_currencies=usd"
    price_path: tuple[str, ...] = ("bitcoin", "usd")  # Nested field holding the price
    connect_timeout: float = 5.0
    read_timeout: float = 5.0
    user_agent: str = "price-ticker/0.1"


@dataclass(frozen=True)
class RetryParams:
    """Retry budget and backoff per failure class (seconds)."""
    max_attempts: int = 3
    transport_backoff: float = 5.0                   # No response at all
    rate_limit_backoff: float = 10.0                 # HTTP 429
    server_error_backoff: float = 5.0                # HTTP 5xx


@dataclass(frozen=True)
class ScheduleParams:
    """Poll cadence."""
    interval_ticks: int = 60                         # Ticks between two fetches
    tick_seconds: float = 1.0                        # Length of one tick


@dataclass(frozen=True)
class ShutdownParams:
    """Shutdown triggers."""
    quit_command: str = "q"
    keyboard_enabled: bool = True
    signals: tuple[str, ...] = ("SIGINT", "SIGTERM")
    join_timeout: float = 1.0                        # Bounded join of the stdin listener


@dataclass(frozen=True)
class DisplayParams:
    """Console presentation parameters."""
    asset_label: str = "Bitcoin"
    currency_symbol: str = "$"
    time_format: str = "%m/%d/%Y at %I:%M %p"
    clear_screen: bool = True
    progress_width: int = 30


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters."""
    level: str = "WARNING"
    format_json: bool = False


@dataclass(frozen=True)
class TickerConfig:
    """Complete ticker configuration."""
    endpoint: EndpointParams
    retry: RetryParams
    schedule: ScheduleParams
    shutdown: ShutdownParams
    display: DisplayParams
    logging: LoggingParams


def get_default_config() -> TickerConfig:
    """Get the default configuration instance."""
    return TickerConfig(
        endpoint=EndpointParams(),
        retry=RetryParams(),
        schedule=ScheduleParams(),
        shutdown=ShutdownParams(),
        display=DisplayParams(),
        logging=LoggingParams(),
    )
