"""
ブートストラップ関連の公開API。
"""

from .config_loader import (
    AppConfigModel,
    LoggingConfigModel,
    MetricsConfigModel,
    MetricsOptionsModel,
    StorageConfigModel,
    YamlConfigLoader,
)
from .container import (
    BootstrapContainer,
    BootstrapContext,
    BootstrapError,
    ConfigBundle,
    InvalidConfigurationError,
    LoggingConfigurator,
    MetricsConfigurator,
    MissingConfigurationError,
)
from .logging_setup import ROOT_LOGGER_NAME, DictConfigLoggingConfigurator, configure_console_logging
from .metrics_setup import (
    MetricsConfiguratorRegistry,
    NoopMetricsConfigurator,
    PrometheusMetricsConfigurator,
    default_metrics_configurator,
)

__all__ = [
    "AppConfigModel",
    "LoggingConfigModel",
    "MetricsConfigModel",
    "MetricsOptionsModel",
    "StorageConfigModel",
    "YamlConfigLoader",
    "BootstrapContainer",
    "BootstrapContext",
    "BootstrapError",
    "ConfigBundle",
    "InvalidConfigurationError",
    "LoggingConfigurator",
    "MetricsConfigurator",
    "MissingConfigurationError",
    "DictConfigLoggingConfigurator",
    "configure_console_logging",
    "ROOT_LOGGER_NAME",
    "MetricsConfiguratorRegistry",
    "NoopMetricsConfigurator",
    "PrometheusMetricsConfigurator",
    "default_metrics_configurator",
]
