"""Exception hierarchy for pkgrank."""

from .base import PkgrankError
from .config import ConfigFileError, ConfigurationError, InvalidConfigError
from .taxonomy import (
    CentralityError,
    ErrorCode,
    GraphError,
    RankError,
)

__all__ = [
    "PkgrankError",
    "ConfigurationError",
    "ConfigFileError",
    "InvalidConfigError",
    "ErrorCode",
    "RankError",
    "GraphError",
    "CentralityError",
]
