"""Shared utilities for the XML editor.

This module provides the configuration objects, result types and logging
helpers used across all processing layers.
"""

from .config import (
    FIRST_REPLACEMENT_BYTE,
    MAX_DICTIONARY_ENTRIES,
    CodecConfig,
    ConfigError,
    ConfigValidationError,
    EditorConfig,
    FormatterConfig,
    GlobalConfig,
    GraphConfig,
    JsonConfig,
    MinifierConfig,
    VerifierConfig,
)
from .logging import (
    CorrelationLogger,
    configure_logging,
    get_logger,
)
from .result import (
    DiagnosticEntry,
    DiagnosticSeverity,
    OperationResult,
    PerformanceMetrics,
    ResultKind,
)

__all__ = [
    "FIRST_REPLACEMENT_BYTE",
    "MAX_DICTIONARY_ENTRIES",
    "CodecConfig",
    "ConfigError",
    "ConfigValidationError",
    "EditorConfig",
    "FormatterConfig",
    "GlobalConfig",
    "GraphConfig",
    "JsonConfig",
    "MinifierConfig",
    "VerifierConfig",
    "CorrelationLogger",
    "configure_logging",
    "get_logger",
    "DiagnosticEntry",
    "DiagnosticSeverity",
    "OperationResult",
    "PerformanceMetrics",
    "ResultKind",
]
