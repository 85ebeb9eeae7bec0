"""
epicurves: chart-ready time series for epidemic scenario plots.

This package provides:
- recompute(): merges a simulated trajectory (mean/lower/upper) with sparse
  observed case counts into one sorted, timestamp-unique series
- DomainSummary / MitigationInterval clamping for axis and overlay bounds
- LinePlotController: cached recomputation driven by metric toggles
- Logging utilities for library and application use

For logging configuration in standalone scripts:
    ```python
    from epicurves.utils.logging import configure_logging
    configure_logging(level="DEBUG")
    ```
"""

import logging

from epicurves.utils.logging import configure_logging, get_logger

from epicurves.line_plot import (
    LinePlotController,
    LinePlotInputs,
    LinePlotResult,
    LinePlotState,
    ScaleMode,
    recompute,
)

# NullHandler so logs don't reach the root logger until an application
# configures logging (or a script calls configure_logging()).
_logger = logging.getLogger("epicurves")
if not _logger.handlers:
    _logger.addHandler(logging.NullHandler())

__all__ = [
    "LinePlotController",
    "LinePlotInputs",
    "LinePlotResult",
    "LinePlotState",
    "ScaleMode",
    "configure_logging",
    "get_logger",
    "recompute",
]

__version__ = "0.1.0"
