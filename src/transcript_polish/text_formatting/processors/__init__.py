"""Entity processors used by the formatting stage."""

from .financial_processor import FinancialProcessor
from .numeric_processor import NumericProcessor
from .percentage_processor import PercentageProcessor
from .temporal_processor import TemporalProcessor
from .web_processor import WebProcessor

__all__ = [
    "FinancialProcessor",
    "NumericProcessor",
    "PercentageProcessor",
    "TemporalProcessor",
    "WebProcessor",
]
