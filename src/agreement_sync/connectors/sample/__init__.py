"""Fixed demo agreements served when the live agreement fetch fails."""

from .connector import SampleConnector
from .data import SAMPLE_AGREEMENTS, sample_agreements

__all__ = ["SAMPLE_AGREEMENTS", "SampleConnector", "sample_agreements"]
