"""Core module for the opportunity scanner."""

from .models import PriceChange, Candidate, ScanResult
from .enums import CandidateSource, DedupPolicy

__all__ = [
    "PriceChange",
    "Candidate",
    "ScanResult",
    "CandidateSource",
    "DedupPolicy",
]
