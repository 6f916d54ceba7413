"""Sogou cell dictionary (.scel) to text conversion package."""

from .models import ConversionOutcome, ConvertOptions, OutputRecord, ScelHeader

__all__ = ["ScelHeader", "OutputRecord", "ConvertOptions", "ConversionOutcome"]
