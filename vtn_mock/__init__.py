"""Mock OpenADR 3 VTN for exercising VEN client implementations."""

__version__ = "0.1.0"
