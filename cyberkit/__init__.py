"""CyberKit: offline cybersecurity awareness tools."""

__version__ = "0.1.0"
