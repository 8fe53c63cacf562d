"""Fire and Security Alarm Monitoring (FASAM) terminal dashboard."""

__version__ = "0.1.0"
