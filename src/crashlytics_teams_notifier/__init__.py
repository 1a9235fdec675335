"""Crashlytics Teams Notifier - Forward Crashlytics alerts to Microsoft Teams."""

__version__ = "0.1.0"
