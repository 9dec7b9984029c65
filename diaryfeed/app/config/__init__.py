"""Config package exporting loader helpers."""

from .loader import FeedConfig, Settings, UpstreamConfig, load_settings

__all__ = ["Settings", "FeedConfig", "UpstreamConfig", "load_settings"]
