"""Logging facade shared by all connector layers."""

from .logger import Log

__all__ = ["Log"]
