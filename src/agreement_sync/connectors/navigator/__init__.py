"""Navigator agreement API connector."""

from .connector import NavigatorConnector

__all__ = ["NavigatorConnector"]
