from .forwarder import EventForwarder

__all__ = ["EventForwarder"]
