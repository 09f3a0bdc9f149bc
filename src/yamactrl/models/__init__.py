"""Data models for the receiver status snapshot."""

from yamactrl.models.status import DeviceStatus, Toggle, ToneControl

__all__ = ["DeviceStatus", "Toggle", "ToneControl"]
