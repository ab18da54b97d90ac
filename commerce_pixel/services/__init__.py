"""
Application services layer.

Provides the dispatcher, the subscription registry and the service that
wires lifecycle events through the mapping core to the sink.
"""

from .analytics import Analytics
from .dispatcher import Dispatcher, isolate_faults
from .pixel_service import PixelService

__all__ = ["Analytics", "Dispatcher", "PixelService", "isolate_faults"]
