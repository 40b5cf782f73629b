from .codec import decode_frame, encode_frame
from .heartbeat import HeartbeatMonitor
from .scheduler import LoopScheduler
from .connection import ConnectionManager

__all__ = ["ConnectionManager", "HeartbeatMonitor", "LoopScheduler", "decode_frame", "encode_frame"]
