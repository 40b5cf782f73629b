from .memory import MemoryWatchdog
from .logging import configure_logging
from .signals import install_signal_handlers
from .settings import load_settings
from .dependencies import build_runtime_deps

__all__ = [
    "MemoryWatchdog",
    "build_runtime_deps",
    "configure_logging",
    "install_signal_handlers",
    "load_settings",
]
