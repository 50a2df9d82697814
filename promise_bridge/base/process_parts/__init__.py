"""Process parts package (one class per module)."""

from .external_process import ExternalProcess
from .popen_process import PopenProcess

__all__ = ["ExternalProcess", "PopenProcess"]
