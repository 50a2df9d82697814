"""External process public surface used by the polling waiter."""

from .process_parts.external_process import ExternalProcess
from .process_parts.popen_process import PopenProcess

__all__ = ["ExternalProcess", "PopenProcess"]
