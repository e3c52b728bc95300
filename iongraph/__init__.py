"""Public :mod:`iongraph` API."""

from . import constants as _constants
from . import disasm as _disasm
from .constants import *  # noqa: F401,F403
from .disasm import *  # noqa: F401,F403

__all__ = []
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_disasm, "__all__", [])
