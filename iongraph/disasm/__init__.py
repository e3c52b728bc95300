"""
Ion MIR disassembler.

Turns the ``ion.json`` debug log of a JIT compiler's optimization pipeline
into aligned text:

  Graph for Function: f
    After Ion Phase p1
        Block#0
            0: mov      r1 r2      "Int32"
            Successor: Block#1
"""

from . import core as _core
from . import loader as _loader
from . import formatter as _formatter
from . import analysis as _analysis
from .cli import main, parse_args

from .core import *
from .loader import *
from .formatter import *
from .analysis import *

__all__ = []
for module in (_core, _loader, _formatter, _analysis):
    __all__.extend(getattr(module, '__all__', []))
__all__ += ['main', 'parse_args']
__all__ = list(dict.fromkeys(__all__))
