"""
tuplegen

Generates a bounded family of fixed-arity, immutable, generic tuple types as
Python source: abstract contracts ``Tuple0`` .. ``TupleN`` in one module and
their concrete implementations (``Single``, ``Duad``, ``Triad``, ...) in another.
"""

__version__ = "0.1.0"
