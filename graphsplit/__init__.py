"""Graph and mesh I/O, vertex-separator refinement and fill-in computation."""

__version__ = "0.1.0"