"""JBIG2 encoding primitives: QM arithmetic coder, generic and refinement region coding, symbol comparator and encoder option parsing."""

__version__ = "0.1.1"

__all__ = ["__version__"]