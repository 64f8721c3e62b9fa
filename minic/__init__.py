"""IR types and values, ARM32 instruction sequences, register allocation and syntax trees."""

__version__ = "1.0.1"