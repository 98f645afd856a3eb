"""Turn-based terminal boss fight with abilities, items and buffs."""

__version__ = "0.1.0"
__all__ = ["__version__"]