# Shaft schematic drawing engine

__version__ = "0.1.0"
