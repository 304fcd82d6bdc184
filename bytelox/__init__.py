"""A bytecode compiler and stack virtual machine for Lox arithmetic expressions."""

__version__ = "0.1.0"