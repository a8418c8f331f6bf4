"""RPN calculator on an 18-digit decimal floating-point type, with keypad debouncing and LCD models."""

__version__ = "1.14.0"