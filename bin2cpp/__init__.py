"""bin2cpp: embed binary files in C++11 source code."""

__version__ = "0.1.0"
