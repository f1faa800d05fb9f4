"""
Corgi Command-Line Interface
============================

This package provides command-line tools for the Corgi toolchain:

- **cglex**: scan a source file and dump its tokens

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["cglex"]
