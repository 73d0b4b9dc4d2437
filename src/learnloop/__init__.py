"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Learnloop platform services.
"""

__version__ = "0.1.0"
