"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: providers/__init__.py.
"""

from .contracts import ProviderClient
from .http import API_KEY_HEADER, HTTPProviderClient
from .wire import GenerateRequestBody, GenerateResponseBody

__all__ = [
    "ProviderClient",
    "HTTPProviderClient",
    "API_KEY_HEADER",
    "GenerateRequestBody",
    "GenerateResponseBody",
]
