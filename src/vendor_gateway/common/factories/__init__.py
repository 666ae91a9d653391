"""
Factories Module - Adapter Creation
===================================

Provides a registry-driven factory for creating adapters by provider key.
"""

from vendor_gateway.common.factories.adapter_factory import (
    AdapterBuildContext,
    AdapterFactory,
)

__all__ = [
    "AdapterBuildContext",
    "AdapterFactory",
]
