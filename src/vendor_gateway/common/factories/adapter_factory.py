"""
Adapter Factory
===============

Creates adapters by provider key from a shared build context.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from vendor_gateway.infrastructure.ports.system import IClock, ISleeper
from vendor_gateway.ingestion.adapters.base import BaseVendorAdapter
from vendor_gateway.ingestion.config.value_objects import YahooFinanceConfig
from vendor_gateway.ingestion.ports.http import IHttpClient

AdapterBuilder = Callable[..., BaseVendorAdapter]


@dataclass(frozen=True)
class AdapterBuildContext:
    """Shared collaborators handed to every adapter builder."""

    http_client: IHttpClient
    clock: IClock
    sleeper: ISleeper
    yahoo_config: YahooFinanceConfig


class AdapterFactory:
    """Registry-driven factory for adapters."""

    def __init__(self) -> None:
        self._registry: dict[str, AdapterBuilder] = {}

    def register(self, provider: str, builder: AdapterBuilder) -> None:
        self._registry[provider] = builder

    def create(self, provider: str, *args: Any, **kwargs: Any) -> BaseVendorAdapter:
        if provider not in self._registry:
            raise ValueError(f"No adapter registered for provider {provider}")
        return self._registry[provider](*args, **kwargs)

    def available_providers(self) -> list[str]:
        return list(self._registry.keys())
