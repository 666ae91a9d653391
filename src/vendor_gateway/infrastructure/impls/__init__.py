from vendor_gateway.infrastructure.impls.system import AsyncioSleeper, SystemClock

__all__ = ["SystemClock", "AsyncioSleeper"]
