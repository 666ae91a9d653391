from vendor_gateway.infrastructure.ports.system import IClock, ISleeper

__all__ = ["IClock", "ISleeper"]
