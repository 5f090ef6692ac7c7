from .openwhisk import OpenWhiskClient

__all__ = ["OpenWhiskClient"]
