from .client import GatewayClient, OptionGateway

__all__ = ["GatewayClient", "OptionGateway"]
