from .errors import DecodeFailed, DomainError, GatewayError, OnboardError, RequestFailed, TransportError
from .orchestrator import onboard_model, run_onboarding
from .types import SyncOutcome

__all__ = [
    "onboard_model",
    "run_onboarding",
    "SyncOutcome",
    "OnboardError",
    "GatewayError",
    "TransportError",
    "RequestFailed",
    "DecodeFailed",
    "DomainError",
]
