"""Use cases de configuracao do profissional."""

from .business_profile import SaveBusinessProfileUseCase
from .connect_gateway import ConnectGatewayUseCase
from .register_push_token import RegisterPushTokenUseCase

__all__ = [
    "ConnectGatewayUseCase",
    "RegisterPushTokenUseCase",
    "SaveBusinessProfileUseCase",
]
