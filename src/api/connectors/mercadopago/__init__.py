"""Conector do Mercado Pago (Pix, OAuth e webhook)."""

from .http_client import MercadoPagoClient, create_mercadopago_client

__all__ = ["MercadoPagoClient", "create_mercadopago_client"]
