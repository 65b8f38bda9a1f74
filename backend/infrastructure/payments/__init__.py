from .stripe_gateway import StripePaymentGateway

__all__ = ["StripePaymentGateway"]
