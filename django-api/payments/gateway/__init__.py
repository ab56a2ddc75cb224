from payments.gateway.interfaces import PaymentGateway
from payments.gateway.xendit import XenditGateway

__all__ = ["PaymentGateway", "XenditGateway"]
