from payrelay.routes.payment import router as payment_router

__all__ = ["payment_router"]
