from .authorization import AuthorizationMiddleware, require

__all__ = ["AuthorizationMiddleware", "require"]
