from fastapi import APIRouter

from .module import RestModule, register_modules


def build_api_router() -> APIRouter:
    from .modules import ALL_MODULES

    return register_modules(APIRouter(), ALL_MODULES)


__all__ = ["RestModule", "build_api_router", "register_modules"]
