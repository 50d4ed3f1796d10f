# Routes package __init__.py - re-exports routers for main.py convenience
from .vocab import router as vocab_router
from .drills import router as drills_router
from .plan import router as plan_router

__all__ = ['vocab_router', 'drills_router', 'plan_router']
