from .messages import InMemoryMessageResolver

__all__ = [
    "InMemoryMessageResolver",
]
