from .login import LoginUseCase

__all__ = ["LoginUseCase"]
