from .stencil_config import StencilConfigExtractor

__all__ = ["StencilConfigExtractor"]
