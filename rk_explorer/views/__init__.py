from .stability_view import StabilityRegionView
from .coefficients_view import CoefficientsView

__all__ = ["StabilityRegionView", "CoefficientsView"]
