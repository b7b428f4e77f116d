"""BrandHub: multi-tenant brand directory with subscription-gated writes."""

__version__ = "1.0.0"
