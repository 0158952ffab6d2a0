"""Storefront CLI: render layouts, browse the block registry, fetch and push layouts."""

__version__ = "0.1.0"
