"""Storefront composer: block registry, theme cascade, renderer and layout persistence."""
