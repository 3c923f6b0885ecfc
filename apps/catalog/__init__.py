"""Catalog app package.

Dresses with their categories, colors, sizes and image records, and the
read model (CatalogItem) the cart prices selections from.
"""
