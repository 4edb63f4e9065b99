"""HTTP primitives — immutable request, chainable response, cookies, forms."""
