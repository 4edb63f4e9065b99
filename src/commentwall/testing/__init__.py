"""Test utilities for commentwall applications.

    from commentwall.testing import TestClient, extract_cookie
"""

from commentwall.testing.client import TestClient, extract_cookie

__all__ = ["TestClient", "extract_cookie"]
