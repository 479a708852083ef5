"""
Authentication helpers for the library-proxied Ethnologue mirror.

Two mechanisms, both applied per page by the request handler:

- ``apply_cookie``: attach a pre-obtained session cookie to the loaded URL.
- ``await_manual_login``: when the proxy bounces to its login host, wait
  for a human to finish logging in inside the visible browser.
"""

from .cookies import apply_cookie
from .manual_login import await_manual_login, is_login_redirect

__all__ = [
    'apply_cookie',
    'await_manual_login',
    'is_login_redirect',
]
