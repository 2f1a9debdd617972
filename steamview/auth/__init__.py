"""
Authentication helpers for the viewer.

Design goals:
- Steam OpenID 2.0 sign-in; no passwords, no tokens kept.
- Cookie-based session (HttpOnly, signed) holding only the principal record.
- Fail closed: anything that does not verify is treated as anonymous.
"""
