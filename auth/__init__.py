"""
auth — User authentication module.

Provides:
  • JWT token creation & verification (``auth.tokens``)
  • Password hashing with bcrypt (``auth.password``)
  • Login / refresh API routes
  • ``require_user`` FastAPI dependency
  • The error taxonomy shared by the user routes (``auth.errors``)
"""
