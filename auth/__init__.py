"""
auth: User authentication module.

Provides:
  • JWT session token creation & verification (PyJWT, HMAC)
  • Password hashing (bcrypt)
  • Register / Login service and API routes
  • ``get_current_user_id`` FastAPI dependency
"""
