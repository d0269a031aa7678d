"""
User authentication module.

Provides:
  • Password hashing (bcrypt)
  • JWT issuance (``TokenIssuer``) and verification (``AuthGuard``)
  • Register / Login orchestration and API routes
  • ``get_current_claims`` FastAPI dependency
"""
