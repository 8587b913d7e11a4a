"""
account_service tests

Covers the account service end to end:

- password hashing and token issuance (`security.py`)
- the SQLAlchemy credential store (`repository.py`)
- authentication and user services (`services.py`)
- HTTP routes and startup behaviour (`main.py`, `routes/`)
"""
