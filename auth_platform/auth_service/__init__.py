"""
auth_service package

This package contains the core backend logic for the authentication service.
It includes:

- FastAPI application factory (`main.py`) and uvicorn entry point (`server.py`)
- In-memory account store and session registry (`store.py`)
- The sign-up / sign-in / sign-out state machine (`service.py`)
- Credential hashing and session tokens (`auth.py`)
- Pydantic schemas (`schemas.py`)
"""
