"""
Tests for the auth_service package.

- RPC surface through FastAPI's TestClient (`test_auth.py`, `test_dev_monitor.py`)
- Account store, session registry and AuthService (`test_store.py`)
- Concurrent access to the stores (`test_concurrency.py`)
- Auth event logging (`test_event_logger.py`)
"""
