# storyhub/core/__init__.py
"""
Core application modules.
Contains essential infrastructure components:
- bootstrap: Default admin creation on first startup
- db: Embedded store lifecycle and transactions
- errors: Typed errors surfaced to HTTP and realtime callers
- pubsub: In-memory room membership and fan-out over connection outboxes
- security: Password hashing and session token signing
"""
