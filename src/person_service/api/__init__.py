"""
Person Service HTTP API

This package provides the HTTP API layer over the in-memory
person store.

Architecture:
- server.py: FastAPI application setup
- models.py: Pydantic request/response models
- config.py: Service configuration management
- locking.py: Reader/writer lock with poisoning
- store.py: In-memory person store
- persons.py: Person CRUD endpoints
- pages.py: Landing page endpoint
- health.py: Health check endpoints
- metrics.py: Request and store metrics
- errors.py: Store error taxonomy and HTTP mapping
"""
