"""
Shared utilities for the image upload gateway.

This package aggregates common building blocks consumed by services:

- config: Service configuration via pydantic-settings
- logging: Structured logging with correlation context
- metrics: Prometheus metrics helpers
- errors: Classified gateway errors and their wire response
- base_service: FastAPI service shell (CORS, timing, health, metrics)

Do not import from service packages into shared/.
"""
