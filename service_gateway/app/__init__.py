"""
Image upload gateway service package.

The gateway validates inbound image payloads and forwards them, tagged with
the caller's correlation id, to the downstream services:
- storage-write: receives upload metadata
- save-image: receives image URLs

Structure:
- app.main: FastAPI app, route mounting and service wiring.
- app.adapters: HTTP clients for downstream services.
- app.domain: Payload models, validation, route table, response shapes.
"""
