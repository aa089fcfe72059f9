"""
API layer for the gate access service.

Exposes HTTP endpoints under /api/v1/gate (scan, directory refresh, health).
"""
