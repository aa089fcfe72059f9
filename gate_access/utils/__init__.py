"""Shared helpers for the gate access service."""
