"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from cashflow_gateway.config import Settings, settings
from cashflow_gateway.infrastructure.clients.backend import BackendClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_backend_client() -> BackendClient:
    """Provide backend API client instance"""
    return BackendClient()
