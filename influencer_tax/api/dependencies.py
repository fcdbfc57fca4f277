"""Dependency injection for FastAPI endpoints"""

from dataclasses import dataclass
from typing import Optional
from fastapi import Header, Request
from influencer_tax.config import Settings, settings


@dataclass
class Actor:
    """Officer performing a request, as reported by the upstream auth layer"""

    user_id: Optional[str] = None
    user_name: Optional[str] = None


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_settings() -> Settings:
    """Provide application settings"""
    return settings


def get_actor(
    x_user_id: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
) -> Actor:
    """Identify the acting officer from forwarded headers, if present"""
    return Actor(user_id=x_user_id, user_name=x_user_name)
