"""
Caller identity

Authentication happens at the gateway, which forwards the authenticated user
id in the `X-User-Id` header. Ownership and participation checks live in the
use cases.
"""

from fastapi import Header
from opentelemetry import trace


async def get_current_user_id(x_user_id: int = Header(..., gt=0)) -> int:
    trace.get_current_span().set_attribute('user.id', x_user_id)
    return x_user_id
