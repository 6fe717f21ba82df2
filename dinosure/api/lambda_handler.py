"""
AWS Lambda handler for the hook host using Mangum (ASGI adapter).

How it works:
- API Gateway invokes Lambda
- Mangum translates the event into an ASGI request
- FastAPI routes it to the matching hook (/quote, /alterations/..., ...)
- Response is returned back to API Gateway

Logging is configured at cold start from DINOSURE_LOG_LEVEL.
"""

from __future__ import annotations

from mangum import Mangum

from dinosure.api.app import app
from dinosure.utils.config import configure_logging

configure_logging()

# Mangum handler
handler = Mangum(app, lifespan="off")
