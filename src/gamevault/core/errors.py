# ===== TYPES & INTERFACES =====
from typing import Optional


class GatewayError(Exception):
    """Base class for every failure the gateway reports to a caller."""
    status = 500

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        if status is not None:
            self.status = status


class ValidationError(GatewayError):
    """Malformed or out-of-range request input. Never retried."""
    status = 400


class CredentialsMissing(GatewayError):
    """TWITCH_CLIENT_ID / TWITCH_CLIENT_SECRET are not configured."""

    def __init__(self):
        super().__init__("Missing Twitch credentials: set TWITCH_CLIENT_ID and TWITCH_CLIENT_SECRET in env.")


class TokenRequestFailed(GatewayError):
    """The identity provider rejected the client-credentials exchange."""
    status = 502

    def __init__(self, upstream_status: int, body: str):
        super().__init__(f"Twitch token error: {upstream_status}")
        self.upstream_status = upstream_status
        self.body = body


class UpstreamError(GatewayError):
    """A non-2xx response from IGDB. `body` is kept for logs, never sent to clients."""
    status = 502

    def __init__(self, upstream_status: int, body: str):
        super().__init__(f"IGDB error: {upstream_status}")
        self.upstream_status = upstream_status
        self.body = body


class UpstreamRateLimited(UpstreamError):
    status = 429


class UpstreamServerError(UpstreamError):
    pass


class UpstreamClientError(UpstreamError):
    pass


class TransportError(GatewayError):
    """No HTTP response was received at all."""
    status = 502

    def __init__(self, reason: str):
        super().__init__(f"IGDB unreachable: {reason}")
        self.reason = reason
