"""
Clients for third-party HTTP APIs.

Only thin request/response translation lives here; failures are raised
as ``ExternalServiceError`` so callers never see transport exceptions.
"""
