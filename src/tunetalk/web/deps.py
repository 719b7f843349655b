from fastapi import Request

from tunetalk.context import AppServices


def get_services(request: Request) -> AppServices:
    """FastAPI dependency for the application's service container."""
    return request.app.state.services
