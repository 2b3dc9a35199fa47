from fastapi import Request

from store import EventStore


def get_store(request: Request) -> EventStore:
    """The app-owned EventStore opened in main.lifespan."""
    return request.app.state.store
