"""FastAPI dependencies.

The storage client is created once by the application lifespan (or handed to
create_app by a test) and kept on app.state; routes reach it through
get_storage instead of importing a module-level global.
"""

from fastapi import Request

from notekeeper.storage import StorageClient


def get_storage(request: Request) -> StorageClient:
    """Return the process-wide StorageClient from app.state.

    Raises:
        RuntimeError: If the client was never initialized
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise RuntimeError("StorageClient not initialized. Check lifespan setup.")
    return storage
