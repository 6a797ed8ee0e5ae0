"""FastAPI REST API for Themepush.

Example:
    ```python
    import uvicorn
    from themepush.api import create_app

    app = create_app(dispatcher=dispatcher)
    uvicorn.run(app, host="0.0.0.0", port=8000)
    ```

Or run directly:
    ```bash
    uvicorn themepush.api:app --reload
    ```
"""

from .app import app, create_app
from .router import router

__all__ = [
    "app",
    "create_app",
    "router",
]
