"""
HTTP bridge - The tool registry as a local JSON API.

Example:
    from hetzner_tools.app import create_app

    app = create_app(HetznerConfig())
    uvicorn.run(app, host="127.0.0.1", port=9200)
"""

from .factory import create_app

__all__ = ["create_app"]
