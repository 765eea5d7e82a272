"""MockupForge — FastAPI REST API layer.

This package contains the FastAPI application and the request models of
the auxiliary endpoints.

Modules
-------
main
    FastAPI application factory, route handlers, and the ``main()`` CLI
    entry point.
models
    Pydantic models for request validation.
"""
