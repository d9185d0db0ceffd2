"""
FastAPI application for the tasklist service.

API Endpoints:
- GET /api/tasks - List tasks
- POST /api/tasks - Create a task
- PUT /api/tasks/{id} - Update a task
- DELETE /api/tasks/{id} - Delete a task
- GET /health - Health check

Usage:
    # Run the server
    tasklist serve

    # Or with uvicorn directly
    uvicorn tasklist.core.api.app:create_app --factory --reload
"""

from tasklist.core.api.app import create_app

__all__ = ["create_app"]
