"""OpenAPI schema customization for the LibraryMan Backend API."""

from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from libraryman.models.errors import ProblemDetail

PROBLEM_RESPONSES: dict[str, str] = {
    "400": "Bad Request",
    "404": "Not Found",
    "409": "Conflict",
    "422": "Validation Error",
    "500": "Internal Server Error",
}


def custom_openapi(app: FastAPI) -> dict[str, Any]:
    """Generate customized OpenAPI schema for the API.

    Args:
        app: The FastAPI application instance.

    Returns:
        Customized OpenAPI schema dictionary.
    """
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title="LibraryMan Backend API",
        version=app.version,
        description="""
# LibraryMan Backend API

Member lifecycle and credential management for the LibraryMan library system.

## Features

- **Member accounts**: paginated listing, lookup, creation, profile update, deletion
- **Credentials**: salted PBKDF2 password hashes, verified password changes
- **Deletion guard**: members with unpaid fines or borrowed books cannot be removed
- **Notifications**: account created/updated/deleted events (log or webhook)
- **Newsletter**: subscribe and signed-token unsubscribe

## API Endpoints

### Members
- `GET /api/members` - Page of members (`page`, `size`, `sort_by`, `sort_dir`)
- `GET /api/members/{member_id}` - Single member
- `POST /api/members` - Create member
- `PUT /api/members/{member_id}` - Update name, username and email
- `DELETE /api/members/{member_id}` - Delete member
- `PUT /api/members/{member_id}/password` - Change password

### Newsletter
- `POST /api/newsletter/subscribe?email=` - Subscribe
- `GET /api/newsletter/unsubscribe?token=` - Unsubscribe

## Error Handling

All errors follow [RFC 7807 Problem Details](https://datatracker.ietf.org/doc/html/rfc7807) format:

```json
{
  "type": "https://datatracker.ietf.org/doc/html/rfc7231#section-6.5.8",
  "title": "Deletion Blocked",
  "status": 409,
  "detail": "Cannot delete member due to unpaid fines or borrowed books",
  "instance": "/api/members/42"
}
```
        """,
        routes=app.routes,
        license_info={
            "name": "MIT License",
            "url": "https://opensource.org/licenses/MIT",
        },
    )

    openapi_schema["tags"] = [
        {"name": "Health", "description": "Health check endpoints for monitoring"},
        {"name": "members", "description": "Member accounts and passwords"},
        {"name": "newsletter", "description": "Newsletter subscriptions"},
    ]

    # Register ProblemDetail (and its nested models) as components
    schemas = openapi_schema.setdefault("components", {}).setdefault("schemas", {})
    problem_schema = ProblemDetail.model_json_schema(
        ref_template="#/components/schemas/{model}"
    )
    schemas.update(problem_schema.pop("$defs", {}))
    schemas["ProblemDetail"] = problem_schema

    problem_content = {
        "application/json": {"schema": {"$ref": "#/components/schemas/ProblemDetail"}}
    }
    for path in openapi_schema["paths"].values():
        for operation in path.values():
            if isinstance(operation, dict) and "responses" in operation:
                for code, description in PROBLEM_RESPONSES.items():
                    if code == "422" or code not in operation["responses"]:
                        operation["responses"][code] = {
                            "description": description,
                            "content": problem_content,
                        }

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def configure_openapi(app: FastAPI) -> None:
    """Configure the FastAPI app to use custom OpenAPI schema.

    Args:
        app: The FastAPI application instance.
    """
    app.openapi = lambda: custom_openapi(app)  # type: ignore[method-assign]
