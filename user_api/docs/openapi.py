"""Builds a minimal OpenAPI spec from existing Pydantic schemas."""
from __future__ import annotations

from typing import Any, Dict

from flask import request

from ..api.users.schemas import UserCreateIn, UserOut, UserUpdateIn


def _schemas() -> Dict[str, Any]:
    ref = "#/components/schemas/{model}"
    return {
        "UserCreateIn": UserCreateIn.model_json_schema(ref_template=ref),
        "UserUpdateIn": UserUpdateIn.model_json_schema(ref_template=ref),
        "UserOut": UserOut.model_json_schema(ref_template=ref, mode="serialization", by_alias=True),
        "Error": {
            "type": "object",
            "properties": {"error": {"type": "string"}, "message": {"type": "string"}},
        },
    }


def _json(ref: str) -> Dict[str, Any]:
    return {"application/json": {"schema": {"$ref": f"#/components/schemas/{ref}"}}}


def _list_of(ref: str) -> Dict[str, Any]:
    return {"application/json": {"schema": {"type": "array", "items": {"$ref": f"#/components/schemas/{ref}"}}}}


_ERR = {"description": "Error", "content": _json("Error")}
_USER_ID = {"name": "user_id", "in": "path", "required": True, "schema": {"type": "integer"}}


def build_openapi() -> Dict[str, Any]:
    base_url = f"{request.scheme}://{request.host}"
    return {
        "openapi": "3.0.3",
        "info": {"title": "User Management API", "version": "1.0.0"},
        "servers": [{"url": base_url}],
        "tags": [{"name": "Health"}, {"name": "Users"}],
        "paths": {
            "/api/health/": {
                "get": {"tags": ["Health"], "summary": "Liveness probe", "responses": {"200": {"description": "OK"}}}
            },
            "/api/health/db": {
                "get": {
                    "tags": ["Health"], "summary": "Database readiness",
                    "responses": {"200": {"description": "Reachable"}, "503": {"description": "Unreachable"}},
                }
            },
            "/api/users/": {
                "get": {
                    "tags": ["Users"], "summary": "List users",
                    "responses": {"200": {"description": "OK", "content": _list_of("UserOut")}, "500": _ERR},
                },
                "post": {
                    "tags": ["Users"], "summary": "Create user",
                    "requestBody": {"required": True, "content": _json("UserCreateIn")},
                    "responses": {"201": {"description": "Created", "content": _json("UserOut")}, "400": _ERR, "500": _ERR},
                },
            },
            "/api/users/{user_id}": {
                "parameters": [_USER_ID],
                "get": {
                    "tags": ["Users"], "summary": "Get user by id",
                    "responses": {"200": {"description": "OK", "content": _json("UserOut")}, "404": _ERR, "500": _ERR},
                },
                "put": {
                    "tags": ["Users"], "summary": "Update user",
                    "requestBody": {"required": True, "content": _json("UserUpdateIn")},
                    "responses": {
                        "200": {"description": "OK", "content": _json("UserOut")},
                        "400": _ERR, "404": _ERR, "500": _ERR,
                    },
                },
                "delete": {
                    "tags": ["Users"], "summary": "Delete user",
                    "responses": {"200": {"description": "Deleted"}, "404": _ERR, "500": _ERR},
                },
            },
            "/api/users/search": {
                "get": {
                    "tags": ["Users"], "summary": "Search users by name (and optionally email)",
                    "parameters": [
                        {"name": "name", "in": "query", "required": False, "schema": {"type": "string"}},
                        {"name": "email", "in": "query", "required": False, "schema": {"type": "string"}},
                    ],
                    "responses": {"200": {"description": "OK", "content": _list_of("UserOut")}, "500": _ERR},
                }
            },
            "/api/users/count": {
                "get": {
                    "tags": ["Users"], "summary": "Count users",
                    "responses": {
                        "200": {"description": "OK", "content": {"application/json": {"schema": {"type": "integer"}}}},
                        "500": _ERR,
                    },
                }
            },
            "/api/users/recent": {
                "get": {
                    "tags": ["Users"], "summary": "Newest users first",
                    "parameters": [
                        {"name": "limit", "in": "query", "required": False,
                         "schema": {"type": "integer", "minimum": 1, "maximum": 100, "default": 10}},
                    ],
                    "responses": {"200": {"description": "OK", "content": _list_of("UserOut")}, "400": _ERR, "500": _ERR},
                }
            },
        },
        "components": {"schemas": _schemas()},
    }
