"""Pytest configuration and shared fixtures."""

import copy
import json
from pathlib import Path
from typing import Any, Callable, Dict

import pytest
import yaml

from swagger_explorer.server.api_explorer import ApiExplorer
from swagger_explorer.storage.registry import SpecificationRegistry


PETSTORE_SPEC: Dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {
        "title": "Swagger Petstore",
        "version": "1.0.17",
        "description": "A sample pet store server",
    },
    "servers": [{"url": "https://petstore3.swagger.io/api/v3"}],
    "paths": {
        "/pet": {
            "put": {
                "summary": "Update an existing pet",
                "operationId": "updatePet",
                "tags": ["pet"],
                "requestBody": {
                    "description": "Update an existent pet in the store",
                    "required": True,
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    },
                },
                "responses": {
                    "200": {"description": "Successful operation"},
                    "404": {"description": "Pet not found"},
                },
            },
            "post": {
                "summary": "Add a new pet to the store",
                "operationId": "addPet",
                "tags": ["pet"],
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {"$ref": "#/components/schemas/Pet"}
                        }
                    },
                },
                "responses": {
                    "200": {"description": "Successful operation"},
                    "405": {"description": "Invalid input"},
                },
            },
        },
        "/pet/findByStatus": {
            "get": {
                "summary": "Finds Pets by status",
                "description": "Multiple status values can be provided with comma separated strings",
                "operationId": "findPetsByStatus",
                "tags": ["pet"],
                "parameters": [
                    {
                        "name": "status",
                        "in": "query",
                        "description": "Status values that need to be considered for filter",
                        "required": False,
                        "schema": {"type": "string", "default": "available"},
                    }
                ],
                "responses": {
                    "200": {
                        "description": "successful operation",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "array",
                                    "items": {"$ref": "#/components/schemas/Pet"},
                                }
                            }
                        },
                    },
                    "400": {"description": "Invalid status value"},
                },
            }
        },
        "/pet/{petId}": {
            "get": {
                "summary": "Find pet by ID",
                "description": "Returns a single pet",
                "operationId": "getPetById",
                "tags": ["pet"],
                "parameters": [
                    {
                        "name": "petId",
                        "in": "path",
                        "description": "ID of pet to return",
                        "required": True,
                        "schema": {"type": "integer", "format": "int64"},
                        "example": 10,
                    }
                ],
                "responses": {
                    "200": {
                        "description": "successful operation",
                        "content": {
                            "application/json": {
                                "schema": {"$ref": "#/components/schemas/Pet"}
                            }
                        },
                    },
                    "400": {"description": "Invalid ID supplied"},
                    "404": {"description": "Pet not found"},
                },
            },
            "delete": {
                "description": "Deletes a pet",
                "operationId": "deletePet",
                "parameters": [
                    {
                        "name": "api_key",
                        "in": "header",
                        "required": False,
                        "schema": {"type": "string"},
                    },
                    {
                        "name": "petId",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    },
                ],
                "responses": {"400": {"description": "Invalid pet value"}},
            },
        },
        "/store/inventory": {
            "get": {
                "summary": "Returns pet inventories by status",
                "operationId": "getInventory",
                "responses": {
                    "200": {
                        "description": "successful operation",
                        "headers": {
                            "X-Rate-Limit": {"schema": {"type": "integer"}}
                        },
                    }
                },
            }
        },
    },
    "components": {
        "schemas": {
            "Category": {
                "type": "object",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                },
            },
            "Pet": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string", "example": "doggie"},
                    "category": {"$ref": "#/components/schemas/Category"},
                    "status": {
                        "type": "string",
                        "enum": ["available", "pending", "sold"],
                    },
                },
            },
        }
    },
}


MINIMAL_PETSTORE_SPEC: Dict[str, Any] = {
    "openapi": "3.0.0",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/pet/{petId}": {
            "get": {
                "summary": "Find pet by ID",
                "parameters": [
                    {
                        "name": "petId",
                        "in": "path",
                        "required": True,
                        "schema": {"type": "integer"},
                    }
                ],
                "responses": {"200": {"description": "successful operation"}},
            }
        }
    },
}


@pytest.fixture
def petstore_spec() -> Dict[str, Any]:
    """A petstore-style OpenAPI 3.0 document with internal $refs."""
    return copy.deepcopy(PETSTORE_SPEC)


@pytest.fixture
def minimal_petstore_spec() -> Dict[str, Any]:
    """A document defining only GET /pet/{petId}."""
    return copy.deepcopy(MINIMAL_PETSTORE_SPEC)


@pytest.fixture
def write_spec(tmp_path: Path) -> Callable[..., str]:
    """Write a document to a temporary JSON or YAML file and return its path."""

    def _write(
        document: Dict[str, Any], name: str = "openapi.json"
    ) -> str:
        path = tmp_path / name
        if path.suffix in (".yaml", ".yml"):
            path.write_text(yaml.safe_dump(document, sort_keys=False))
        else:
            path.write_text(json.dumps(document))
        return str(path)

    return _write


@pytest.fixture
def registry() -> SpecificationRegistry:
    return SpecificationRegistry()


@pytest.fixture
def explorer(registry: SpecificationRegistry) -> ApiExplorer:
    """Explorer with a fresh, empty registry."""
    return ApiExplorer(registry=registry)
