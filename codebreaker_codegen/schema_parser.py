"""Map OpenAPI schemas to Python type hints and Pydantic field metadata.

Handles:
- Path and query parameters, including path-level and $ref parameters
- Request body (JSON)
- Response types (model, list of models, plain value, no content)
- $ref resolution to generated model classes
- allOf/oneOf/anyOf composition
- readOnly detection
- Large integer sanitization (>= 2^53)
- Enum value extraction into descriptions
- Field constraints (length, pattern, bounds)
- Example payloads for generated tests
"""

from __future__ import annotations

import re
from typing import Any

from .loader import ref_name, resolve_ref
from .naming import to_class_name, to_identifier

# Sentinel: integers >= 2^53 are unsafe for JSON serialization
MAX_SAFE_INT = 2**53

_SCHEMA_REF_PREFIX = "#/components/schemas/"

_PRIMITIVES: dict[str, str] = {
    "string": "str",
    "integer": "int",
    "number": "float",
    "boolean": "bool",
}

_DATE_FORMATS: dict[str, str] = {
    "date": "date",
    "date-time": "datetime",
}

# OpenAPI keyword -> pydantic.Field keyword
_CONSTRAINTS: dict[str, str] = {
    "minLength": "min_length",
    "maxLength": "max_length",
    "pattern": "pattern",
    "minimum": "ge",
    "maximum": "le",
    "minItems": "min_length",
    "maxItems": "max_length",
}

_MAX_EXAMPLE_DEPTH = 6


def strip_html(text: str) -> str:
    """Strip HTML tags and collapse whitespace."""
    text = re.sub(r"<[^>]+>", "", text)
    text = re.sub(r"\s+", " ", text).strip()
    return text


def sanitize_default(value: Any) -> Any:
    """Sanitize default values; unsafe large integers become None."""
    if isinstance(value, int) and not isinstance(value, bool) and abs(value) >= MAX_SAFE_INT:
        return None
    return value


def is_model_schema(schema: dict[str, Any]) -> bool:
    """True when a schema describes an object that gets its own class."""
    return (
        schema.get("type") == "object"
        or "properties" in schema
        or "allOf" in schema
    )


def model_ref(spec: dict[str, Any], schema: dict[str, Any]) -> str | None:
    """Class name when the schema is a $ref to an object component schema."""
    ref = schema.get("$ref")
    if not ref or not ref.startswith(_SCHEMA_REF_PREFIX):
        return None
    if is_model_schema(resolve_ref(spec, ref)):
        return to_class_name(ref_name(ref))
    return None


def resolve_schema_type(
    spec: dict[str, Any],
    schema: dict[str, Any],
    date_library: str = "datetime",
) -> str:
    """Resolve an OpenAPI schema to a Python type hint string."""
    if not schema:
        return "Any"

    if "$ref" in schema:
        class_name = model_ref(spec, schema)
        if class_name:
            return class_name
        return resolve_schema_type(spec, resolve_ref(spec, schema["$ref"]), date_library)

    if "allOf" in schema:
        members = schema["allOf"]
        if len(members) == 1:
            return resolve_schema_type(spec, members[0], date_library)
        return "dict[str, Any]"

    for key in ("oneOf", "anyOf"):
        if key in schema:
            for sub in schema[key]:
                t = resolve_schema_type(spec, sub, date_library)
                if t != "Any":
                    return t
            return "Any"

    if "enum" in schema:
        return "str" if schema.get("type", "string") == "string" else _PRIMITIVES.get(schema["type"], "Any")

    schema_type = schema.get("type")
    if schema_type == "string" and date_library == "datetime":
        date_type = _DATE_FORMATS.get(schema.get("format", ""))
        if date_type:
            return date_type
    if schema_type in _PRIMITIVES:
        return _PRIMITIVES[schema_type]
    if schema_type == "array":
        item_type = resolve_schema_type(spec, schema.get("items", {}), date_library)
        return f"list[{item_type}]"
    if schema_type == "object" or "properties" in schema:
        return "dict[str, Any]"

    return "Any"


def referenced_models(spec: dict[str, Any], schema: Any) -> set[str]:
    """Class names of every model a schema refers to directly."""
    found: set[str] = set()
    if isinstance(schema, dict):
        class_name = model_ref(spec, schema)
        if class_name:
            found.add(class_name)
            return found
        for value in schema.values():
            found |= referenced_models(spec, value)
    elif isinstance(schema, list):
        for item in schema:
            found |= referenced_models(spec, item)
    return found


def get_enum_values(spec: dict[str, Any], schema: dict[str, Any]) -> list[str] | None:
    """Extract enum values from a schema, resolving $ref if needed."""
    if "$ref" in schema:
        resolved = resolve_ref(spec, schema["$ref"])
        return get_enum_values(spec, resolved)
    if "enum" in schema:
        return [str(v) for v in schema["enum"]]
    if "allOf" in schema:
        for sub in schema["allOf"]:
            vals = get_enum_values(spec, sub)
            if vals:
                return vals
    return None


def is_read_only(schema: dict[str, Any]) -> bool:
    """Check if a schema field is readOnly."""
    return bool(schema.get("readOnly", False))


def describe(spec: dict[str, Any], schema: dict[str, Any], description: str = "") -> str:
    """Clean description with enum values appended."""
    description = strip_html(description or schema.get("description", ""))
    enum_values = get_enum_values(spec, schema)
    if enum_values:
        enum_str = ", ".join(enum_values)
        if description:
            description = f"{description.rstrip('.')} (values: {enum_str})."
        else:
            description = f"Values: {enum_str}."
    return description


def field_constraints(schema: dict[str, Any]) -> dict[str, Any]:
    """Pydantic Field constraints for a property schema."""
    constraints: dict[str, Any] = {}
    for openapi_key, field_key in _CONSTRAINTS.items():
        if openapi_key in schema:
            constraints[field_key] = schema[openapi_key]
    # OpenAPI 3.0 boolean exclusive bounds
    if schema.get("exclusiveMinimum") is True and "ge" in constraints:
        constraints["gt"] = constraints.pop("ge")
    if schema.get("exclusiveMaximum") is True and "le" in constraints:
        constraints["lt"] = constraints.pop("le")
    return constraints


def merge_all_of(spec: dict[str, Any], schema: dict[str, Any]) -> dict[str, Any]:
    """Flatten allOf members into a single object schema."""
    if "$ref" in schema:
        schema = resolve_ref(spec, schema["$ref"])
    if "allOf" not in schema:
        return schema

    merged_props: dict[str, Any] = {}
    merged_required: list[str] = []
    for sub in schema["allOf"]:
        sub = merge_all_of(spec, sub)
        merged_props.update(sub.get("properties", {}))
        merged_required.extend(sub.get("required", []))
    merged_props.update(schema.get("properties", {}))
    merged_required.extend(schema.get("required", []))
    return {
        "type": "object",
        "description": schema.get("description", ""),
        "properties": merged_props,
        "required": merged_required,
    }


def example_value(spec: dict[str, Any], schema: dict[str, Any], depth: int = 0) -> Any:
    """Build an example payload for a schema, preferring declared examples."""
    if not schema or depth > _MAX_EXAMPLE_DEPTH:
        return None
    if "example" in schema:
        return schema["example"]
    if "$ref" in schema:
        return example_value(spec, resolve_ref(spec, schema["$ref"]), depth + 1)
    if "allOf" in schema:
        return example_value(spec, merge_all_of(spec, schema), depth + 1)
    for key in ("oneOf", "anyOf"):
        if key in schema and schema[key]:
            return example_value(spec, schema[key][0], depth + 1)
    if "enum" in schema:
        return schema["enum"][0]
    if "default" in schema:
        return sanitize_default(schema["default"])

    schema_type = schema.get("type")
    if schema_type == "string":
        if schema.get("format") == "date-time":
            return "2026-01-01T00:00:00Z"
        if schema.get("format") == "date":
            return "2026-01-01"
        return "string"
    if schema_type == "integer":
        return schema.get("minimum", 0)
    if schema_type == "number":
        return float(schema.get("minimum", 0))
    if schema_type == "boolean":
        return False
    if schema_type == "array":
        item = example_value(spec, schema.get("items", {}), depth + 1)
        return [] if item is None else [item]
    if schema_type == "object" or "properties" in schema:
        return {
            name: example_value(spec, prop, depth + 1)
            for name, prop in schema.get("properties", {}).items()
        }
    return None


def _resolve_parameter(spec: dict[str, Any], param: dict[str, Any]) -> dict[str, Any]:
    if "$ref" in param:
        return resolve_ref(spec, param["$ref"])
    return param


def parse_parameters(
    spec: dict[str, Any],
    path_item: dict[str, Any],
    operation: dict[str, Any],
    date_library: str = "datetime",
) -> list[dict[str, Any]]:
    """Parse path and query parameters for an operation.

    Path-level parameters apply to every operation on the path; operation
    parameters override them by (name, location).
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for raw in [*path_item.get("parameters", []), *operation.get("parameters", [])]:
        param = _resolve_parameter(spec, raw)
        merged[(param["name"], param.get("in", "query"))] = param

    params: list[dict[str, Any]] = []
    for (name, location), param in merged.items():
        # Header and cookie parameters are not sent by the invoker.
        if location not in ("path", "query"):
            continue

        schema = param.get("schema", {})
        is_required = location == "path" or param.get("required", False)
        default = sanitize_default(schema.get("default"))

        params.append({
            "name": name,
            "py_name": to_identifier(name),
            "type": resolve_schema_type(spec, schema, date_library),
            "required": is_required,
            "default": default if not is_required else None,
            "description": describe(spec, schema, param.get("description", "")),
            "location": location,
            "example": param.get("example", example_value(spec, schema)),
        })
    return params


def parse_request_body(
    spec: dict[str, Any],
    operation: dict[str, Any],
    date_library: str = "datetime",
) -> dict[str, Any] | None:
    """Describe the JSON request body of an operation, if any."""
    request_body = operation.get("requestBody", {})
    if "$ref" in request_body:
        request_body = resolve_ref(spec, request_body["$ref"])
    schema = request_body.get("content", {}).get("application/json", {}).get("schema")
    if not schema:
        return None

    type_hint = resolve_schema_type(spec, schema, date_library)
    model = model_ref(spec, schema)
    item_model = None
    if schema.get("type") == "array":
        item_model = model_ref(spec, schema.get("items", {}))

    if model:
        kind = "model"
        py_name = to_identifier(model)
    elif item_model:
        kind = "model_list"
        py_name = "body"
    else:
        kind = "value"
        py_name = "body"

    return {
        "py_name": py_name,
        "type": type_hint,
        "kind": kind,
        "model": model or item_model,
        "required": request_body.get("required", False),
        "description": strip_html(request_body.get("description", "")),
        "example": example_value(spec, schema),
    }


def parse_response(
    spec: dict[str, Any],
    operation: dict[str, Any],
    date_library: str = "datetime",
) -> dict[str, Any]:
    """Determine the success status and return type of an operation."""
    responses = operation.get("responses", {})
    success_codes = sorted(str(code) for code in responses if str(code).startswith("2"))
    status = int(success_codes[0]) if success_codes else 200
    success = responses.get(str(status), responses.get(status, {})) if success_codes else {}
    if "$ref" in success:
        success = resolve_ref(spec, success["$ref"])

    content = success.get("content", {})
    for ct in ("application/json", "text/json"):
        schema = content.get(ct, {}).get("schema")
        if not schema:
            continue
        model = model_ref(spec, schema)
        if model:
            kind = "model"
        elif schema.get("type") == "array" and model_ref(spec, schema.get("items", {})):
            model = model_ref(spec, schema["items"])
            kind = "model_list"
        else:
            kind = "value"
        return {
            "status": status,
            "kind": kind,
            "type": resolve_schema_type(spec, schema, date_library),
            "model": model,
            "example": example_value(spec, schema),
        }

    return {"status": status, "kind": "none", "type": "None", "model": None, "example": None}
