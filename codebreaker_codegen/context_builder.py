"""Build Jinja2 template context from the parsed OpenAPI document.

Turns component schemas into model definitions, groups operations into API
classes by tag, and assembles the full context dict for the templates.
"""

from __future__ import annotations

import json
import pprint
import re
from typing import Any, Iterable

from .config import GeneratorConfig
from .loader import get_default_server_url, get_paths, get_schemas
from .naming import (
    api_class_name,
    build_operation_name,
    path_resource,
    to_class_name,
    to_identifier,
    to_module_name,
)
from .schema_parser import (
    describe,
    example_value,
    field_constraints,
    is_model_schema,
    is_read_only,
    merge_all_of,
    parse_parameters,
    parse_request_body,
    parse_response,
    referenced_models,
    resolve_schema_type,
    sanitize_default,
    strip_html,
)

_HTTP_METHODS = ("get", "post", "put", "patch", "delete")

# Operations without a tag or a literal path segment land here
_DEFAULT_TAG = "default"


def _literal(value: Any) -> str:
    """Python source literal for a JSON-compatible value."""
    if isinstance(value, str):
        return json.dumps(value)
    return repr(value)


def _docstring(text: str) -> str:
    """Text that can sit inside a triple-quoted docstring."""
    return strip_html(text).replace("\\", "\\\\").replace('"""', "'''")


def _set_literal(values: Iterable[str]) -> str:
    items = sorted(values)
    if not items:
        return "set()"
    return "{" + ", ".join(_literal(v) for v in items) + "}"


def _sentence(text: str) -> str:
    text = text.rstrip(". ")
    return f"{text}." if text else ""


def _typing_imports(type_hints: Iterable[str]) -> dict[str, list[str]]:
    """Names to import from datetime and typing for the given hints."""
    joined = " ".join(type_hints)
    datetime_names = [name for name in ("date", "datetime") if re.search(rf"\b{name}\b", joined)]
    typing_names = ["Any"] if re.search(r"\bAny\b", joined) else []
    return {"datetime": datetime_names, "typing": typing_names}


def _model_import(class_name: str) -> dict[str, str]:
    return {"module": to_module_name(class_name), "class_name": class_name}


def operation_tag(path: str, operation: dict[str, Any]) -> str:
    """Tag that decides which API class an operation belongs to."""
    tags = operation.get("tags") or []
    if tags:
        return tags[0]
    return path_resource(path) or _DEFAULT_TAG


def _build_field(
    spec: dict[str, Any],
    prop_name: str,
    prop_schema: dict[str, Any],
    required: bool,
    config: GeneratorConfig,
) -> dict[str, Any]:
    """Build one model field definition."""
    py_name = to_identifier(prop_name)
    base_type = resolve_schema_type(spec, prop_schema, config.date_library)
    read_only = is_read_only(prop_schema)
    nullable = bool(prop_schema.get("nullable", False))
    is_required = required and not read_only

    if is_required and not nullable:
        type_hint = base_type
    else:
        type_hint = f"{base_type} | None"

    field_kwargs: list[str] = []
    if not is_required:
        field_kwargs.append(f"default={_literal(sanitize_default(prop_schema.get('default')))}")
    if py_name != prop_name:
        field_kwargs.append(f"alias={_literal(prop_name)}")
    for key, value in field_constraints(prop_schema).items():
        field_kwargs.append(f"{key}={_literal(value)}")
    description = describe(spec, prop_schema)
    if description:
        field_kwargs.append(f"description={_literal(description)}")

    return {
        "name": py_name,
        "alias": prop_name,
        "type_hint": type_hint,
        "required": is_required,
        "read_only": read_only,
        "field_kwargs": field_kwargs,
        "description": description,
    }


def build_model(
    spec: dict[str, Any],
    name: str,
    schema: dict[str, Any],
    config: GeneratorConfig,
) -> dict[str, Any]:
    """Build the template context for one component schema."""
    schema = merge_all_of(spec, schema)
    class_name = to_class_name(name)
    required = set(schema.get("required", []))

    fields = [
        _build_field(spec, prop_name, prop_schema, prop_name in required, config)
        for prop_name, prop_schema in schema.get("properties", {}).items()
    ]
    read_only = sorted(f["name"] for f in fields if f["read_only"])
    if read_only:
        read_only_literal = "frozenset({" + ", ".join(_literal(n) for n in read_only) + "})"
    else:
        read_only_literal = "frozenset()"

    refs = sorted(referenced_models(spec, schema.get("properties", {})) - {class_name})
    example = example_value(spec, schema)

    return {
        "name": name,
        "class_name": class_name,
        "module": to_module_name(class_name),
        "description": _docstring(_sentence(schema.get("description", "")) or f"{class_name} model."),
        "fields": fields,
        "read_only_literal": read_only_literal,
        "request_fields_literal": _set_literal(f["alias"] for f in fields if not f["read_only"]),
        "imports": [_model_import(ref) for ref in refs],
        "typing_imports": _typing_imports(f["type_hint"] for f in fields),
        "example_literal": pprint.pformat(example, width=88, sort_dicts=False),
    }


def _make_description(method: str, path: str, operation: dict, name: str) -> str:
    """Build the first docstring line of an operation method."""
    summary = operation.get("summary", "")
    description = operation.get("description", "")

    if summary:
        doc = summary
    elif description:
        doc = strip_html(description).split(".")[0]
    else:
        parts = name.split("_")
        verb = parts[0].capitalize()
        resource = " ".join(parts[1:])
        has_id = any(p.startswith("{") for p in path.split("/") if p)
        if has_id and method == "get":
            doc = f"Get {resource} by ID"
        elif has_id and method == "delete":
            doc = f"Delete {resource} by ID"
        elif has_id and method in ("put", "patch"):
            doc = f"Update {resource} by ID"
        else:
            doc = f"{verb} {resource}"

    return _docstring(_sentence(doc))


def _signature(param: dict[str, Any]) -> str:
    if param["required"]:
        return f"{param['py_name']}: {param['type']}"
    if param.get("default") is not None:
        return f"{param['py_name']}: {param['type']} = {_literal(param['default'])}"
    return f"{param['py_name']}: {param['type']} | None = None"


def _expected_path(base_path: str, path: str, params: list[dict[str, Any]]) -> str:
    """Request path the generated test expects for the example arguments."""
    for param in params:
        if param["location"] == "path":
            path = path.replace("{" + param["name"] + "}", str(param["example"]))
    return base_path + path


def build_operation(
    spec: dict[str, Any],
    path: str,
    path_item: dict[str, Any],
    method: str,
    config: GeneratorConfig,
    base_path: str = "",
) -> dict[str, Any]:
    """Build the template context for one operation."""
    operation = path_item[method]
    name = build_operation_name(method, path, operation.get("operationId"))
    params = parse_parameters(spec, path_item, operation, config.date_library)
    body = parse_request_body(spec, operation, config.date_library)
    response = parse_response(spec, operation, config.date_library)

    path_params = [p for p in params if p["location"] == "path"]
    query_params = [p for p in params if p["location"] == "query"]

    # Python argument order: required path, body, required query, then optionals
    arguments = list(path_params)
    if body is not None:
        body = dict(body, location="body", name=body["py_name"], default=None)
        body["description"] = body["description"] or (
            f"{body['model']} to send." if body["model"] else "Request body."
        )
    if body is not None and body["required"]:
        arguments.append(body)
    arguments.extend(p for p in query_params if p["required"])
    arguments.extend(p for p in query_params if not p["required"])
    if body is not None and not body["required"]:
        arguments.append(body)

    for arg in arguments:
        arg["signature"] = _signature(arg)
        arg["example_literal"] = _literal(arg["example"])
        arg["doc"] = _docstring(_sentence(arg["description"])) or "-"

    return {
        "name": name,
        "method": method,
        "path": path,
        "tag": operation_tag(path, operation),
        "description": _make_description(method, path, operation, name),
        "arguments": arguments,
        "path_params": path_params,
        "query_params": query_params,
        "body": body,
        "response": response,
        "return_type": response["type"],
        "response_example_literal": pprint.pformat(response["example"], width=80, sort_dicts=False),
        "body_example_literal": pprint.pformat(body["example"], width=80, sort_dicts=False) if body else None,
        "expected_path": _expected_path(base_path, path, path_params),
        "models": sorted(
            {m for m in (response["model"], body["model"] if body else None) if m}
        ),
    }


def _deduplicate_operation_names(operations: list[dict[str, Any]]) -> None:
    """Ensure method names are unique by appending the HTTP method if needed."""
    seen: dict[str, int] = {}
    for op in operations:
        name = op["name"]
        if name in seen:
            seen[name] += 1
            op["name"] = f"{name}_{op['method']}"
        else:
            seen[name] = 1

    final_seen: dict[str, int] = {}
    for op in operations:
        name = op["name"]
        if name in final_seen:
            final_seen[name] += 1
            op["name"] = f"{name}_{final_seen[name]}"
        else:
            final_seen[name] = 1


def _tag_descriptions(spec: dict[str, Any]) -> dict[str, str]:
    return {
        tag["name"]: tag.get("description", "")
        for tag in spec.get("tags", [])
        if isinstance(tag, dict) and "name" in tag
    }


def build_api(tag: str, operations: list[dict[str, Any]], description: str) -> dict[str, Any]:
    """Build the template context for one API class."""
    _deduplicate_operation_names(operations)
    class_name = api_class_name(tag)
    models = sorted({m for op in operations for m in op["models"]})
    hints = [op["return_type"] for op in operations]
    hints += [arg["type"] for op in operations for arg in op["arguments"]]
    return {
        "tag": tag,
        "class_name": class_name,
        "module": to_module_name(class_name),
        "description": _docstring(_sentence(description) or f"Operations tagged ``{tag}``."),
        "operations": operations,
        "imports": [_model_import(m) for m in models],
        "typing_imports": _typing_imports(hints),
    }


def build_context(spec: dict[str, Any], config: GeneratorConfig | None = None) -> dict[str, Any]:
    """Build the full template context from the OpenAPI document."""
    config = config or GeneratorConfig()
    server_url = get_default_server_url(spec)
    base_path = re.sub(r"^[a-z]+://[^/]+", "", server_url)

    models = [
        build_model(spec, name, schema, config)
        for name, schema in sorted(get_schemas(spec).items())
        if is_model_schema(schema)
    ]

    by_tag: dict[str, list[dict[str, Any]]] = {}
    for path, path_item in sorted(get_paths(spec).items()):
        for method in _HTTP_METHODS:
            if method not in path_item:
                continue
            operation = build_operation(spec, path, path_item, method, config, base_path)
            by_tag.setdefault(operation["tag"], []).append(operation)

    tag_descriptions = _tag_descriptions(spec)
    apis = sorted(
        (build_api(tag, ops, tag_descriptions.get(tag, "")) for tag, ops in by_tag.items()),
        key=lambda api: api["class_name"],
    )

    info = spec.get("info", {})
    return {
        "title": info.get("title", "API"),
        "version": str(info.get("version", "unknown")),
        "spec_name": config.input_spec.name,
        "server_url": server_url,
        "models": models,
        "apis": apis,
        "model_count": len(models),
        "operation_count": sum(len(api["operations"]) for api in apis),
        "use_records": config.use_records,
        "generate_builders": config.generate_builders,
        "api_package": config.api_package,
        "model_package": config.model_package,
        "invoker_package": config.invoker_package,
    }
