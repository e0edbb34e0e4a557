"""Render templates and write generated output.

Takes the context from context_builder and produces the model and API
packages, plus test scaffolding when the configuration asks for it.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig, package_dir

LOGGER = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        autoescape=False,  # noqa: S701 - Generating Python code
        undefined=jinja2.StrictUndefined,
    )


def render(context: dict[str, Any], config: GeneratorConfig) -> dict[Path, str]:
    """Render every generated file in memory, keyed by output path."""
    env = _environment()
    files: dict[Path, str] = {}

    if config.generate_models:
        model_dir = package_dir(config.output_dir, config.model_package)
        template = env.get_template("model.py.j2")
        for model in context["models"]:
            files[model_dir / f"{model['module']}.py"] = template.render(model=model, **context)
        files[model_dir / "__init__.py"] = env.get_template("model_init.py.j2").render(**context)

        if config.generate_model_tests:
            template = env.get_template("test_model.py.j2")
            for model in context["models"]:
                files[config.tests_dir / f"test_{model['module']}.py"] = template.render(
                    model=model, **context
                )

    if config.generate_apis:
        api_dir = package_dir(config.output_dir, config.api_package)
        template = env.get_template("api.py.j2")
        for api in context["apis"]:
            files[api_dir / f"{api['module']}.py"] = template.render(api=api, **context)
        files[api_dir / "__init__.py"] = env.get_template("api_init.py.j2").render(**context)

        if config.generate_api_tests:
            template = env.get_template("test_api.py.j2")
            for api in context["apis"]:
                files[config.tests_dir / f"test_{api['module']}.py"] = template.render(
                    api=api, **context
                )

    return files


def generate(context: dict[str, Any], config: GeneratorConfig) -> list[Path]:
    """Render all templates and write them below the configured directories."""
    files = render(context, config)
    for path, content in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        LOGGER.debug("Wrote %s", path)

    print(
        f"Generated {len(files)} files "
        f"({context['model_count']} models, {context['operation_count']} operations)"
    )
    return list(files)


def check(context: dict[str, Any], config: GeneratorConfig) -> list[Path]:
    """Return generated files that are missing or differ from a fresh render."""
    stale = []
    for path, content in render(context, config).items():
        if not path.exists() or path.read_text(encoding="utf-8") != content:
            stale.append(path)
    return stale
