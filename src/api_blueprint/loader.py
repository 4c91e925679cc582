"""Read a types bundle from disk."""

import json
from pathlib import Path

import yaml

from api_blueprint.blueprint.builder import TypesModule


def detect_format(file_path: Path) -> str:
    """Return 'json' or 'yaml' based on the file contents.

    Falls back to the extension when the text does not parse as either.
    """
    text = file_path.read_text(encoding="utf-8")

    try:
        json.loads(text)
        return "json"
    except (json.JSONDecodeError, ValueError):
        pass

    try:
        yaml.safe_load(text)
        return "yaml"
    except yaml.YAMLError:
        pass

    return "json" if file_path.suffix.lower() == ".json" else "yaml"


def load_raw(file_path: Path) -> dict:
    """Parse a bundle file into a plain dict.

    Parse failures are raised as ValueError naming the file.
    """
    text = file_path.read_text(encoding="utf-8")
    try:
        if detect_format(file_path) == "json":
            data = json.loads(text)
        else:
            data = yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"{file_path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} does not contain a mapping")
    return data


def load_types_module(path: str | Path) -> TypesModule:
    """Load a bundle file.

    A bare OpenAPI document (top-level ``openapi`` version string with
    ``paths``) is accepted and wrapped as a bundle without samples.
    """
    file_path = Path(path)
    data = load_raw(file_path)
    if "paths" in data and "info" in data:
        data = {"openapi": data}
    return TypesModule.model_validate(data)
