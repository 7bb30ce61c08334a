"""Read expected-error maps from YAML files."""

from __future__ import annotations

from pathlib import Path

import yaml

from safe_request.classification import validate_expected_errors
from safe_request.errors import ConfigurationError


def load_expected_errors(path: str | Path, section: str | None = None) -> dict[int, str]:
    """Load and validate a ``status: message`` mapping.

    ``section`` selects a nested mapping, e.g. one map per remote service::

        billing:
          402: Payment required
          404: Invoice not found
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Expected-errors file not found: {config_path}")
    try:
        with open(config_path, encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

    if data is None:
        data = {}
    if section is not None:
        if not isinstance(data, dict) or section not in data:
            raise ConfigurationError(f"Section {section!r} missing from {config_path}")
        data = data[section]
    return validate_expected_errors(data)


__all__ = ["load_expected_errors"]
