from __future__ import annotations
import json
import logging
from pathlib import Path

from geometries.fetch.exceptions import InvalidParameter
from geometries.fetch.parameters import FetchParameters, validate_parameters

logger = logging.getLogger(__name__)

PARAMETER_SUFFIX = ".fetch.json"


def parameter_path(path) -> Path:
    """Add the '.fetch.json' suffix unless the path already has it."""
    path = Path(path)
    if path.name.lower().endswith(PARAMETER_SUFFIX):
        return path
    return path.with_name(path.name + PARAMETER_SUFFIX)


def save_parameters(params: FetchParameters, path) -> Path:
    """Store run parameters as JSON so a run can be repeated."""
    path = parameter_path(path)
    data = params.model_dump()
    with open(path, 'w') as f:
        f.write(json.dumps(data, indent=2))
    logger.info(f"Saved fetch parameters to {path}")
    return path


def load_parameters(path) -> FetchParameters:
    """Load run parameters saved with ``save_parameters``.

    The values are validated again, so a hand-edited file with an out of
    range value raises InvalidParameter.
    """
    with open(path, 'r') as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise InvalidParameter(f"{path} does not contain a parameter object")
    return validate_parameters(**data)
