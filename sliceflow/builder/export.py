"""
Slice export.

Serializes slices to JSON and places the file next to the model it
was built from.
"""

import json
import re
from pathlib import Path
from typing import Sequence, Union

from .slices import Slice, SliceViewModel

SLICES_FILENAME = "slices.json"

_MODEL_NAME_PATTERN = re.compile(r"^(.+)\.giraflow\.json$", re.IGNORECASE)
_MODEL_SUFFIX_PATTERN = re.compile(r"\.(json|ya?ml)$", re.IGNORECASE)


def export_slices_to_json(slices: Sequence[Slice]) -> str:
    """Serialize slices to an indented JSON string."""
    return json.dumps([s.to_dict() for s in slices], indent=2, ensure_ascii=False)


def slices_output_path(model_path: Union[str, Path]) -> Path:
    """
    Get the asset-folder location of a model's slices file.

    ``hotel.giraflow.json`` maps to ``hotel.giraflow/slices.json``; YAML
    models map the same way.
    """
    model_path = Path(model_path)
    folder = _MODEL_SUFFIX_PATTERN.sub("", model_path.name)
    if folder == model_path.name:
        folder = f"{model_path.name}.d"
    return model_path.parent / folder / SLICES_FILENAME


def download_name(model_path: Union[str, Path]) -> str:
    """Get the standalone file name for a model's slices, e.g. ``hotel.giraflow-slices.json``."""
    match = _MODEL_NAME_PATTERN.match(Path(model_path).name)
    base = match.group(1) if match else "slices"
    return f"{base}.giraflow-slices.json"


def write_slices(view_model: SliceViewModel, model_path: Union[str, Path]) -> Path:
    """
    Write the slices file into the model's asset folder.

    Args:
        view_model: Built slice view model
        model_path: Path of the model file the slices came from

    Returns:
        Path of the written file
    """
    output_path = slices_output_path(model_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(export_slices_to_json(view_model.slices), encoding="utf-8")
    return output_path
