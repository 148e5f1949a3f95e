"""
Flow model loader for JSON and YAML files.

Handles reading, parsing and validation of flow model documents.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Union
import yaml
from pydantic import ValidationError

from .models import FlowModel

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


class ModelError(Exception):
    """Flow model loading or validation error."""
    pass


class ModelLoader:
    """
    Loads and validates a flow model from a JSON or YAML file.

    The file suffix decides the format: ``.yaml``/``.yml`` are read as
    YAML, everything else (typically ``*.giraflow.json``) as JSON.
    """

    def __init__(self, model_path: Optional[Union[str, Path]] = None):
        """
        Initialize the model loader.

        Args:
            model_path: Path to the model file
        """
        self.model_path = Path(model_path) if model_path else None
        self._model: Optional[FlowModel] = None

    def load(self) -> "ModelLoader":
        """
        Load the model file from the model path.

        Returns:
            Self for method chaining
        """
        if self.model_path is None:
            raise ModelError("No model path specified")

        if not self.model_path.is_file():
            raise ModelError(f"Model file does not exist: {self.model_path}")

        data = self._read_file(self.model_path)
        self._model = self._parse_model(data)
        logger.debug(
            "Loaded %s: %d timeline elements, %d specifications",
            self.model_path,
            len(self._model.timeline),
            len(self._model.specifications),
        )
        return self

    def _read_file(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse a JSON or YAML file."""
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                if file_path.suffix.lower() in YAML_SUFFIXES:
                    data = yaml.safe_load(f) or {}
                else:
                    data = json.load(f)
        except yaml.YAMLError as e:
            raise ModelError(f"Invalid YAML in {file_path}: {e}")
        except json.JSONDecodeError as e:
            raise ModelError(f"Invalid JSON in {file_path}: {e}")
        except IOError as e:
            raise ModelError(f"Cannot read {file_path}: {e}")

        if not isinstance(data, dict):
            raise ModelError(f"Expected an object at the top of {file_path}")
        return data

    def _parse_model(self, data: Dict[str, Any]) -> FlowModel:
        """Parse and validate a model document."""
        try:
            return FlowModel.model_validate(data)
        except ValidationError as e:
            raise ModelError(f"Invalid flow model: {e}")

    @property
    def model(self) -> Optional[FlowModel]:
        """Get the loaded flow model."""
        return self._model

    def save(self, output_path: Union[str, Path]) -> Path:
        """
        Save the current model to a JSON or YAML file.

        Args:
            output_path: Target file; the suffix selects the format

        Returns:
            The written path
        """
        if self._model is None:
            raise ModelError("No model loaded")

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        data = self._model.to_dict()

        with open(output_path, "w", encoding="utf-8") as f:
            if output_path.suffix.lower() in YAML_SUFFIXES:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)
            else:
                json.dump(data, f, indent=2, ensure_ascii=False)
                f.write("\n")
        return output_path

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ModelLoader":
        """
        Create a ModelLoader from an already-parsed document.

        Useful for programmatic use and tests.
        """
        loader = cls()
        loader._model = loader._parse_model(data)
        return loader
