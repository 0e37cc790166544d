"""YAML catalogue loading.

A catalogue is a YAML document with a top-level ``models`` list; each entry
holds the fields of a ModelProfile. The bundled catalogue ships the default
marketplace personas.
"""

from importlib import resources
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ModelProfile

BUNDLED_CATALOG = "personas.yaml"


def parse_catalog(text: str, source: str = "<string>") -> list[ModelProfile]:
    """Parse catalogue YAML into profiles.

    Args:
        text: YAML document
        source: Name used in error messages

    Returns:
        Profiles in document order

    Raises:
        ValueError: If the document is not a valid catalogue
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in catalogue {source}: {e}") from e

    if not isinstance(data, dict) or not isinstance(data.get("models"), list):
        raise ValueError(f"Catalogue {source} must contain a top-level 'models' list")

    profiles = []
    for index, entry in enumerate(data["models"]):
        if not isinstance(entry, dict):
            raise ValueError(f"Catalogue {source}: entry {index} is not a mapping")
        if isinstance(entry.get("tags"), list):
            entry = {**entry, "tags": tuple(str(t) for t in entry["tags"])}
        try:
            profiles.append(ModelProfile(**entry))
        except ValidationError as e:
            raise ValueError(f"Catalogue {source}: entry {index} is invalid: {e}") from e
    return profiles


def load_catalog(path: str | Path | None = None) -> list[ModelProfile]:
    """Load profiles from a catalogue file, or the bundled one when path is None."""
    if path is None:
        bundled = resources.files("modelmart.registry").joinpath("data").joinpath(BUNDLED_CATALOG)
        text = bundled.read_text(encoding="utf-8")
        return parse_catalog(text, source=BUNDLED_CATALOG)

    catalog_path = Path(path)
    return parse_catalog(catalog_path.read_text(encoding="utf-8"), source=str(catalog_path))
