"""
Taxonomy loader.

Reads the taxonomy YAML (bundled with the package unless a path is given)
and validates it before any categorization runs.
"""

from importlib import resources
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from hadith_categorizer.errors import TaxonomyError
from hadith_categorizer.taxonomy.schema import Taxonomy


BUNDLED_TAXONOMY = "taxonomy.yaml"


def parse_taxonomy(raw: str, source: str = "<string>") -> Taxonomy:
    """
    Parse and validate taxonomy YAML.

    Args:
        raw: YAML document text
        source: Name used in error messages

    Returns:
        Validated Taxonomy

    Raises:
        TaxonomyError: If the document is not valid YAML or fails validation
    """
    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise TaxonomyError(f"Cannot parse taxonomy {source}: {e}") from e

    if not isinstance(data, dict):
        raise TaxonomyError(f"Taxonomy {source} must be a mapping at the top level")

    try:
        return Taxonomy.model_validate(data)
    except ValidationError as e:
        raise TaxonomyError(f"Invalid taxonomy {source}: {e}") from e


def load_taxonomy(path: Optional[Union[str, Path]] = None) -> Taxonomy:
    """
    Load the taxonomy from a file, or the bundled asset when no path is given.

    Raises:
        TaxonomyError: If the file is missing or invalid
    """
    if path is None:
        source = f"bundled:{BUNDLED_TAXONOMY}"
        raw = (
            resources.files("hadith_categorizer.taxonomy")
            .joinpath("data").joinpath(BUNDLED_TAXONOMY)
            .read_text(encoding="utf-8")
        )
        return parse_taxonomy(raw, source)

    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise TaxonomyError(f"Cannot read taxonomy {path}: {e}") from e
    return parse_taxonomy(raw, str(path))
