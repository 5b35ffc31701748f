# Path: spec_builder/process/matcher/engine/catalogue_loader.py
"""
Catalogue Loader

Loads catalogue records from JSON or YAML files.
Validates every record against the schema and converts to CatalogueEntry.
"""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from spec_builder.core.logger.ipo_logging import get_input_logger

from ..models.catalogue_definition import CatalogueRecord
from ..models.catalogue_entry import CatalogueEntry


YAML_SUFFIXES = ('.yaml', '.yml')
JSON_SUFFIXES = ('.json',)


class CatalogueLoader:
    """
    Loads a catalogue file.

    The file holds a list of records, or a mapping with the list under
    'catalogue' (the form usually written by hand in YAML).

    Example:
        loader = CatalogueLoader()
        entries = loader.load_file(Path('catalogue.yaml'))
    """

    def __init__(self):
        self.logger = get_input_logger('catalogue_loader')

    def load_file(self, file_path: Path) -> list[CatalogueEntry]:
        """
        Load and validate every record of a catalogue file.

        Args:
            file_path: JSON or YAML file

        Returns:
            Entries in file order

        Raises:
            ValueError: If the file type is unknown, the layout is wrong or a
                record fails validation (pydantic ValidationError)
        """
        file_path = Path(file_path)
        data = self._read(file_path)

        if data is None:
            self.logger.warning(f"Empty catalogue file: {file_path}")
            return []

        if isinstance(data, dict) and 'catalogue' in data:
            data = data['catalogue'] or []

        if not isinstance(data, list):
            raise ValueError(f"{file_path}: expected a list of catalogue records")

        entries = [
            self._parse_record(record, file_path, index)
            for index, record in enumerate(data, 1)
        ]

        self.logger.info(f"Loaded {len(entries)} catalogue records from {file_path}")
        return entries

    def _read(self, file_path: Path):
        suffix = file_path.suffix.lower()

        with open(file_path, 'r', encoding='utf-8') as f:
            if suffix in YAML_SUFFIXES:
                try:
                    return yaml.safe_load(f)
                except yaml.YAMLError as e:
                    self.logger.error(f"YAML parse error in {file_path}: {e}")
                    raise ValueError(f"{file_path}: invalid YAML") from e
            if suffix in JSON_SUFFIXES:
                return json.load(f)

        raise ValueError(
            f"{file_path}: unsupported catalogue file type {suffix!r} "
            f"(use .json, .yaml or .yml)"
        )

    def _parse_record(self, record, file_path: Path, index: int) -> CatalogueEntry:
        if not isinstance(record, dict):
            raise ValueError(f"{file_path}: record #{index} is not a mapping")
        try:
            return CatalogueRecord.model_validate(record).to_entry()
        except ValidationError as e:
            self.logger.error(f"Invalid catalogue record #{index} in {file_path}: {e}")
            raise


__all__ = ['CatalogueLoader']
