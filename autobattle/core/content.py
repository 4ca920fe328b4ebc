import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

from autobattle.enemies.species import SpeciesProfile, deserialize_species
from autobattle.items import Armor, EquipableItem, Weapon, deserialize_item

from .constants import EnemySpecies
from .error_handling import ContentError
from .logging import log_debug, log_warning
from .utils import Singleton

# Content shipped with the package.
DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"


class ContentRepository(metaclass=Singleton):
    """
    One-stop registry for the game content that needs fast by-name access.
    """

    species: dict[EnemySpecies, SpeciesProfile]
    items: dict[str, EquipableItem]

    def __init__(self, data_dir: Path | None = None) -> None:
        """
        Initialize the ContentRepository.

        Args:
            data_dir (Path | None):
                The directory containing data files to load. Defaults to the
                content shipped with the package.

        """
        self.data_dir = data_dir or DEFAULT_DATA_DIR
        self.reload(self.data_dir)

    def reload(self, root: Path) -> None:
        """
        (Re)load all JSON assets from disk.

        Args:
            root (Path):
                The directory containing data files to load.

        """
        self.species = _load_json_file(
            root / "species.json",
            self._load_species,
            "species profiles",
        )
        self.items = _load_json_file(
            root / "items.json",
            self._load_items,
            "items",
        )

    def get_species(self, species: EnemySpecies) -> SpeciesProfile | None:
        """Get a species profile, or None if the species has none."""
        return self.species.get(species)

    def supported_species(self) -> list[EnemySpecies]:
        """Species that have a profile, in declaration order."""
        return [species for species in EnemySpecies if species in self.species]

    def get_item(self, name: str, expected_type: type | None = None) -> Any | None:
        """
        Get a fresh copy of an item by name.

        Args:
            name (str):
                Name of the item to retrieve.
            expected_type (type | None):
                Expected type for an isinstance check.

        Returns:
            Any | None:
                A new item instance if found and the type matches, None otherwise.

        """
        entry = self.items.get(name)
        if entry is None:
            log_warning(f"Item '{name}' not found in ContentRepository.", {"name": name})
            return None
        if expected_type and not isinstance(entry, expected_type):
            log_warning(
                f"Item '{name}' is not of expected type '{expected_type.__name__}'.",
                {"name": name, "actual_type": type(entry).__name__},
            )
            return None
        # Items are compared by identity, so every caller gets its own copy.
        return entry.model_copy()

    def get_weapon(self, name: str) -> Weapon | None:
        """Get a weapon by name, or None if not found."""
        return self.get_item(name, Weapon)

    def get_armor(self, name: str) -> Armor | None:
        """Get an armor by name, or None if not found."""
        return self.get_item(name, Armor)

    @staticmethod
    def _load_species(data: list[dict]) -> dict[EnemySpecies, SpeciesProfile]:
        """
        Load species profiles from JSON data.

        Raises:
            ValueError: If a species is defined twice.

        """
        profiles: dict[EnemySpecies, SpeciesProfile] = {}
        for species_data in data:
            profile = deserialize_species(species_data)
            if profile.species in profiles:
                raise ValueError(f"Duplicate species: {profile.species}")
            profiles[profile.species] = profile
        return profiles

    @staticmethod
    def _load_items(data: list[dict]) -> dict[str, EquipableItem]:
        """
        Load items from JSON data.

        Raises:
            ValueError: If an item name is used twice.

        """
        items: dict[str, EquipableItem] = {}
        for item_data in data:
            item = deserialize_item(item_data)
            if item.name in items:
                raise ValueError(f"Duplicate item name: {item.name}")
            items[item.name] = item
        return items


def _load_json_file(
    filepath: Path,
    loader_func: Callable[[list[dict]], dict[Any, Any]],
    description: str,
) -> dict[Any, Any]:
    """Helper to load and validate JSON files"""
    try:
        log_debug(f"Loading {description} using {loader_func.__name__}...")
        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")
        if not filepath.is_file():
            raise ValueError(f"Not a file: {filepath}")
        with open(filepath, encoding="utf-8") as f:
            data = json.load(f)
        if not data:
            raise ValueError(f"Empty data list in {filepath}")
        if not isinstance(data, list):
            raise ValueError(f"Expected list in {filepath}, got {type(data).__name__}")
        return loader_func(data)
    except (json.JSONDecodeError, FileNotFoundError, ValueError, TypeError) as e:
        raise ContentError(f"File {filepath} raised an error: {e}") from e
