"""
Tests for the content repository.
"""

import json

import pytest

from autobattle.core.content import ContentRepository
from autobattle.core.error_handling import ContentError
from autobattle.items import Armor, Weapon


def test_repository_is_a_singleton(repository):
    assert ContentRepository() is repository


def test_starter_items(repository):
    sword = repository.get_weapon("Bronze Shortsword")
    shield = repository.get_armor("Wooden Shield")
    assert isinstance(sword, Weapon)
    assert sword.damage == 3
    assert sword.level_requirement == 3
    assert sword.value == 250
    assert isinstance(shield, Armor)
    assert shield.defense == 4
    assert shield.level_requirement == 5


def test_get_item_returns_fresh_copies(repository):
    assert repository.get_weapon("Bronze Shortsword") is not repository.get_weapon(
        "Bronze Shortsword"
    )


def test_get_item_with_wrong_type_or_name(repository):
    assert repository.get_armor("Bronze Shortsword") is None
    assert repository.get_item("Excalibur") is None


def _write_content(root, species, items):
    (root / "species.json").write_text(json.dumps(species))
    (root / "items.json").write_text(json.dumps(items))


def test_missing_directory_raises_content_error(tmp_path):
    with pytest.raises(ContentError):
        ContentRepository(tmp_path / "nowhere")


def test_duplicate_species_raises_content_error(tmp_path):
    slime = json.loads(
        (ContentRepository().data_dir / "species.json").read_text(encoding="utf-8")
    )[0]
    ContentRepository.reset()
    _write_content(tmp_path, [slime, slime], [{"item_kind": "Weapon", "name": "Club"}])
    with pytest.raises(ContentError):
        ContentRepository(tmp_path)


def test_invalid_profile_raises_content_error(tmp_path):
    _write_content(
        tmp_path,
        [{"species": "SLIME", "tier_starting_level": 0}],
        [{"item_kind": "Weapon", "name": "Club"}],
    )
    with pytest.raises(ContentError):
        ContentRepository(tmp_path)


def test_empty_file_raises_content_error(tmp_path):
    _write_content(tmp_path, [], [])
    with pytest.raises(ContentError):
        ContentRepository(tmp_path)
