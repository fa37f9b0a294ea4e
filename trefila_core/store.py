"""YAML-backed recipe storage."""

from __future__ import annotations

import logging
import os
import uuid
from dataclasses import replace
from datetime import date as _date
from typing import List, Optional

import numpy as np
import yaml

from .conversions import ConversionError, recipe_from_mapping, recipe_to_mapping
from .models import DieSchedule, DrawingSpec, Recipe

logger = logging.getLogger(__name__)


class RecipeStoreError(RuntimeError):
    """Raised when the recipe file cannot be read or written."""


class NumpySafeDumper(yaml.SafeDumper):
    def represent_data(self, data):
        if isinstance(data, (np.integer, np.floating)):
            return super().represent_data(data.item())
        return super().represent_data(data)


def new_recipe_id() -> str:
    return uuid.uuid4().hex


def snapshot_recipe(
    name: str,
    spec: DrawingSpec,
    schedule: DieSchedule,
    date: Optional[str] = None,
) -> Recipe:
    """Capture ``spec`` and its dies under ``name``; dated today unless given."""

    if not name or not name.strip():
        raise ConversionError("A recipe needs a name before it can be saved.")
    return Recipe(
        name=name.strip(),
        date=date or _date.today().isoformat(),
        entry_diameter=float(spec.entry_diameter),
        exit_diameter=float(spec.exit_diameter),
        pass_count=int(spec.pass_count),
        diameters=tuple(float(d) for d in schedule.diameters),
    )


class RecipeStore:
    """Recipes kept in a single YAML file under a ``recipes`` key.

    Every call re-reads the file, so several stores may point at the same path.
    """

    def __init__(self, yaml_file: str):
        self.yaml_file = yaml_file

    def load(self) -> List[Recipe]:
        if not os.path.exists(self.yaml_file):
            return []
        try:
            with open(self.yaml_file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.exception(f"Could not load '{self.yaml_file}': {e}")
            raise RecipeStoreError(f"Could not load '{self.yaml_file}': {e}") from e
        if not isinstance(data, dict):
            logger.error(f"'{self.yaml_file}' does not contain a recipe mapping.")
            raise RecipeStoreError(f"'{self.yaml_file}' does not contain a recipe mapping.")
        rows = data.get("recipes", []) or []
        if not isinstance(rows, list):
            logger.error(f"'recipes' in '{self.yaml_file}' must be a list, got {type(rows).__name__}.")
            raise RecipeStoreError(f"'recipes' in '{self.yaml_file}' must be a list.")
        try:
            return [recipe_from_mapping(row) for row in rows]
        except (ConversionError, AttributeError, TypeError) as e:
            logger.exception(f"Invalid recipe in '{self.yaml_file}': {e}")
            raise RecipeStoreError(f"Invalid recipe in '{self.yaml_file}': {e}") from e

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.load():
            if recipe.id == recipe_id:
                return recipe
        return None

    def save(self, recipe: Recipe) -> Recipe:
        """Insert ``recipe`` (or replace the one with the same id) and return the stored copy."""

        stored = recipe
        if not stored.id:
            stored = replace(stored, id=new_recipe_id())
        if not stored.date:
            stored = replace(stored, date=_date.today().isoformat())

        recipes = [r for r in self.load() if r.id != stored.id]
        recipes.append(stored)
        self._write(recipes)
        logger.info(f"Saved recipe '{stored.name}' ({stored.id}) to {self.yaml_file}")
        return stored

    def delete(self, recipe_id: str) -> bool:
        recipes = self.load()
        remaining = [r for r in recipes if r.id != recipe_id]
        if len(remaining) == len(recipes):
            return False
        self._write(remaining)
        logger.info(f"Deleted recipe {recipe_id} from {self.yaml_file}")
        return True

    def _write(self, recipes: List[Recipe]) -> None:
        payload = {"recipes": [recipe_to_mapping(r) for r in recipes]}
        try:
            with open(self.yaml_file, "w", encoding="utf-8") as f:
                yaml.dump(payload, f, sort_keys=False, allow_unicode=True, Dumper=NumpySafeDumper)
        except OSError as e:
            logger.exception(f"Could not save '{self.yaml_file}': {e}")
            raise RecipeStoreError(f"Could not save '{self.yaml_file}': {e}") from e
