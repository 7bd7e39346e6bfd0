"""Load perks and consumables from JSON definitions."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterable

from ..domain.catalog import (
    BuffEffect,
    ConsumableDefinition,
    EconomyCatalog,
    PerkDefinition,
    PerkEffect,
)


def load_catalog_from_json(path: str | Path) -> EconomyCatalog:
    """Read, validate and parse a catalog file."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return parse_catalog_dict(data)


def parse_catalog_dict(data: dict[str, Any]) -> EconomyCatalog:
    """Parse a JSON dict (already decoded) into a catalog."""
    errors = validate_catalog_dict(data)
    if errors:
        raise ValueError(_format_errors("Catalog validation failed", errors))
    catalog = EconomyCatalog()
    catalog.register_perks(parse_perk(entry) for entry in data.get("perks", []))
    catalog.register_consumables(parse_consumable(entry) for entry in data.get("consumables", []))
    return catalog


def parse_perk(entry: dict[str, Any]) -> PerkDefinition:
    cost = entry.get("cost", {})
    return PerkDefinition(
        perk_id=entry["id"],
        name=entry.get("name", entry["id"]),
        description=entry.get("description", ""),
        max_level=int(entry["maxLevel"]),
        gold_cost=int(cost.get("gold", 0)),
        shard_cost=int(cost.get("shards", 0)),
        effect=PerkEffect(entry["effect"]),
        effect_weight=float(entry["weight"]),
        gold_growth=float(entry.get("goldGrowth", 1.0)),
    )


def parse_consumable(entry: dict[str, Any]) -> ConsumableDefinition:
    cost = entry.get("cost", {})
    return ConsumableDefinition(
        item_id=entry["id"],
        name=entry.get("name", entry["id"]),
        description=entry.get("description", ""),
        duration_actions=int(entry["durationActions"]),
        gold_cost=int(cost.get("gold", 0)),
        shard_cost=int(cost.get("shards", 0)),
        effect=BuffEffect(entry["effect"]),
        effect_weight=float(entry["weight"]),
    )


def validate_catalog_file(path: str | Path) -> list[str]:
    """Validate catalog JSON file and return a list of errors."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return validate_catalog_dict(data)


def validate_catalog_dict(data: dict[str, Any]) -> list[str]:
    errors: list[str] = []
    if not isinstance(data, dict):
        return ["Catalog must be a JSON object."]

    perks_raw = data.get("perks")
    if not isinstance(perks_raw, list) or not perks_raw:
        errors.append("Catalog must contain non-empty 'perks' array.")
    else:
        seen: set[str] = set()
        for idx, entry in enumerate(perks_raw, start=1):
            perk_id = _check_entry(errors, "Perk", idx, entry, seen)
            if perk_id is None:
                continue
            max_level = entry.get("maxLevel")
            if not isinstance(max_level, int) or isinstance(max_level, bool) or max_level <= 0:
                errors.append(f"Perk '{perk_id}' has invalid 'maxLevel' value '{max_level}'.")
            _check_effect(errors, "Perk", perk_id, entry.get("effect"), PerkEffect)
            _check_weight(errors, "Perk", perk_id, entry.get("weight"))
            _check_cost(errors, "Perk", perk_id, entry.get("cost"))
            growth = entry.get("goldGrowth")
            if growth is not None and (not isinstance(growth, (int, float)) or float(growth) < 1.0):
                errors.append(f"Perk '{perk_id}' 'goldGrowth' must be a number >= 1.")

    consumables_raw = data.get("consumables", [])
    if not isinstance(consumables_raw, list):
        errors.append("Catalog 'consumables' must be an array.")
    else:
        seen = set()
        for idx, entry in enumerate(consumables_raw, start=1):
            item_id = _check_entry(errors, "Consumable", idx, entry, seen)
            if item_id is None:
                continue
            duration = entry.get("durationActions")
            if not isinstance(duration, int) or isinstance(duration, bool) or duration <= 0:
                errors.append(
                    f"Consumable '{item_id}' has invalid 'durationActions' value '{duration}'."
                )
            _check_effect(errors, "Consumable", item_id, entry.get("effect"), BuffEffect)
            _check_weight(errors, "Consumable", item_id, entry.get("weight"))
            _check_cost(errors, "Consumable", item_id, entry.get("cost"))

    return errors


def _check_entry(
    errors: list[str], kind: str, idx: int, entry: Any, seen: set[str]
) -> str | None:
    if not isinstance(entry, dict):
        errors.append(f"{kind} #{idx} must be an object.")
        return None
    entry_id = entry.get("id")
    if not isinstance(entry_id, str) or not entry_id.strip():
        errors.append(f"{kind} #{idx} must define non-empty 'id'.")
        return None
    if entry_id in seen:
        errors.append(f"{kind} id '{entry_id}' defined multiple times.")
    seen.add(entry_id)
    return entry_id


def _check_effect(errors: list[str], kind: str, entry_id: str, value: Any, enum: type) -> None:
    try:
        enum(value)
    except ValueError:
        errors.append(f"{kind} '{entry_id}' has invalid effect '{value}'.")


def _check_weight(errors: list[str], kind: str, entry_id: str, value: Any) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool) or float(value) < 0:
        errors.append(f"{kind} '{entry_id}' 'weight' must be a non-negative number.")


def _check_cost(errors: list[str], kind: str, entry_id: str, cost: Any) -> None:
    if not isinstance(cost, dict):
        errors.append(f"{kind} '{entry_id}' must define 'cost' object.")
        return
    for currency in ("gold", "shards"):
        amount = cost.get(currency, 0)
        if not isinstance(amount, int) or isinstance(amount, bool) or amount < 0:
            errors.append(
                f"{kind} '{entry_id}' cost '{currency}' must be non-negative integer."
            )


def _format_errors(prefix: str, errors: Iterable[str]) -> str:
    formatted = "\n".join(f"- {err}" for err in errors)
    return f"{prefix}:\n{formatted}"
