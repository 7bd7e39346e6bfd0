"""Validation utilities for RewardForge applications."""

from __future__ import annotations

from .app import RewardApp


def validate_app(app: RewardApp) -> list[str]:
    """Return list of validation errors discovered in configured app."""
    errors: list[str] = []

    perks = list(app.catalog.iter_perks())
    if not perks:
        errors.append("No perks registered in catalog.")
    for perk in perks:
        if perk.max_level <= 0:
            errors.append(f"Perk '{perk.perk_id}' has non-positive maxLevel '{perk.max_level}'.")
        if perk.gold_cost < 0 or perk.shard_cost < 0:
            errors.append(f"Perk '{perk.perk_id}' has a negative cost.")
        if perk.effect_weight < 0:
            errors.append(f"Perk '{perk.perk_id}' has negative effect weight '{perk.effect_weight}'.")

    for item in app.catalog.iter_consumables():
        if item.duration_actions <= 0:
            errors.append(
                f"Consumable '{item.item_id}' has non-positive duration '{item.duration_actions}'."
            )
        if item.gold_cost < 0 or item.shard_cost < 0:
            errors.append(f"Consumable '{item.item_id}' has a negative cost.")

    balance = app.config.balance
    if balance.combo_window_seconds <= 0:
        errors.append("Balance 'combo_window_seconds' must be positive.")
    if not 0 <= balance.crit_chance_cap <= 1:
        errors.append("Balance 'crit_chance_cap' must lie within [0, 1].")
    if balance.crit_multiplier < 1:
        errors.append("Balance 'crit_multiplier' must be at least 1.")
    if balance.xp_per_gold <= 0:
        errors.append("Balance 'xp_per_gold' must be positive.")
    if balance.daily_target <= 0 or balance.weekly_target <= 0:
        errors.append("Balance daily and weekly targets must be positive.")
    if any(interval <= 0 for interval in balance.shard_siphon_intervals):
        errors.append("Balance 'shard_siphon_intervals' must contain positive values.")

    return errors


__all__ = ["validate_app"]
