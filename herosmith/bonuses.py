from __future__ import annotations

from typing import Dict, Mapping

from herosmith.catalog import Catalog
from herosmith.rules_core import ABILITY_ORDER


def apply_bonuses(
    base: Mapping[str, int],
    race_id: str | None,
    subrace_id: str | None,
    catalog: Catalog,
) -> Dict[str, int]:
    """Base scores + race bonus + subrace bonus, per ability.

    An unknown race or subrace id contributes nothing. Not cached: race,
    subrace and base scores all change independently while the wizard runs.
    """
    final = {k: base.get(k, 10) for k in ABILITY_ORDER}
    race = catalog.race(race_id)
    subrace = catalog.subrace(subrace_id)
    for table in (race.ability_bonuses if race else {}, subrace.ability_bonuses if subrace else {}):
        for ability, delta in table.items():
            if ability in final:
                final[ability] += delta
    return final


__all__ = ["apply_bonuses"]
