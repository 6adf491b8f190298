"""Message lookup by key.

The engine only ever hands out keys plus positional arguments; rendering
happens here (or in whatever front-end replaces this module).
"""
from __future__ import annotations

from typing import Dict

DEFAULT_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "wizard.step": "Step {0} of {1}",
        "wizard.step.race": "Choose a race",
        "wizard.step.class": "Choose a class",
        "wizard.step.abilities": "Ability scores",
        "wizard.step.identity": "Name and background",
        "wizard.step.spells": "Spells",
        "wizard.step.equipment": "Skills and equipment",
        "wizard.step.summary": "Summary",
        "wizard.resume": "A character in progress was found (step {0}). Continue?",
        "wizard.created": "Created {0}",
        "wizard.none": "No character created.",
        "wizard.action": "[n]ext, [b]ack, [c]ancel",
        "prompt.race": "Race",
        "prompt.subrace": "Subrace (blank for none)",
        "prompt.class": "Class",
        "prompt.subclass": "Subclass (blank for none)",
        "prompt.mode": "Mode ({0})",
        "prompt.roll_again": "Roll again?",
        "prompt.rolled": "Rolled: {0}",
        "prompt.points": "  points remaining: {0}",
        "prompt.rejected": "  {0} rejected for {1}",
        "prompt.name": "Name",
        "prompt.background": "Background (blank for none)",
        "prompt.spells": "Pick {0} spells (comma separated)",
        "prompt.skipped": "  skipped {0}",
        "prompt.skills": "Pick {0} skills (comma separated)",
        "prompt.expertise": "Pick {0} expertise skills",
        "prompt.equipment": "Equipment: {0}",
        "prompt.unknown": "Unknown choice: {0}",
        "prompt.expected": "Expected one of: {0}",
        "quick.missing": "--quick needs --race and --class.",
        "error.race.required": "Choose a race to continue.",
        "error.subrace.invalid": "Subrace {0} does not belong to the chosen race.",
        "error.class.required": "Choose a class to continue.",
        "error.subclass.invalid": "Subclass {0} does not belong to the chosen class.",
        "error.abilities.incomplete": "Finish assigning ability scores ({0}).",
        "error.abilities.budget": "Point buy is over budget: {0} of {1} points spent.",
        "error.name.required": "Enter a name.",
        "error.spells.count": "Select exactly {0} spells ({1} selected).",
        "error.spells.invalid": "{0} is not available to your class.",
        "error.skills.count": "Select {0} skills ({1} selected).",
        "error.skills.invalid": "{0} is not a skill choice for your class.",
        "error.expertise.count": "Select exactly {0} expertise skills ({1} selected).",
        "error.expertise.subset": "Expertise in {0} requires proficiency in it.",
        "error.character.invalid": "Character {0} is invalid.",
    },
    "es": {
        "wizard.step": "Paso {0} de {1}",
        "wizard.step.race": "Elige una raza",
        "wizard.step.class": "Elige una clase",
        "wizard.step.abilities": "Puntuación de características",
        "wizard.step.identity": "Nombre y trasfondo",
        "wizard.step.spells": "Conjuros",
        "wizard.step.equipment": "Habilidades y equipo",
        "wizard.step.summary": "Resumen",
        "wizard.resume": "Hay un personaje a medias (paso {0}). ¿Continuar?",
        "wizard.created": "Creado {0}",
        "wizard.none": "No se creó ningún personaje.",
        "wizard.action": "[n] siguiente, [b] atrás, [c] cancelar",
        "prompt.race": "Raza",
        "prompt.subrace": "Subraza (vacío para ninguna)",
        "prompt.class": "Clase",
        "prompt.subclass": "Subclase (vacío para ninguna)",
        "prompt.mode": "Modo ({0})",
        "prompt.roll_again": "¿Tirar de nuevo?",
        "prompt.rolled": "Tirada: {0}",
        "prompt.points": "  puntos restantes: {0}",
        "prompt.rejected": "  {0} rechazado para {1}",
        "prompt.name": "Nombre",
        "prompt.background": "Trasfondo (vacío para ninguno)",
        "prompt.spells": "Elige {0} conjuros (separados por comas)",
        "prompt.skipped": "  omitido {0}",
        "prompt.skills": "Elige {0} habilidades (separadas por comas)",
        "prompt.expertise": "Elige {0} habilidades de experticia",
        "prompt.equipment": "Equipo: {0}",
        "prompt.unknown": "Opción desconocida: {0}",
        "prompt.expected": "Se esperaba una de: {0}",
        "quick.missing": "--quick necesita --race y --class.",
        "error.subrace.invalid": "La subraza {0} no pertenece a la raza elegida.",
        "error.subclass.invalid": "La subclase {0} no pertenece a la clase elegida.",
        "error.abilities.budget": "La compra por puntos excede el presupuesto: {0} de {1} puntos gastados.",
        "error.spells.invalid": "{0} no está disponible para tu clase.",
        "error.skills.invalid": "{0} no es una habilidad elegible para tu clase.",
        "error.expertise.subset": "La experticia en {0} requiere competencia en ella.",
        "error.character.invalid": "El personaje {0} no es válido.",
        "error.race.required": "Elige una raza para continuar.",
        "error.class.required": "Elige una clase para continuar.",
        "error.abilities.incomplete": "Termina de asignar las características ({0}).",
        "error.name.required": "Introduce un nombre.",
        "error.spells.count": "Selecciona exactamente {0} conjuros ({1} seleccionados).",
        "error.skills.count": "Selecciona {0} habilidades ({1} seleccionadas).",
        "error.expertise.count": "Selecciona exactamente {0} experticias ({1} seleccionadas).",
    },
}


def translate(key: str, *args: object, locale: str = DEFAULT_LOCALE) -> str:
    """Look ``key`` up in ``locale``, falling back to English, then the key itself."""
    template = MESSAGES.get(locale, {}).get(key) or MESSAGES[DEFAULT_LOCALE].get(key)
    if template is None:
        return key
    try:
        return template.format(*args)
    except (IndexError, KeyError):
        return template


__all__ = ["DEFAULT_LOCALE", "MESSAGES", "translate"]
