"""Modules intégrés — gabarits copiés (avec un id neuf) à l'insertion."""
from typing import List

from ..core.schemas import Module

BUILTIN_MODULES: List[Module] = [
    Module(
        id="hero",
        name="Hero",
        description="Bandeau titre + sous-titre + bouton",
        icon="🎨",
        category="Content",
        tags=["hero", "banner", "header"],
        default_props={"title": "Welcome", "subtitle": "", "ctaLabel": "", "ctaHref": "#"},
    ),
    Module(
        id="text",
        name="Text",
        description="Bloc de texte libre",
        icon="📝",
        category="Content",
        tags=["text", "content"],
        default_props={"content": ""},
    ),
    Module(
        id="speakers",
        name="Speakers",
        description="Intervenants et invités d'honneur",
        icon="🎤",
        category="Events",
        tags=["speakers", "people", "event"],
        default_props={"title": "Speakers", "limit": 8},
    ),
    Module(
        id="tickets",
        name="Tickets",
        description="Billets disponibles et leurs éditions",
        icon="🎫",
        category="Events",
        tags=["tickets", "pricing", "event"],
        default_props={"title": "Tickets"},
    ),
    Module(
        id="events",
        name="Events",
        description="Liste des événements publiés",
        icon="📅",
        category="Events",
        tags=["events", "calendar"],
        default_props={"title": "Events", "layout": "grid"},
    ),
    Module(
        id="upcoming_events",
        name="Upcoming Events",
        description="Événements à la une",
        icon="⏰",
        category="Events",
        tags=["events", "featured", "upcoming"],
        default_props={"title": "Upcoming Events", "limit": 3},
    ),
]
