"""Display lookups that sit outside the filter engine."""

DEFAULT_CATEGORY_ICON = "📍"

CATEGORY_ICONS = {
    "Outdoor/Tour": "🌊",
    "Entertainment": "🎭",
    "Food & Drink": "🍽️",
    "Team Building": "🤝",
    "Outdoor/Adventure": "🚴",
    "Culture/Arts": "🎨",
    "Sports/Tour": "⚾",
    "Outdoor/Team Building": "🦁",
    "Entertainment/Tour": "🎪",
    "Team Building/Culture": "🏛️",
    "Outdoor/Creative": "📸",
    "Entertainment/Adventure": "🪓",
    "Team Building/Urban": "🏙️",
}


def category_icon(category: str) -> str:
    return CATEGORY_ICONS.get(category, DEFAULT_CATEGORY_ICON)
