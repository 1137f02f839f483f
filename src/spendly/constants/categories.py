"""
Default expense categories offered to every new user.
The ids are stable: budgets and the categorization service refer to them.
"""

from __future__ import annotations

from ..models.category import Category

DEFAULT_CATEGORIES = [
    {"id": "food", "name": "Food & Dining", "icon": "restaurant", "emoji": "🍕", "color": "#FF6B6B"},
    {"id": "transport", "name": "Transport", "icon": "directions-car", "emoji": "🚗", "color": "#4ECDC4"},
    {"id": "books", "name": "Books & Study", "icon": "book", "emoji": "📚", "color": "#45B7D1"},
    {"id": "entertainment", "name": "Entertainment", "icon": "movie", "emoji": "🎬", "color": "#96CEB4"},
    {"id": "shopping", "name": "Shopping", "icon": "shopping-bag", "emoji": "🛍️", "color": "#FFEAA7"},
    {"id": "health", "name": "Health & Fitness", "icon": "fitness-center", "emoji": "💊", "color": "#DDA0DD"},
    {"id": "rent", "name": "Rent & Bills", "icon": "home", "emoji": "🏠", "color": "#FF7675"},
    {"id": "personal", "name": "Personal Care", "icon": "person", "emoji": "💄", "color": "#FDCB6E"},
    {"id": "technology", "name": "Technology", "icon": "phone-android", "emoji": "📱", "color": "#74B9FF"},
    {"id": "misc", "name": "Miscellaneous", "icon": "more-horiz", "emoji": "📦", "color": "#A29BFE"},
]

DEFAULT_CATEGORY_IDS = [entry["id"] for entry in DEFAULT_CATEGORIES]


def default_categories() -> list[Category]:
    """Return fresh Category rows for seeding a store."""
    return [Category(**entry) for entry in DEFAULT_CATEGORIES]
