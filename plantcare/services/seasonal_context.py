"""
Seasonal context service.

Determines the meteorological season for a location and supplies the short
care tips shown alongside weather alerts.
"""

from datetime import date, datetime
from typing import Dict, List, Optional, Union

from plantcare.constants import SEASONS

SEASON_EMOJI = {
    "spring": "🌱",
    "summer": "☀️",
    "autumn": "🍂",
    "winter": "❄️",
}

SEASONAL_TIPS: Dict[str, List[str]] = {
    "spring": [
        "Resume regular fertilizing schedule",
        "Good time to repot root-bound plants",
        "Increase watering as plants grow",
        "Watch for new pest activity",
    ],
    "summer": [
        "Water more frequently in heat",
        "Provide shade for sensitive plants",
        "Check soil moisture daily",
        "Best time for outdoor plants",
    ],
    "autumn": [
        "Reduce watering frequency",
        "Bring tropical plants inside before frost",
        "Last chance to fertilize before winter",
        "Clean up fallen leaves",
    ],
    "winter": [
        "Most plants need less water",
        "Keep plants away from cold drafts",
        "Pause fertilizing for most plants",
        "Increase humidity for indoor plants",
    ],
}


def get_current_season(latitude: float, when: Optional[Union[date, datetime]] = None) -> str:
    """
    Determine current season based on date and hemisphere.

    Args:
        latitude: Location latitude (negative = Southern Hemisphere)
        when: Date to evaluate (defaults to today)

    Returns:
        Season name: 'winter', 'spring', 'summer', 'autumn'
    """
    month = (when or datetime.now()).month

    # SEASONS starts with winter: Dec-Feb -> 0, Mar-May -> 1, ...
    index = (month % 12) // 3

    # Southern Hemisphere is two seasons ahead
    if latitude < 0:
        index = (index + 2) % len(SEASONS)

    return SEASONS[index]


def get_seasonal_tips(season: str) -> List[str]:
    """Care tips for a season (empty list for an unknown season)."""
    return list(SEASONAL_TIPS.get(season, []))
