"""
Seasonal care tips.

Seasons follow the southern hemisphere calendar: March-May autumn,
June-August winter, September-November spring, December-February summer.
"""

from datetime import date

from ..models.garden import SeasonalTip

SEASONAL_TIPS = {
    "summer": "Water more attentively! Heat speeds up evaporation. Shield plants from strong midday sun.",
    "autumn": "A good time for cleanup pruning and for getting plants ready for the cold. Cut back on fertilizing.",
    "winter": "Most plants go dormant. Water much less to keep roots from rotting.",
    "spring": "Growing season! Increase watering and resume fertilizing to power new shoots.",
}


def season_for(day: date) -> str:
    if 3 <= day.month <= 5:
        return "autumn"
    if 6 <= day.month <= 8:
        return "winter"
    if 9 <= day.month <= 11:
        return "spring"
    return "summer"


def seasonal_tip(day: date) -> SeasonalTip:
    season = season_for(day)
    return SeasonalTip(season=season, tip=SEASONAL_TIPS[season])
