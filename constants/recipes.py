"""
Recipe Constants

Season and weather defaults per recipe category, and the default tag set.
"""

# Category -> defaults applied to imported recipes
CATEGORY_DEFAULTS = {
    'curry': {'seasons': ['herfst', 'winter'], 'weather_tags': ['koud', 'regenachtig']},
    'soep': {'seasons': ['herfst', 'winter'], 'weather_tags': ['koud', 'regenachtig']},
    'salade': {'seasons': ['lente', 'zomer'], 'weather_tags': ['warm', 'zonnig']},
    'pokebowl': {'seasons': ['lente', 'zomer'], 'weather_tags': ['warm', 'zonnig']},
    'pasta': {'seasons': ['lente', 'zomer', 'herfst', 'winter'], 'weather_tags': []},
    'wraps': {'seasons': ['lente', 'zomer'], 'weather_tags': ['warm']},
    'plaattaart': {'seasons': ['herfst', 'winter'], 'weather_tags': ['koud']},
    'shakshuka': {'seasons': ['lente', 'zomer', 'herfst', 'winter'], 'weather_tags': []},
}

DEFAULT_TAGS = {
    'diet': ['vegetarisch', 'veganistisch', 'met-vis', 'met-vlees'],
    'difficulty': ['makkelijk', 'gemiddeld'],
    'cuisine': ['aziatisch', 'italiaans', 'hollands', 'indiaas', 'mediterraans', 'mexicaans'],
    'mood': ['comfortfood', 'gezond', 'doordeweeks', 'snel-klaar'],
    'meal_type': ['lunch', 'diner'],
}

# Weekday names indexed by date.weekday() (Monday == 0)
DAY_NAMES = ['maandag', 'dinsdag', 'woensdag', 'donderdag', 'vrijdag', 'zaterdag', 'zondag']
